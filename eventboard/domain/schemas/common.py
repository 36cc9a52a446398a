"""
Building blocks shared by the request schemas.

Field validators raise `invalid(...)` so clients see the message as written,
without pydantic's "Value error, " prefix. Passing `field` files the error
under that key instead of the field's own location.
"""

from datetime import date, datetime, timezone
from typing import Any, ClassVar, Dict, Optional, Tuple

from pydantic import BaseModel, model_validator
from pydantic_core import PydanticCustomError

NO_VALID_FIELDS = "No valid fields provided for update or invalid fields were sent."


def invalid(message: str, field: Optional[str] = None) -> PydanticCustomError:
    return PydanticCustomError("invalid_field", message, {"field": field} if field else None)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse ISO-8601 input into an aware UTC datetime. Naive input is UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # Parses, but lands outside datetime's range once shifted to UTC
        return None


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            parsed = parse_datetime(value)
            return parsed.date() if parsed else None
    return None


class UpdateRequest(BaseModel):
    """Partial update body.

    Absent fields are left alone. Keys that are not fields are kept in
    `model_extra` so an empty body and a body of unknown keys can be told
    apart. Keys named in `protected_fields` reject the whole request.
    """

    model_config = {"extra": "allow"}

    protected_fields: ClassVar[Tuple[str, ...]] = ()
    protected_message: ClassVar[str] = ""

    def changes(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in type(self).model_fields if name in self.model_fields_set}

    @model_validator(mode="after")
    def require_changes(self):
        extra = self.model_extra or {}
        if any(key in extra for key in self.protected_fields):
            raise invalid(self.protected_message, field="general")
        if not self.changes():
            if extra:
                raise invalid(NO_VALID_FIELDS, field="general")
            raise invalid(
                "Request body is empty. Provide at least one field to update ({}).".format(
                    ", ".join(type(self).model_fields)
                ),
                field="general",
            )
        return self
