"""Pydantic schemas for Event requests and responses."""

from datetime import datetime, timezone
from typing import Any, ClassVar, Optional, Tuple

from pydantic import BaseModel, field_validator

from eventboard.domain.models.event import EventCategory
from eventboard.domain.schemas.common import UpdateRequest, invalid, is_blank, parse_datetime

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 2000

CATEGORY_CHOICES = ", ".join(EventCategory.values())


class EventFields(BaseModel):
    """Rules shared by event create and update bodies."""

    @field_validator("title", mode="before", check_fields=False)
    @classmethod
    def validate_title(cls, value: Any) -> str:
        if is_blank(value):
            raise invalid("Title is required.")
        if not isinstance(value, str) or not TITLE_MIN_LENGTH <= len(value.strip()) <= TITLE_MAX_LENGTH:
            raise invalid(f"Event title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters.")
        return value.strip()

    @field_validator("description", mode="before", check_fields=False)
    @classmethod
    def validate_description(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str):
            raise invalid("Description must be a string.")
        if len(value) > DESCRIPTION_MAX_LENGTH:
            raise invalid(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters.")
        return value

    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def validate_date(cls, value: Any) -> datetime:
        if is_blank(value):
            raise invalid("Date is required.")
        parsed = parse_datetime(value)
        if parsed is None:
            raise invalid("Invalid date format provided.")
        if parsed <= datetime.now(timezone.utc):
            raise invalid("Event date must be in the future.")
        return parsed

    @field_validator("category", mode="before", check_fields=False)
    @classmethod
    def validate_category(cls, value: Any) -> EventCategory:
        if is_blank(value):
            raise invalid("Category is required.")
        try:
            return EventCategory(value)
        except (ValueError, TypeError):
            raise invalid(f"Invalid category selected. Must be one of: {CATEGORY_CHOICES}.")


class EventCreate(EventFields):
    title: str
    description: Optional[str] = None
    date: datetime
    category: EventCategory


class EventUpdate(EventFields, UpdateRequest):
    protected_fields: ClassVar[Tuple[str, ...]] = ("id", "created_by")
    protected_message: ClassVar[str] = (
        "Cannot modify event ID or creator (created_by) field via request body."
    )

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    category: Optional[EventCategory] = None


class CreatorRead(BaseModel):
    id: int
    name: str
    role: str

    model_config = {"from_attributes": True}


class EventRead(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    date: datetime
    category: EventCategory
    created_by: int
    created_at: Optional[datetime] = None
    creator: Optional[CreatorRead] = None

    model_config = {"from_attributes": True}


class EventResponse(BaseModel):
    data: EventRead


class EventListResponse(BaseModel):
    count: int
    data: list[EventRead]


class CategoryList(BaseModel):
    categories: list[str]


class CategoryResponse(BaseModel):
    data: CategoryList
