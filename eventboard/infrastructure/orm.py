"""SQLAlchemy rows for the 'users' and 'events' tables."""

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func

from eventboard.core.security import ensure_password_hash
from eventboard.domain.models.event import EventCategory
from eventboard.domain.models.user import Gender, Role
from eventboard.infrastructure.database import Base


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class UserRow(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)  # NULL for invited/pending accounts
    role = Column(
        Enum(Role, name="user_role", values_callable=_enum_values),
        nullable=False,
        default=Role.USER,
    )
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    middle_name = Column(String(100), nullable=True)
    gender = Column(Enum(Gender, name="user_gender", values_callable=_enum_values), nullable=True)
    birth_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    events = relationship("EventRow", back_populates="creator", passive_deletes=True)

    @validates("password_hash")
    def _hash_on_assign(self, key, value):
        return ensure_password_hash(value)

    def __repr__(self):
        return f"<UserRow {self.email}>"


class EventRow(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    category = Column(
        Enum(EventCategory, name="event_category", values_callable=_enum_values),
        nullable=False,
        index=True,
    )
    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    creator = relationship("UserRow", back_populates="events", lazy="joined")

    @validates("created_by")
    def _creator_is_fixed(self, key, value):
        if self.created_by is not None and value != self.created_by:
            raise ValueError("created_by cannot be changed once set")
        return value

    def __repr__(self):
        return f"<EventRow {self.id} - {self.title}>"
