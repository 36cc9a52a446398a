"""User domain record."""

import enum
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


@dataclass
class User:
    email: str
    name: str
    role: Role = Role.USER
    password_hash: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    gender: Optional[Gender] = None
    birth_date: Optional[date] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __repr__(self):
        return f"<User {self.email}>"
