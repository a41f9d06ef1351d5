from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.models.bootcamp import EMAIL_PATTERN


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of an operation."""
    id: str
    role: Role

    @property
    def is_admin(self):
        return self.role == Role.ADMIN


class User(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    role: Role = Role.USER


class UserCreate(User):
    model_config = ConfigDict(extra="forbid")


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None


def user_to_dict(user):
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }
