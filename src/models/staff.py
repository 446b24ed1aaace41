"""Staff and session user models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator


class Role(str, Enum):
    """Fixed roles; ADMIN only exists through the configured credential."""

    ADMIN = "ADMIN"
    STAFF = "STAFF"


class StaffMember(BaseModel):
    """Staff document. The password is stored in plaintext, as the source system does."""

    id: str
    username: str
    password: str
    role: Role = Role.STAFF

    def summary(self) -> "StaffSummary":
        return StaffSummary(id=self.id, username=self.username, role=self.role)


class StaffSummary(BaseModel):
    """Staff listing entry without the password."""

    id: str
    username: str
    role: Role


class StaffCreate(BaseModel):
    """Payload for creating a staff member."""

    username: str
    password: str

    @field_validator("username", "password")
    @classmethod
    def validate_required(cls, value: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("username and password must be provided")
        return cleaned


class StaffUpdate(BaseModel):
    """Partial staff update."""

    username: Optional[str] = None
    password: Optional[str] = None

    @field_validator("username", "password")
    @classmethod
    def validate_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("username and password cannot be blank")
        return cleaned
