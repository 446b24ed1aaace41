"""Customer models.

Stored documents use camelCase attribute names; Python code uses the
snake_case field names. Both are accepted on input.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from utils.calendar_math import is_valid_event_day

UNASSIGNED_STAFF_NAME = "Unassigned"


class EventType(str, Enum):
    """Annual events we celebrate with customers."""

    BIRTHDAY = "BIRTHDAY"
    ANNIVERSARY = "ANNIVERSARY"


class CustomerStatus(str, Enum):
    """Lifecycle status kept on the customer document."""

    PENDING = "PENDING"
    WISHED = "WISHED"


class Tracking(BaseModel):
    """Completion flags, one per milestone. Flags only ever go from False to True."""

    model_config = ConfigDict(populate_by_name=True)

    messaged: bool = False
    called: bool = False
    greeted: bool = False
    followed_up: bool = Field(default=False, alias="followedUp")

    def all_done(self) -> bool:
        return self.messaged and self.called and self.greeted and self.followed_up


class Customer(BaseModel):
    """Customer snapshot as read from the store."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    phone: str
    event_type: EventType = Field(alias="eventType")
    day: int = Field(ge=1, le=31)
    month: int = Field(ge=0, le=11, description="0 = January")
    assigned_staff_id: str = Field(default="", alias="assignedStaffId")
    assigned_staff_name: str = Field(default=UNASSIGNED_STAFF_NAME, alias="assignedStaffName")
    status: CustomerStatus = CustomerStatus.PENDING
    tracking: Tracking = Field(default_factory=Tracking)

    @model_validator(mode="after")
    def validate_event_day(self) -> "Customer":
        if not is_valid_event_day(self.day, self.month):
            raise ValueError(f"day {self.day} does not exist in month {self.month}")
        return self

    def to_item(self) -> dict:
        """Serialize to the stored document shape."""
        return self.model_dump(mode="json", by_alias=True)


class CustomerCreate(BaseModel):
    """Payload for registering a customer."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    phone: str
    event_type: EventType = Field(alias="eventType")
    day: int = Field(ge=1, le=31)
    month: int = Field(ge=0, le=11)
    assigned_staff_id: Optional[str] = Field(default=None, alias="assignedStaffId")

    @field_validator("name", "phone")
    @classmethod
    def validate_required(cls, value: str) -> str:
        """Reject blank strings before anything reaches the store."""
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("name and phone must be provided")
        return cleaned

    @model_validator(mode="after")
    def validate_event_day(self) -> "CustomerCreate":
        if not is_valid_event_day(self.day, self.month):
            raise ValueError(f"day {self.day} does not exist in month {self.month}")
        return self


class CustomerUpdate(BaseModel):
    """Partial update; only fields that are set get written."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    event_type: Optional[EventType] = Field(default=None, alias="eventType")
    day: Optional[int] = Field(default=None, ge=1, le=31)
    month: Optional[int] = Field(default=None, ge=0, le=11)
    assigned_staff_id: Optional[str] = Field(default=None, alias="assignedStaffId")

    @field_validator("name", "phone")
    @classmethod
    def validate_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("name and phone cannot be blank")
        return cleaned
