"""Pydantic models for stored documents and derived views."""

from models.customer import (  # noqa: F401
    Customer,
    CustomerCreate,
    CustomerStatus,
    CustomerUpdate,
    EventType,
    Tracking,
)
from models.milestone import Milestone, MonthlyCount, OverdueAlert, StaffTask  # noqa: F401
from models.session import LoginRequest, SessionContext, SessionUser  # noqa: F401
from models.staff import Role, StaffCreate, StaffMember, StaffSummary, StaffUpdate  # noqa: F401
