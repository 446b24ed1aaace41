"""Milestone definitions and the derived task/alert views."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel

from models.customer import Customer, Tracking


class MilestoneRule(NamedTuple):
    offset_days: int
    tracking_field: str
    stored_field: str
    label: str
    action_label: str
    drafts_wish: bool


class Milestone(str, Enum):
    """Relationship touchpoints around an event, in the order they fall due."""

    MESSAGE = "MESSAGE"
    CALL = "CALL"
    GREET = "GREET"
    FOLLOWUP = "FOLLOWUP"

    @property
    def rule(self) -> MilestoneRule:
        return MILESTONE_RULES[self]

    @property
    def offset_days(self) -> int:
        return self.rule.offset_days

    @property
    def label(self) -> str:
        return self.rule.label

    @property
    def action_label(self) -> str:
        return self.rule.action_label

    @property
    def drafts_wish(self) -> bool:
        return self.rule.drafts_wish

    def is_done(self, tracking: Tracking) -> bool:
        return getattr(tracking, self.rule.tracking_field)


MILESTONE_RULES = {
    Milestone.MESSAGE: MilestoneRule(-7, "messaged", "messaged", "1st Reminder", "MESSAGE customer", True),
    Milestone.CALL: MilestoneRule(-3, "called", "called", "Tele Call", "TELE CALL customer", False),
    Milestone.GREET: MilestoneRule(0, "greeted", "greeted", "Big Day Greet", "GREET ON BIG DAY", True),
    Milestone.FOLLOWUP: MilestoneRule(2, "followed_up", "followedUp", "Follow Up", "FOLLOW UP reminder", False),
}


class StaffTask(BaseModel):
    """A milestone a staff member should act on today (or should have already)."""

    customer: Customer
    milestone: Milestone
    target_date: date
    is_overdue: bool

    def to_view(self) -> dict:
        return {
            "customer_id": self.customer.id,
            "customer_name": self.customer.name,
            "phone": self.customer.phone,
            "event_type": self.customer.event_type.value,
            "day": self.customer.day,
            "month": self.customer.month,
            "milestone": self.milestone.value,
            "label": self.milestone.label,
            "action_label": self.milestone.action_label,
            "drafts_wish": self.milestone.drafts_wish,
            "target_date": self.target_date.isoformat(),
            "is_overdue": self.is_overdue,
        }


class OverdueAlert(BaseModel):
    """A missed milestone surfaced to the admin."""

    customer_id: str
    customer_name: str
    staff_name: str
    milestone: Milestone
    target_date: date
    days_late: int
    day: int
    month: int


class MonthlyCount(BaseModel):
    """Customers whose event falls in one calendar month."""

    month: int
    name: str
    count: int
