"""Read-only summaries for the dashboards."""

from __future__ import annotations

from typing import Iterable, List

from models.customer import Customer
from models.milestone import Milestone, MonthlyCount
from models.staff import StaffMember, StaffSummary
from utils.calendar_math import MONTHS


def monthly_distribution(customers: Iterable[Customer]) -> List[MonthlyCount]:
    """Customer count per event month, one entry per calendar month."""
    counts = [0] * len(MONTHS)
    for customer in customers:
        counts[customer.month] += 1
    return [
        MonthlyCount(month=idx, name=name[:3], count=counts[idx])
        for idx, name in enumerate(MONTHS)
    ]


def staff_listing(staff: Iterable[StaffMember]) -> List[StaffSummary]:
    """Staff by username, passwords stripped."""
    return [member.summary() for member in sorted(staff, key=lambda s: s.username)]


def customer_listing(customers: Iterable[Customer]) -> List[dict]:
    """Customers in calendar order, as rows for the admin table."""
    rows = []
    for customer in sorted(customers, key=lambda c: (c.month, c.day)):
        rows.append(
            {
                "id": customer.id,
                "name": customer.name,
                "phone": customer.phone,
                "event_type": customer.event_type.value,
                "day": customer.day,
                "month": customer.month,
                "month_name": MONTHS[customer.month],
                "assigned_staff_id": customer.assigned_staff_id,
                "assigned_staff_name": customer.assigned_staff_name,
                "status": customer.status.value,
            }
        )
    return rows


def customer_history(customers: Iterable[Customer]) -> List[dict]:
    """Per-customer milestone completion, for a staff member's customer list."""
    return [
        {
            "id": customer.id,
            "name": customer.name,
            "event_type": customer.event_type.value,
            "day": customer.day,
            "month_name": MONTHS[customer.month],
            "milestones": {m.value: m.is_done(customer.tracking) for m in Milestone},
        }
        for customer in customers
    ]
