"""
Milestone due-date engine.

Pure functions over customer snapshots: nothing here reads the store or keeps
state between calls, so the same (customers, today) always gives the same
output in the same order.

Staff and admin see overdue-ness differently. Staff get a task from the due
day onward (flagged overdue once the day has passed); admin alerts only fire
once a milestone is at least one day late.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional, Union

from models.customer import Customer
from models.milestone import Milestone, OverdueAlert, StaffTask
from models.staff import Role
from utils.calendar_math import anchored_event_date

Evaluation = Union[StaffTask, OverdueAlert]

# How far the milestone windows reach before and after the event day.
LEAD_DAYS = -min(m.offset_days for m in Milestone)
TRAIL_DAYS = max(m.offset_days for m in Milestone)


def _event_date(customer: Customer, today: date) -> date:
    return anchored_event_date(today, customer.month, customer.day, LEAD_DAYS, TRAIL_DAYS)


def milestone_target(customer: Customer, milestone: Milestone, today: date) -> date:
    """Due date of one milestone for the event occurrence that applies on ``today``."""
    event_date = _event_date(customer, today)
    return event_date + timedelta(days=milestone.offset_days)


def evaluate_customer(customer: Customer, today: date, mode: Role) -> List[Evaluation]:
    """Evaluate the four milestones of one customer, in fixed order."""
    event_date = _event_date(customer, today)
    results: List[Evaluation] = []

    for milestone in Milestone:
        if milestone.is_done(customer.tracking):
            continue
        target = event_date + timedelta(days=milestone.offset_days)

        if mode == Role.STAFF:
            if today >= target:
                results.append(
                    StaffTask(
                        customer=customer,
                        milestone=milestone,
                        target_date=target,
                        is_overdue=today > target,
                    )
                )
        elif today > target:
            results.append(
                OverdueAlert(
                    customer_id=customer.id,
                    customer_name=customer.name,
                    staff_name=customer.assigned_staff_name,
                    milestone=milestone,
                    target_date=target,
                    days_late=(today - target).days,
                    day=customer.day,
                    month=customer.month,
                )
            )
    return results


def staff_tasks(customers: Iterable[Customer], today: date, staff_id: str) -> List[StaffTask]:
    """Pending tasks for one staff member, in customer order."""
    tasks: List[StaffTask] = []
    for customer in customers:
        if customer.assigned_staff_id != staff_id:
            continue
        tasks.extend(evaluate_customer(customer, today, Role.STAFF))
    return tasks


def overdue_alerts(customers: Iterable[Customer], today: date) -> List[OverdueAlert]:
    """Every missed milestone across all customers, in customer order."""
    alerts: List[OverdueAlert] = []
    for customer in customers:
        alerts.extend(evaluate_customer(customer, today, Role.ADMIN))
    return alerts


def evaluate_all(
    customers: Iterable[Customer],
    today: date,
    viewer_role: Role,
    viewer_id: Optional[str] = None,
) -> List[Evaluation]:
    """Role-scoped view: staff see their own tasks, admin sees all alerts."""
    if viewer_role == Role.STAFF:
        if not viewer_id:
            raise ValueError("viewer_id is required for the staff view")
        return list(staff_tasks(customers, today, viewer_id))
    return list(overdue_alerts(customers, today))
