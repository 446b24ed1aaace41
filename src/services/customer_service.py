"""
Customer administration.

Registers, edits and removes customers. All validation happens before the
store is touched; the tracking map is only ever written by the tracking
service.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from models.customer import (
    UNASSIGNED_STAFF_NAME,
    Customer,
    CustomerCreate,
    CustomerStatus,
    CustomerUpdate,
    Tracking,
)
from repositories.customer_repo import CustomerRepository
from repositories.staff_repo import StaffRepository
from services.snapshot_feed import CUSTOMERS, SnapshotFeed
from utils.calendar_math import is_valid_event_day
from utils.error_handling import NotFoundError, ValidationError
from utils.logging_config import get_logger
from utils.validators import ensure_present

logger = get_logger(__name__)


class CustomerService:
    """Service for customer records."""

    def __init__(
        self,
        customers: CustomerRepository,
        staff: StaffRepository,
        feed: Optional[SnapshotFeed] = None,
    ):
        self.customers = customers
        self.staff = staff
        self.feed = feed

    def list_customers(self) -> List[Customer]:
        return self.customers.list_all()

    def list_for_staff(self, staff_id: str) -> List[Customer]:
        return self.customers.list_for_staff(staff_id)

    def get_customer(self, customer_id: str) -> Customer:
        customer = self.customers.get(customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        return customer

    def create_customer(self, payload: CustomerCreate) -> Customer:
        """Register a customer with fresh tracking."""
        if not payload.assigned_staff_id:
            raise ValidationError("Please assign a staff member.")
        staff_name = self._staff_name(payload.assigned_staff_id)

        customer = self.customers.create(
            {
                "name": payload.name,
                "phone": payload.phone,
                "eventType": payload.event_type.value,
                "day": payload.day,
                "month": payload.month,
                "assignedStaffId": payload.assigned_staff_id,
                "assignedStaffName": staff_name,
                "status": CustomerStatus.PENDING.value,
                "tracking": Tracking().model_dump(by_alias=True),
            }
        )
        logger.info(
            "Customer registered",
            extra={"customer_id": customer.id, "staff_id": customer.assigned_staff_id},
        )
        self._publish()
        return customer

    def update_customer(self, customer_id: str, payload: CustomerUpdate) -> Customer:
        """Merge the set fields into the stored customer."""
        current = self.get_customer(customer_id)
        changes = payload.model_dump(exclude_none=True)
        if not changes:
            return current

        day = changes.get("day", current.day)
        month = changes.get("month", current.month)
        if not is_valid_event_day(day, month):
            raise ValidationError(f"day {day} does not exist in month {month}")

        fields: Dict[str, Any] = {}
        if "name" in changes:
            fields["name"] = changes["name"]
        if "phone" in changes:
            fields["phone"] = changes["phone"]
        if "event_type" in changes:
            fields["eventType"] = payload.event_type.value
        if "day" in changes:
            fields["day"] = day
        if "month" in changes:
            fields["month"] = month
        if "assigned_staff_id" in changes:
            ensure_present(changes["assigned_staff_id"], "assigned staff")
            fields["assignedStaffId"] = changes["assigned_staff_id"]
            fields["assignedStaffName"] = self._staff_name(changes["assigned_staff_id"])

        updated = self.customers.update(customer_id, fields)
        logger.info(
            "Customer updated",
            extra={"customer_id": customer_id, "fields": sorted(fields)},
        )
        self._publish()
        return updated

    def delete_customer(self, customer_id: str) -> None:
        self.get_customer(customer_id)
        self.customers.delete(customer_id)
        logger.info("Customer deleted", extra={"customer_id": customer_id})
        self._publish()

    def _staff_name(self, staff_id: str) -> str:
        member = self.staff.get(staff_id)
        if member is None:
            raise ValidationError("Assigned staff member does not exist.")
        return member.username or UNASSIGNED_STAFF_NAME

    def _publish(self) -> None:
        if self.feed is not None:
            self.feed.publish(CUSTOMERS)
