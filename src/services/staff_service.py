"""Staff administration."""

from __future__ import annotations

from typing import List, Optional

from models.staff import StaffCreate, StaffMember, StaffUpdate
from repositories.customer_repo import CustomerRepository
from repositories.staff_repo import StaffRepository
from services.snapshot_feed import STAFF, SnapshotFeed
from utils.error_handling import NotFoundError, ValidationError
from utils.logging_config import get_logger

logger = get_logger(__name__)


class StaffService:
    """Create, rename and remove staff members."""

    def __init__(
        self,
        staff: StaffRepository,
        customers: CustomerRepository,
        feed: Optional[SnapshotFeed] = None,
    ):
        self.staff = staff
        self.customers = customers
        self.feed = feed

    def list_staff(self) -> List[StaffMember]:
        return self.staff.list_all()

    def create_staff(self, payload: StaffCreate) -> StaffMember:
        if self.staff.find_by_username(payload.username):
            raise ValidationError("Username already exists")
        member = self.staff.create(payload.username, payload.password)
        logger.info("Staff created", extra={"staff_id": member.id})
        self._publish()
        return member

    def update_staff(self, staff_id: str, payload: StaffUpdate) -> StaffMember:
        if self.staff.get(staff_id) is None:
            raise NotFoundError("Staff member not found")
        fields = payload.model_dump(exclude_none=True)
        if not fields:
            raise ValidationError("Nothing to update")
        if "username" in fields:
            existing = self.staff.find_by_username(fields["username"])
            if existing and existing.id != staff_id:
                raise ValidationError("Username already exists")

        member = self.staff.update(staff_id, fields)
        logger.info("Staff updated", extra={"staff_id": staff_id, "fields": sorted(fields)})
        self._publish()
        return member

    def delete_staff(self, staff_id: str) -> int:
        """
        Remove a staff member and return how many customers they still owned.

        Those customers keep the dangling assignment until an admin reassigns them.
        """
        if self.staff.get(staff_id) is None:
            raise NotFoundError("Staff member not found")
        orphaned = len(self.customers.list_for_staff(staff_id))
        self.staff.delete(staff_id)
        if orphaned:
            logger.warning(
                "Staff deleted with assigned customers",
                extra={"staff_id": staff_id, "orphaned_customers": orphaned},
            )
        else:
            logger.info("Staff deleted", extra={"staff_id": staff_id})
        self._publish()
        return orphaned

    def _publish(self) -> None:
        if self.feed is not None:
            self.feed.publish(STAFF)
