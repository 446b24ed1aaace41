"""
Dashboard read models.

Loads snapshots from the store and runs the milestone engine over them. The
``watch_*`` methods subscribe to live snapshots and recompute on every one.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, List, Optional, Union

from models.customer import Customer
from models.milestone import MonthlyCount, OverdueAlert, StaffTask
from repositories.customer_repo import CustomerRepository
from services import milestone_service, projection_service
from services.snapshot_feed import CUSTOMERS, SnapshotFeed
from utils.calendar_math import normalize_today, today_in
from utils.logging_config import get_logger

logger = get_logger(__name__)

TodayProvider = Callable[[], date]
Day = Union[date, datetime]


class DashboardService:
    """Staff task queue, admin alerts and monthly stats."""

    def __init__(
        self,
        customers: CustomerRepository,
        feed: Optional[SnapshotFeed] = None,
        timezone: str = "UTC",
        today_provider: Optional[TodayProvider] = None,
    ):
        self.customers = customers
        self.feed = feed or SnapshotFeed()
        self.timezone = timezone
        self.today_provider = today_provider or (lambda: today_in(timezone))

    def staff_tasks(self, staff_id: str, today: Optional[Day] = None) -> List[StaffTask]:
        snapshot = self.customers.list_for_staff(staff_id)
        tasks = milestone_service.staff_tasks(snapshot, self._today(today), staff_id)
        logger.info(
            "Staff tasks evaluated",
            extra={"staff_id": staff_id, "customers": len(snapshot), "tasks": len(tasks)},
        )
        return tasks

    def admin_alerts(self, today: Optional[Day] = None) -> List[OverdueAlert]:
        snapshot = self.customers.list_all()
        alerts = milestone_service.overdue_alerts(snapshot, self._today(today))
        logger.info(
            "Overdue alerts evaluated",
            extra={"customers": len(snapshot), "alerts": len(alerts)},
        )
        return alerts

    def _today(self, value: Optional[Day]) -> date:
        """Calendar day to evaluate against; datetimes are read in the business timezone."""
        if value is None:
            return self.today_provider()
        return normalize_today(value, self.timezone)

    def monthly_distribution(self) -> List[MonthlyCount]:
        return projection_service.monthly_distribution(self.customers.list_all())

    def watch_staff_tasks(
        self, staff_id: str, callback: Callable[[List[StaffTask]], None]
    ) -> Callable[[], None]:
        """Push a fresh task list on every customer snapshot; returns unsubscribe."""

        def on_snapshot(snapshot: List[Customer]) -> None:
            callback(milestone_service.staff_tasks(snapshot, self.today_provider(), staff_id))

        return self.feed.subscribe(
            CUSTOMERS, lambda: self.customers.list_for_staff(staff_id), on_snapshot
        )

    def watch_admin_alerts(
        self, callback: Callable[[List[OverdueAlert]], None]
    ) -> Callable[[], None]:
        """Push a fresh alert list on every customer snapshot; returns unsubscribe."""

        def on_snapshot(snapshot: List[Customer]) -> None:
            callback(milestone_service.overdue_alerts(snapshot, self.today_provider()))

        return self.feed.subscribe(CUSTOMERS, self.customers.list_all, on_snapshot)
