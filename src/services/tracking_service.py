"""
Milestone completion.

Completing a milestone is the only way a tracking flag changes, and it only
ever turns a flag on. Callers holding an in-memory snapshot get an optimistic
update that is rolled back if the store write fails.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from models.customer import Customer, Tracking
from models.milestone import Milestone
from repositories.customer_repo import CustomerRepository
from services.snapshot_feed import CUSTOMERS, SnapshotFeed
from utils.error_handling import NotFoundError
from utils.logging_config import get_logger

logger = get_logger(__name__)


class MutationState(str, Enum):
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class OptimisticMutation:
    """
    Pending -> Committed | RolledBack for one customer in a local snapshot.

    ``view`` maps customer id to the customer the caller is showing. The
    pre-mutation customer is kept so rollback restores it exactly.
    """

    def __init__(self, view: Optional[Dict[str, Customer]], customer_id: str):
        self.view = view
        self.customer_id = customer_id
        self.state = MutationState.PENDING
        self._before: Optional[Customer] = view.get(customer_id) if view is not None else None

    def apply(self, milestone: Milestone) -> None:
        if self._before is None:
            return
        tracking = self._before.tracking.model_copy(update={milestone.rule.tracking_field: True})
        self.view[self.customer_id] = self._before.model_copy(update={"tracking": tracking})

    def commit(self, tracking: Tracking) -> None:
        if self._before is not None:
            self.view[self.customer_id] = self._before.model_copy(update={"tracking": tracking})
        self.state = MutationState.COMMITTED

    def rollback(self) -> None:
        if self._before is not None:
            self.view[self.customer_id] = self._before
        self.state = MutationState.ROLLED_BACK


class TrackingService:
    """Flip tracking flags in the store."""

    def __init__(self, customers: CustomerRepository, feed: Optional[SnapshotFeed] = None):
        self.customers = customers
        self.feed = feed

    def complete_milestone(
        self,
        customer_id: str,
        milestone: Milestone,
        view: Optional[Dict[str, Customer]] = None,
    ) -> Tracking:
        """
        Mark one milestone done and return the stored tracking.

        Raises NotFoundError for an unknown customer and PersistenceError when
        the write fails. Any failure restores the caller's view; there is no retry.
        """
        if view is not None and customer_id not in view:
            raise NotFoundError("Customer not found")

        mutation = OptimisticMutation(view, customer_id)
        mutation.apply(milestone)
        try:
            tracking = self.customers.mark_milestone(customer_id, milestone)
        except Exception as exc:
            mutation.rollback()
            logger.error(
                "Milestone completion failed",
                extra={
                    "customer_id": customer_id,
                    "milestone": milestone.value,
                    "error": str(exc),
                },
            )
            raise

        mutation.commit(tracking)
        logger.info(
            "Milestone completed",
            extra={"customer_id": customer_id, "milestone": milestone.value},
        )
        if self.feed is not None:
            self.feed.publish(CUSTOMERS)
        return tracking
