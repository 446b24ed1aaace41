"""Customers collection."""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Attr

from models.customer import Customer, Tracking
from models.milestone import Milestone
from repositories.dynamodb_repo import DynamoDbRepository


def _calendar_order(customers: List[Customer]) -> List[Customer]:
    return sorted(customers, key=lambda c: (c.month, c.day))


class CustomerRepository:
    """Customer documents, always listed in (month, day) order."""

    def __init__(self, store: DynamoDbRepository):
        self.store = store

    def list_all(self) -> List[Customer]:
        return _calendar_order([Customer.model_validate(i) for i in self.store.scan()])

    def list_for_staff(self, staff_id: str) -> List[Customer]:
        items = self.store.scan(Attr("assignedStaffId").eq(staff_id))
        return _calendar_order([Customer.model_validate(i) for i in items])

    def get(self, customer_id: str) -> Optional[Customer]:
        item = self.store.get(customer_id)
        return Customer.model_validate(item) if item else None

    def create(self, fields: Dict[str, Any]) -> Customer:
        """Store a new customer; ``fields`` uses stored attribute names."""
        customer = Customer.model_validate({"id": uuid.uuid4().hex, **fields})
        self.store.put(customer.to_item())
        return customer

    def update(self, customer_id: str, fields: Dict[str, Any]) -> Customer:
        return Customer.model_validate(self.store.update(customer_id, fields))

    def delete(self, customer_id: str) -> None:
        self.store.delete(customer_id)

    def mark_milestone(self, customer_id: str, milestone: Milestone) -> Tracking:
        """Set one tracking flag; the other three are not written."""
        path = f"tracking.{milestone.rule.stored_field}"
        attributes = self.store.update(customer_id, {path: True}, must_exist=True)
        return Tracking.model_validate(attributes.get("tracking", {}))
