"""In-memory stand-ins for the DynamoDB repositories."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from models.customer import Customer, Tracking
from models.milestone import Milestone
from models.session import SessionContext
from models.staff import Role, StaffMember
from utils.error_handling import NotFoundError, PersistenceError


def make_customer(
    customer_id: str = "c1",
    day: int = 10,
    month: int = 2,
    staff_id: str = "s1",
    name: str = "Asha Rao",
    **tracking: bool,
) -> Customer:
    return Customer(
        id=customer_id,
        name=name,
        phone="+91 98450 00000",
        event_type="BIRTHDAY",
        day=day,
        month=month,
        assigned_staff_id=staff_id,
        assigned_staff_name="ravi" if staff_id == "s1" else staff_id,
        tracking=Tracking(**tracking),
    )


class FakeCustomerRepository:
    def __init__(self, customers=()):
        self.items: Dict[str, Customer] = {c.id: c for c in customers}
        self.fail_writes = False
        self.fail_reads = False
        self.marked: List[tuple] = []

    def add(self, customer: Customer) -> Customer:
        self.items[customer.id] = customer
        return customer

    def list_all(self) -> List[Customer]:
        if self.fail_reads:
            raise PersistenceError()
        return sorted(self.items.values(), key=lambda c: (c.month, c.day))

    def list_for_staff(self, staff_id: str) -> List[Customer]:
        return [c for c in self.list_all() if c.assigned_staff_id == staff_id]

    def get(self, customer_id: str) -> Optional[Customer]:
        return self.items.get(customer_id)

    def create(self, fields: Dict[str, Any]) -> Customer:
        self._check_writes()
        customer = Customer.model_validate({"id": f"new{len(self.items) + 1}", **fields})
        self.items[customer.id] = customer
        return customer

    def update(self, customer_id: str, fields: Dict[str, Any]) -> Customer:
        self._check_writes()
        if customer_id not in self.items:
            raise NotFoundError()
        data = self.items[customer_id].to_item()
        data.update(fields)
        self.items[customer_id] = Customer.model_validate(data)
        return self.items[customer_id]

    def delete(self, customer_id: str) -> None:
        self._check_writes()
        self.items.pop(customer_id, None)

    def mark_milestone(self, customer_id: str, milestone: Milestone) -> Tracking:
        self._check_writes()
        if customer_id not in self.items:
            raise NotFoundError()
        self.marked.append((customer_id, milestone))
        current = self.items[customer_id]
        tracking = current.tracking.model_copy(update={milestone.rule.tracking_field: True})
        self.items[customer_id] = current.model_copy(update={"tracking": tracking})
        return tracking

    def _check_writes(self) -> None:
        if self.fail_writes:
            raise PersistenceError()


class FakeStaffRepository:
    def __init__(self, members=()):
        self.items: Dict[str, StaffMember] = {m.id: m for m in members}

    def add(self, staff_id: str, username: str, password: str = "secret") -> StaffMember:
        member = StaffMember(id=staff_id, username=username, password=password, role=Role.STAFF)
        self.items[staff_id] = member
        return member

    def list_all(self) -> List[StaffMember]:
        return sorted(self.items.values(), key=lambda s: s.username)

    def get(self, staff_id: str) -> Optional[StaffMember]:
        return self.items.get(staff_id)

    def find_by_username(self, username: str) -> Optional[StaffMember]:
        return next((m for m in self.items.values() if m.username == username), None)

    def find_by_credentials(self, username: str, password: str) -> Optional[StaffMember]:
        return next(
            (m for m in self.items.values() if m.username == username and m.password == password),
            None,
        )

    def create(self, username: str, password: str) -> StaffMember:
        return self.add(f"s{len(self.items) + 1}", username, password)

    def update(self, staff_id: str, fields: Dict[str, Any]) -> StaffMember:
        updated = self.items[staff_id].model_copy(update=fields)
        self.items[staff_id] = updated
        return updated

    def delete(self, staff_id: str) -> None:
        self.items.pop(staff_id, None)


class FakeSessionRepository:
    def __init__(self):
        self.items: Dict[str, SessionContext] = {}

    def save(self, token: str, context: SessionContext) -> None:
        self.items[token] = context.model_copy(deep=True)

    def load(self, token: str) -> Optional[SessionContext]:
        stored = self.items.get(token)
        return stored.model_copy(deep=True) if stored else None

    def delete(self, token: str) -> None:
        self.items.pop(token, None)
