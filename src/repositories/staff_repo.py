"""Staff collection."""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Attr

from models.staff import Role, StaffMember
from repositories.dynamodb_repo import DynamoDbRepository


class StaffRepository:
    """Staff documents, listed in username order."""

    def __init__(self, store: DynamoDbRepository):
        self.store = store

    def list_all(self) -> List[StaffMember]:
        members = [StaffMember.model_validate(i) for i in self.store.scan()]
        return sorted(members, key=lambda s: s.username)

    def get(self, staff_id: str) -> Optional[StaffMember]:
        item = self.store.get(staff_id)
        return StaffMember.model_validate(item) if item else None

    def find_by_username(self, username: str) -> Optional[StaffMember]:
        items = self.store.scan(Attr("username").eq(username))
        return StaffMember.model_validate(items[0]) if items else None

    def find_by_credentials(self, username: str, password: str) -> Optional[StaffMember]:
        # Plaintext equality match, kept from the source system.
        items = self.store.scan(Attr("username").eq(username) & Attr("password").eq(password))
        return StaffMember.model_validate(items[0]) if items else None

    def create(self, username: str, password: str) -> StaffMember:
        member = StaffMember(
            id=uuid.uuid4().hex, username=username, password=password, role=Role.STAFF
        )
        self.store.put(member.model_dump(mode="json"))
        return member

    def update(self, staff_id: str, fields: Dict[str, Any]) -> StaffMember:
        return StaffMember.model_validate(self.store.update(staff_id, fields))

    def delete(self, staff_id: str) -> None:
        self.store.delete(staff_id)
