"""Sessions collection keyed by an opaque token."""

from __future__ import annotations

import time
from typing import Optional

from models.session import SessionContext
from repositories.dynamodb_repo import DynamoDbRepository


class SessionRepository:
    """Persist session contexts; expired rows are removed by the table TTL."""

    def __init__(self, store: DynamoDbRepository, ttl_hours: int = 12):
        self.store = store
        self.ttl_seconds = ttl_hours * 3600

    def save(self, token: str, context: SessionContext) -> None:
        item = context.model_dump(mode="json", by_alias=True)
        item["id"] = token
        item["expiresAt"] = int(time.time()) + self.ttl_seconds
        self.store.put(item)

    def load(self, token: str) -> Optional[SessionContext]:
        item = self.store.get(token)
        if not item:
            return None
        # TTL deletion is lazy, so check expiry ourselves.
        if item.get("expiresAt", 0) < time.time():
            return None
        return SessionContext.model_validate(item)

    def delete(self, token: str) -> None:
        self.store.delete(token)
