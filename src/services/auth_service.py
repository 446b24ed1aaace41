"""
Login and session handling.

The admin credential comes from configuration and never touches the store.
Staff credentials are compared in plaintext against the staff collection,
which mirrors how the source system stores them.
"""

from __future__ import annotations

import hmac
import uuid
from typing import Optional, Tuple

from config.settings import Settings
from models.session import SessionContext, SessionUser
from models.staff import Role
from repositories.session_repo import SessionRepository
from repositories.staff_repo import StaffRepository
from utils.error_handling import AuthenticationError
from utils.logging_config import get_logger

logger = get_logger(__name__)

ADMIN_USER_ID = "admin-0"


class AuthService:
    """Authenticate users and keep their session contexts."""

    def __init__(self, staff: StaffRepository, sessions: SessionRepository, settings: Settings):
        self.staff = staff
        self.sessions = sessions
        self.settings = settings

    def authenticate(self, username: str, password: str) -> SessionUser:
        """Resolve credentials to a user or raise AuthenticationError."""
        username = (username or "").strip()
        password = (password or "").strip()
        if not username or not password:
            raise AuthenticationError()

        if self._is_admin(username, password):
            return SessionUser(id=ADMIN_USER_ID, username=username, role=Role.ADMIN)

        member = self.staff.find_by_credentials(username, password)
        if member is None:
            logger.info("Login rejected", extra={"username": username})
            raise AuthenticationError()
        return SessionUser(id=member.id, username=member.username, role=member.role)

    def login(self, username: str, password: str) -> Tuple[str, SessionContext]:
        user = self.authenticate(username, password)
        context = SessionContext.anonymous()
        context.login(user)
        token = uuid.uuid4().hex
        self.sessions.save(token, context)
        logger.info("Login succeeded", extra={"user_id": user.id, "role": user.role.value})
        return token, context

    def resume(self, token: Optional[str]) -> SessionContext:
        """Stored context for a token, or an anonymous one."""
        if not token:
            return SessionContext.anonymous()
        return self.sessions.load(token) or SessionContext.anonymous()

    def logout(self, token: Optional[str]) -> SessionContext:
        context = self.resume(token)
        if token:
            self.sessions.delete(token)
        context.logout()
        return context

    def _is_admin(self, username: str, password: str) -> bool:
        expected = (self.settings.admin_password or "").strip()
        if not expected:
            return False
        return hmac.compare_digest(
            username.encode(), self.settings.admin_username.encode()
        ) and hmac.compare_digest(password.encode(), expected.encode())
