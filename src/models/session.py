"""Session context handed to the presentation layer."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.staff import Role


class SessionUser(BaseModel):
    """Who is logged in."""

    id: str
    username: str
    role: Role


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class SessionContext(BaseModel):
    """
    Explicit authentication state.

    Starts anonymous, ``login`` fills it in and ``logout`` clears it again.
    """

    user: Optional[SessionUser] = None
    is_authenticated: bool = Field(default=False, alias="isAuthenticated")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls()

    def login(self, user: SessionUser) -> None:
        self.user = user
        self.is_authenticated = True

    def logout(self) -> None:
        self.user = None
        self.is_authenticated = False

    @property
    def role(self) -> Optional[Role]:
        return self.user.role if self.user else None
