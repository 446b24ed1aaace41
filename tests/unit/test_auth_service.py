"""
Login and session tests.

Run with: pytest tests/unit/test_auth_service.py -v
"""

import pytest

from config.settings import Settings
from fakes import FakeSessionRepository, FakeStaffRepository
from models.session import SessionContext, SessionUser
from models.staff import Role, StaffCreate
from services.auth_service import ADMIN_USER_ID, AuthService
from utils.error_handling import AuthenticationError


@pytest.fixture
def auth():
    staff = FakeStaffRepository()
    staff.add("s1", "ravi", "ravi-pw")
    settings = Settings(admin_username="admin", admin_password="letmein")
    return AuthService(staff, FakeSessionRepository(), settings)


def test_admin_login_bypasses_store(auth):
    user = auth.authenticate("admin", "letmein")
    assert user.id == ADMIN_USER_ID
    assert user.role == Role.ADMIN


def test_staff_login(auth):
    user = auth.authenticate("ravi", "ravi-pw")
    assert user.id == "s1"
    assert user.role == Role.STAFF


@pytest.mark.parametrize(
    "username,password",
    [("ravi", "wrong"), ("nobody", "ravi-pw"), ("", ""), ("admin", "wrong")],
)
def test_bad_credentials(auth, username, password):
    with pytest.raises(AuthenticationError):
        auth.authenticate(username, password)


def test_admin_disabled_without_password():
    auth = AuthService(FakeStaffRepository(), FakeSessionRepository(), Settings(admin_password=""))
    with pytest.raises(AuthenticationError):
        auth.authenticate("admin", "")


def test_login_resume_logout_cycle(auth):
    token, session = auth.login("ravi", "ravi-pw")
    assert session.is_authenticated

    resumed = auth.resume(token)
    assert resumed.is_authenticated
    assert resumed.user.username == "ravi"

    cleared = auth.logout(token)
    assert not cleared.is_authenticated
    assert cleared.user is None
    assert not auth.resume(token).is_authenticated


def test_resume_unknown_token_is_anonymous(auth):
    assert auth.resume("nope") == SessionContext.anonymous()
    assert auth.resume(None) == SessionContext.anonymous()


def test_session_context_transitions():
    session = SessionContext.anonymous()
    assert session.role is None

    session.login(SessionUser(id="s1", username="ravi", role=Role.STAFF))
    assert session.is_authenticated
    assert session.role == Role.STAFF

    session.logout()
    assert session == SessionContext.anonymous()


def test_password_whitespace_matches_how_staff_are_stored():
    staff = FakeStaffRepository()
    payload = StaffCreate(username="meera", password="  pearl-7 ")
    staff.create(payload.username, payload.password)
    auth = AuthService(staff, FakeSessionRepository(), Settings(admin_password="letmein"))

    assert auth.authenticate("meera", "  pearl-7 ").username == "meera"
    assert auth.authenticate("meera", "pearl-7").username == "meera"
    assert auth.authenticate(" admin ", " letmein ").role == Role.ADMIN
