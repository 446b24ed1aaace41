"""Handlers for POST /login, POST /logout and GET /session."""

from handlers.common import bearer_token, get_services, guarded, response, validate
from models.session import LoginRequest


@guarded
def login_handler(event, context):
    """Exchange credentials for a session token."""
    credentials = validate(LoginRequest, event)
    token, session = get_services().auth.login(credentials.username, credentials.password)
    return response(
        200,
        {"token": token, "session": session.model_dump(mode="json", by_alias=True)},
    )


@guarded
def logout_handler(event, context):
    """Drop the caller's session; always succeeds."""
    session = get_services().auth.logout(bearer_token(event))
    return response(200, {"session": session.model_dump(mode="json", by_alias=True)})


@guarded
def session_handler(event, context):
    """Return the caller's session context (anonymous when logged out)."""
    session = get_services().auth.resume(bearer_token(event))
    return response(200, {"session": session.model_dump(mode="json", by_alias=True)})
