"""Shared handler plumbing: lazy services, session lookup and JSON responses."""

from __future__ import annotations

import functools
import json
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from models.session import SessionContext
from models.staff import Role
from utils.calendar_math import parse_iso_date
from utils.error_handling import (
    AppError,
    AuthenticationError,
    ForbiddenError,
    ValidationError,
    to_response,
)
from utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Services:
    """Everything the handlers need, built once per warm container."""

    settings: Any
    auth: Any
    customers: Any
    staff: Any
    tracking: Any
    dashboard: Any
    wishes: Any


# Lazy-loaded services to avoid import-time AWS clients
_services: Optional[Services] = None


def get_services() -> Services:
    """Build repositories and services on first use."""
    global _services
    if _services is None:
        from config.settings import Settings
        from repositories.customer_repo import CustomerRepository
        from repositories.dynamodb_repo import DynamoDbRepository
        from repositories.session_repo import SessionRepository
        from repositories.staff_repo import StaffRepository
        from services.auth_service import AuthService
        from services.customer_service import CustomerService
        from services.dashboard_service import DashboardService
        from services.snapshot_feed import SnapshotFeed
        from services.staff_service import StaffService
        from services.tracking_service import TrackingService
        from services.wish_service import WishService

        settings = Settings.from_environment()
        customer_repo = CustomerRepository(
            DynamoDbRepository(settings.customers_table, region=settings.aws_region)
        )
        staff_repo = StaffRepository(
            DynamoDbRepository(settings.staff_table, region=settings.aws_region)
        )
        session_repo = SessionRepository(
            DynamoDbRepository(settings.sessions_table, region=settings.aws_region),
            ttl_hours=settings.session_ttl_hours,
        )
        feed = SnapshotFeed()
        _services = Services(
            settings=settings,
            auth=AuthService(staff_repo, session_repo, settings),
            customers=CustomerService(customer_repo, staff_repo, feed),
            staff=StaffService(staff_repo, customer_repo, feed),
            tracking=TrackingService(customer_repo, feed),
            dashboard=DashboardService(customer_repo, feed, timezone=settings.business_timezone),
            wishes=WishService(settings),
        )
    return _services


def response(status: int, body: Any) -> Dict[str, Any]:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def dump(items: Iterable[BaseModel]) -> list:
    return [item.model_dump(mode="json") for item in items]


def parse_body(event: Dict[str, Any]) -> Dict[str, Any]:
    try:
        payload = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        raise ValidationError("Body must be valid JSON") from exc
    if not isinstance(payload, dict):
        raise ValidationError("Body must be a JSON object")
    return payload


def validate(model: type, event: Dict[str, Any]):
    """Parse the request body into ``model``, mapping pydantic errors to 422."""
    try:
        return model.model_validate(parse_body(event))
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or "body"
        raise ValidationError(f"{field}: {first.get('msg', 'invalid')}") from exc


def bearer_token(event: Dict[str, Any]) -> Optional[str]:
    headers = {k.lower(): v for k, v in (event.get("headers") or {}).items()}
    value = headers.get("authorization") or ""
    if value.lower().startswith("bearer "):
        return value[7:].strip() or None
    return None


def require_session(event: Dict[str, Any], *roles: Role) -> SessionContext:
    """Resolve the caller's session and check its role."""
    session = get_services().auth.resume(bearer_token(event))
    if not session.is_authenticated or session.role is None:
        raise AuthenticationError("Login required")
    if roles and session.role not in roles:
        raise ForbiddenError()
    return session


def path_param(event: Dict[str, Any], name: str) -> str:
    value = (event.get("pathParameters") or {}).get(name)
    if not value:
        raise ValidationError(f"{name} is required")
    return value


def query_date(event: Dict[str, Any], name: str = "today") -> Optional[date]:
    value = (event.get("queryStringParameters") or {}).get(name)
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError as exc:
        raise ValidationError(f"{name} must be YYYY-MM-DD") from exc


def guarded(handler):
    """Render AppErrors as JSON responses; anything else becomes a 500."""

    @functools.wraps(handler)
    def wrapper(event, context):
        try:
            return handler(event, context)
        except AppError as exc:
            if exc.status_code >= 500:
                logger.error("Request failed", extra={"error": str(exc)})
            return to_response(exc)
        except Exception:
            logger.exception("Unhandled error")
            return response(500, {"message": "Internal error", "status": "error"})

    return wrapper
