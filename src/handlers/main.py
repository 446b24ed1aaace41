"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

One Lambda keeps the lazily built services warm across routes while each
route stays in its own module.
"""

from typing import Callable, Dict, Optional, Tuple

from . import auth, customers, dashboard, health_check, staff
from .common import response


def _route_table() -> Tuple[Tuple[str, str, Callable], ...]:
    """Routes are resolved at call time so handlers can be swapped in tests."""
    return (
        ("GET", "/health", health_check.lambda_handler),
        ("POST", "/login", auth.login_handler),
        ("POST", "/logout", auth.logout_handler),
        ("GET", "/session", auth.session_handler),
        ("GET", "/tasks", dashboard.tasks_handler),
        ("GET", "/alerts", dashboard.alerts_handler),
        ("GET", "/stats/monthly", dashboard.monthly_stats_handler),
        ("GET", "/customers", customers.list_handler),
        ("POST", "/customers", customers.create_handler),
        ("PUT", "/customers/{id}", customers.update_handler),
        ("DELETE", "/customers/{id}", customers.delete_handler),
        ("POST", "/customers/{id}/milestones/{milestone}", customers.complete_milestone_handler),
        ("POST", "/customers/{id}/wish", customers.wish_handler),
        ("GET", "/staff", staff.list_handler),
        ("POST", "/staff", staff.create_handler),
        ("PUT", "/staff/{id}", staff.update_handler),
        ("DELETE", "/staff/{id}", staff.delete_handler),
    )


def match_path(pattern: str, path: str) -> Optional[Dict[str, str]]:
    """Match ``/customers/{id}`` style patterns; returns path params or None."""
    pattern_parts = pattern.strip("/").split("/")
    path_parts = path.strip("/").split("/")
    if len(pattern_parts) != len(path_parts):
        return None

    params: Dict[str, str] = {}
    for expected, actual in zip(pattern_parts, path_parts):
        if expected.startswith("{") and expected.endswith("}"):
            if not actual:
                return None
            params[expected[1:-1]] = actual
        elif expected != actual:
            return None
    return params


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    The event carries the HTTP method and path; path parameters found here are
    merged into ``pathParameters`` before the route handler runs.
    """
    method = event.get("requestContext", {}).get("http", {}).get("method", "").upper()
    path = event.get("requestContext", {}).get("http", {}).get("path", "")

    for route_method, pattern, handler in _route_table():
        if route_method != method:
            continue
        params = match_path(pattern, path)
        if params is None:
            continue
        event = dict(event)
        event["pathParameters"] = {**(event.get("pathParameters") or {}), **params}
        return handler(event, context)

    return response(404, {"message": "Route not found", "route": f"{method} {path}"})
