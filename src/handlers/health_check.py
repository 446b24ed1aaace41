"""Health check for GET /health."""

from datetime import datetime, timezone

from config.settings import Settings
from handlers.common import response
from utils.calendar_math import today_in


def lambda_handler(event, context):
    """Report liveness and the business date the dashboards evaluate against."""
    settings = Settings.from_environment()
    return response(
        200,
        {
            "status": "ok",
            "environment": settings.environment,
            "businessDate": today_in(settings.business_timezone).isoformat(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
