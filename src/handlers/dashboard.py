"""Handlers for GET /tasks, GET /alerts and GET /stats/monthly."""

from handlers.common import dump, get_services, guarded, query_date, require_session, response
from models.staff import Role
from services import projection_service


@guarded
def tasks_handler(event, context):
    """Staff priority queue plus the staff member's own customers."""
    session = require_session(event, Role.STAFF)
    services = get_services()
    staff_id = session.user.id

    tasks = services.dashboard.staff_tasks(staff_id, today=query_date(event))
    customers = services.customers.list_for_staff(staff_id)
    return response(
        200,
        {
            "tasks": [task.to_view() for task in tasks],
            "customers": projection_service.customer_history(customers),
        },
    )


@guarded
def alerts_handler(event, context):
    """Every overdue milestone across all customers."""
    require_session(event, Role.ADMIN)
    alerts = get_services().dashboard.admin_alerts(today=query_date(event))
    return response(200, {"alerts": dump(alerts), "count": len(alerts)})


@guarded
def monthly_stats_handler(event, context):
    """Customer count per event month."""
    require_session(event, Role.ADMIN)
    counts = get_services().dashboard.monthly_distribution()
    return response(200, {"months": dump(counts), "total": sum(c.count for c in counts)})
