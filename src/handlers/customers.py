"""Handlers for /customers routes."""

from handlers.common import (
    get_services,
    guarded,
    path_param,
    require_session,
    response,
    validate,
)
from models.customer import CustomerCreate, CustomerUpdate
from models.milestone import Milestone
from models.staff import Role
from services import projection_service
from utils.error_handling import ForbiddenError, ValidationError
from utils.logging_config import get_logger

logger = get_logger(__name__)


@guarded
def list_handler(event, context):
    """Admin customer table in calendar order."""
    require_session(event, Role.ADMIN)
    customers = get_services().customers.list_customers()
    return response(200, {"customers": projection_service.customer_listing(customers)})


@guarded
def create_handler(event, context):
    """Register a customer."""
    require_session(event, Role.ADMIN)
    payload = validate(CustomerCreate, event)
    customer = get_services().customers.create_customer(payload)
    return response(201, customer.to_item())


@guarded
def update_handler(event, context):
    """Edit a customer; tracking is not editable here."""
    require_session(event, Role.ADMIN)
    payload = validate(CustomerUpdate, event)
    customer = get_services().customers.update_customer(path_param(event, "id"), payload)
    return response(200, customer.to_item())


@guarded
def delete_handler(event, context):
    """Permanently delete a customer."""
    require_session(event, Role.ADMIN)
    customer_id = path_param(event, "id")
    get_services().customers.delete_customer(customer_id)
    return response(200, {"id": customer_id, "status": "deleted"})


@guarded
def complete_milestone_handler(event, context):
    """Mark one milestone done for a customer."""
    session = require_session(event, Role.STAFF, Role.ADMIN)
    services = get_services()
    customer_id = path_param(event, "id")
    milestone = _milestone(path_param(event, "milestone"))

    customer = services.customers.get_customer(customer_id)
    _ensure_owner(session, customer)
    tracking = services.tracking.complete_milestone(customer_id, milestone)
    return response(
        200,
        {
            "id": customer_id,
            "milestone": milestone.value,
            "tracking": tracking.model_dump(by_alias=True),
        },
    )


@guarded
def wish_handler(event, context):
    """Draft a celebration message for a customer."""
    session = require_session(event, Role.STAFF, Role.ADMIN)
    services = get_services()
    customer = services.customers.get_customer(path_param(event, "id"))
    _ensure_owner(session, customer)

    wish = services.wishes.generate_wish(customer)
    logger.info("Wish drafted", extra={"customer_id": customer.id})
    return response(200, {"id": customer.id, "wish": wish})


def _milestone(value: str) -> Milestone:
    try:
        return Milestone(value.upper())
    except ValueError as exc:
        raise ValidationError(f"Unknown milestone: {value}") from exc


def _ensure_owner(session, customer) -> None:
    """Staff may only act on customers assigned to them."""
    if session.user.role == Role.STAFF and customer.assigned_staff_id != session.user.id:
        raise ForbiddenError("Customer is assigned to another staff member")
