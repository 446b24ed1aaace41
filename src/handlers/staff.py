"""Handlers for /staff routes (admin only)."""

from handlers.common import (
    dump,
    get_services,
    guarded,
    path_param,
    require_session,
    response,
    validate,
)
from models.staff import Role, StaffCreate, StaffUpdate
from services import projection_service


@guarded
def list_handler(event, context):
    """Staff members by username, without passwords."""
    require_session(event, Role.ADMIN)
    members = get_services().staff.list_staff()
    return response(200, {"staff": dump(projection_service.staff_listing(members))})


@guarded
def create_handler(event, context):
    require_session(event, Role.ADMIN)
    member = get_services().staff.create_staff(validate(StaffCreate, event))
    return response(201, member.summary().model_dump(mode="json"))


@guarded
def update_handler(event, context):
    require_session(event, Role.ADMIN)
    member = get_services().staff.update_staff(
        path_param(event, "id"), validate(StaffUpdate, event)
    )
    return response(200, member.summary().model_dump(mode="json"))


@guarded
def delete_handler(event, context):
    """Delete a staff member; their customers are left unowned."""
    require_session(event, Role.ADMIN)
    staff_id = path_param(event, "id")
    orphaned = get_services().staff.delete_staff(staff_id)
    return response(200, {"id": staff_id, "status": "deleted", "orphaned_customers": orphaned})
