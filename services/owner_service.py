# services/owner_service.py

"""
Owner dashboard: roster, rooms, rent generation, status changes and the
guarded cascading user deletion.
"""

from typing import Iterable, List

from core import notices
from core.actions import OwnerAction, action_link
from core.data_access import (
    delete_rows,
    insert_rows,
    lookup_one,
    lookup_rows,
    select_rows,
    update_rows,
)
from core.errors import DataAccessError, ErrorKind, InputValidationError, conflict, not_found
from core.formatting import format_currency, format_date, to_amount
from core.logging_config import logger
from core.validation import require, room_pool
from models.enums import MaintenanceStatus, RentStatus
from models.maintenance import MaintenanceRead
from models.rent import (
    DeletionReview,
    RentGenerationResult,
    RentRead,
    RentStatusResult,
)
from models.user import (
    AddUserResult,
    DeleteUserResult,
    RoomAvailability,
    RoomOption,
    UserCreate,
    UserRead,
)


# ============================================================
# PURE RULES
# ============================================================
def compute_available_rooms(occupied: Iterable) -> List[str]:
    """Room pool minus occupied rooms, in numeric order."""
    taken = {str(r).strip() for r in occupied if r is not None and str(r).strip()}
    return [room for room in room_pool() if room not in taken]


def plan_rent_rows(users: list, existing_rents: list, month: str, amount: float) -> list:
    """
    One pending rent row per user whose email (case-insensitive) has no
    row for `month` yet. Users without an email are ignored.
    """
    covered = {
        str(r["email"]).strip().lower()
        for r in existing_rents
        if r.get("email")
    }

    rows = []
    for user in users:
        email = str(user.get("email") or "").strip()
        if not email or email.lower() in covered:
            continue
        covered.add(email.lower())
        rows.append(
            {
                "name": user.get("name"),
                "email": user.get("email"),
                "month": month,
                "amount": amount,
                "status": RentStatus.pending.value,
            }
        )
    return rows


def unpaid_rents(rents: list) -> list:
    return [r for r in rents if r.get("status") != RentStatus.paid.value]


# ============================================================
# VIEW BUILDERS
# ============================================================
def user_view(row: dict) -> UserRead:
    user = UserRead(**row)
    user.deposit_display = format_currency(row.get("deposit"))
    user.actions = [action_link(OwnerAction.review_user_delete, user.id, "Delete")]
    return user


def rent_view(row: dict) -> RentRead:
    rent = RentRead(**row)
    rent.amount_display = format_currency(rent.amount)
    if rent.status == RentStatus.pending:
        rent.actions = [action_link(OwnerAction.mark_rent_paid, rent.id, "Mark as Paid")]
    return rent


def maintenance_view(row: dict) -> MaintenanceRead:
    item = MaintenanceRead(**row)
    item.created_display = format_date(row.get("created_at"))
    item.actions = [
        action_link(
            OwnerAction.set_maintenance_status,
            item.id,
            "Status",
            options=MaintenanceStatus.list(),
        )
    ]
    return item


# ============================================================
# ROSTER + ROOMS
# ============================================================
def list_users() -> List[UserRead]:
    rows = select_rows(
        "users",
        order_by="created_at",
        desc=True,
        operation="Error loading users",
    )
    return [user_view(r) for r in rows]


def room_availability() -> RoomAvailability:
    rows = select_rows("users", columns="room", operation="Error fetching rooms")
    available = compute_available_rooms(r.get("room") for r in rows)

    options = [RoomOption(value=room, label=f"Room {room}") for room in available]
    if not available:
        options.append(RoomOption(value="", label="No rooms available", disabled=True))

    return RoomAvailability(
        available=available,
        options=options,
        selectable=bool(available),
    )


def add_user(payload: UserCreate) -> AddUserResult:
    name = payload.name.strip()
    room = payload.room.strip()
    email = str(payload.email).strip()
    require(name, room, payload.contact_no, payload.password)

    if room not in room_pool():
        raise InputValidationError(f"Room {room} does not exist")
    if room not in room_availability().available:
        raise conflict(f"Room {room} is already occupied")
    if lookup_one("users", "email", email, operation="Failed to check email"):
        raise conflict(f"A user with email {email} already exists")

    rows = insert_rows(
        "users",
        [
            {
                "name": name,
                "room": room,
                "contact_no": payload.contact_no.strip(),
                "email": email,
                "password": payload.password,
                "deposit": payload.deposit,
            }
        ],
        operation="Failed to add user",
    )
    if not rows:
        raise DataAccessError(ErrorKind.unknown, "Failed to add user")

    logger.info(f"Added user {email} in room {room}")
    return AddUserResult(
        user=user_view(rows[0]),
        users=list_users(),
        rooms=room_availability(),
        notice=notices.success("User added successfully!"),
    )


# ============================================================
# RENTS
# ============================================================
def list_rents() -> List[RentRead]:
    rows = select_rows(
        "rents",
        order_by="created_at",
        desc=True,
        operation="Error loading rents",
    )
    return [rent_view(r) for r in rows]


def generate_rent(month: str, amount) -> RentGenerationResult:
    month = (month or "").strip()
    amount = to_amount(amount)
    if not month or amount <= 0:
        raise InputValidationError("Please enter valid month and amount")

    users = select_rows("users", columns="name, email", operation="Error fetching users")
    if not users:
        raise not_found("No users found to generate rent for")

    existing = select_rows(
        "rents",
        {"month": month},
        columns="email",
        operation="Error checking existing rents",
    )

    planned = plan_rent_rows(users, existing, month, amount)
    skipped = len(users) - len(planned)

    if not planned:
        logger.info(f"Rent for {month} already generated for all {len(users)} user(s)")
        return RentGenerationResult(
            month=month,
            generated=0,
            skipped=skipped,
            rents=[],
            notice=notices.info(f"All users already have rent generated for {month}"),
        )

    created = insert_rows("rents", planned, operation="Failed to generate rents")

    text = f"Rent generated successfully for {len(created)} user(s)!"
    if skipped > 0:
        text += f" ({skipped} user(s) already have rent for {month})"

    logger.info(f"Generated {len(created)} rent row(s) for {month}, skipped {skipped}")
    return RentGenerationResult(
        month=month,
        generated=len(created),
        skipped=skipped,
        rents=[rent_view(r) for r in created],
        notice=notices.success(text),
    )


def mark_rent_paid(rent_id: str) -> RentStatusResult:
    rows = update_rows(
        "rents",
        {"id": rent_id},
        {"status": RentStatus.paid.value},
        operation="Failed to update rent status",
    )
    if not rows:
        raise not_found("Rent record not found")

    logger.info(f"Rent {rent_id} marked paid by owner")
    return RentStatusResult(
        rent=rent_view(rows[0]),
        notice=notices.success("Rent marked as paid"),
    )


# ============================================================
# MAINTENANCE
# ============================================================
def list_maintenance() -> List[MaintenanceRead]:
    rows = select_rows(
        "maintenance",
        order_by="created_at",
        desc=True,
        operation="Error loading maintenance requests",
    )
    return [maintenance_view(r) for r in rows]


def update_maintenance_status(request_id: str, status: str) -> MaintenanceRead:
    if status not in MaintenanceStatus.list():
        raise InputValidationError(
            f"Invalid status. Must be one of: {', '.join(MaintenanceStatus.list())}"
        )

    rows = update_rows(
        "maintenance",
        {"id": request_id},
        {"status": status},
        operation="Failed to update maintenance status",
    )
    if not rows:
        raise not_found("Maintenance request not found")

    logger.info(f"Maintenance request {request_id} set to {status}")
    return maintenance_view(rows[0])


# ============================================================
# GUARDED USER DELETION
# ============================================================
def _get_user(user_id: str) -> dict:
    rows = select_rows("users", {"id": user_id}, operation="Error fetching user")
    if not rows:
        raise not_found("User not found")
    return rows[0]


def _rents_for(email: str) -> list:
    if not email:
        return []
    return lookup_rows(
        "rents",
        "email",
        email,
        operation="Error fetching rent information",
    )


def review_user_deletion(user_id: str) -> DeletionReview:
    user = _get_user(user_id)
    rents = _rents_for(user.get("email"))
    unpaid = unpaid_rents(rents)
    all_paid = not unpaid

    if all_paid:
        text = "All rents are paid. You can proceed with deletion."
    else:
        text = f"This user has {len(unpaid)} unpaid rent(s). Please collect payment before deletion."

    deposit = to_amount(user.get("deposit"))
    return DeletionReview(
        user=user_view(user),
        rents=[rent_view(r) for r in rents],
        deposit_to_return=deposit,
        deposit_display=format_currency(deposit),
        unpaid_count=len(unpaid),
        all_paid=all_paid,
        can_delete=all_paid,
        actions=[action_link(OwnerAction.delete_user, user["id"], "Delete", enabled=all_paid)],
        notice=notices.success(text) if all_paid else notices.error(text),
    )


def delete_user(user_id: str) -> DeleteUserResult:
    """
    Delete rents, then maintenance requests, then the user.
    Refused outright while any rent is unpaid. A failed step stops the
    sequence; earlier steps are not rolled back.
    """
    user = _get_user(user_id)
    email = user.get("email")

    rents = _rents_for(email)
    unpaid = unpaid_rents(rents)
    if unpaid:
        logger.warning(f"Refused to delete user {user_id}: {len(unpaid)} unpaid rent(s)")
        raise conflict(f"Cannot delete user with unpaid rents ({len(unpaid)} unpaid)")

    rents_deleted = 0
    if rents:
        rents_deleted = len(
            delete_rows("rents", {"id": [r["id"] for r in rents]}, operation="Error deleting rents")
        )

    requests = (
        lookup_rows("maintenance", "email", email, operation="Error fetching maintenance requests")
        if email else []
    )
    maintenance_deleted = 0
    if requests:
        maintenance_deleted = len(
            delete_rows(
                "maintenance",
                {"id": [m["id"] for m in requests]},
                operation="Error deleting maintenance requests",
            )
        )

    delete_rows("users", {"id": user_id}, operation="Error deleting user")

    logger.info(
        f"Deleted user {user_id} ({email}): {rents_deleted} rent(s), "
        f"{maintenance_deleted} maintenance request(s)"
    )
    return DeleteUserResult(
        user_id=str(user_id),
        rents_deleted=rents_deleted,
        maintenance_deleted=maintenance_deleted,
        users=list_users(),
        rooms=room_availability(),
        notice=notices.success("User deleted successfully!"),
    )
