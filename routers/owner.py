# routers/owner.py

from typing import List

from fastapi import APIRouter, Depends

from core.actions import ActionTable, OwnerAction
from core.errors import InputValidationError
from dependencies.auth import get_current_owner
from models.actions import ActionRequest
from models.auth import OwnerIdentity
from models.enums import Role
from models.maintenance import MaintenanceRead, MaintenanceStatusUpdate
from models.rent import DeletionReview, RentGenerate, RentGenerationResult, RentRead, RentStatusResult
from models.user import AddUserResult, DeleteUserResult, RoomAvailability, UserCreate, UserRead
from services import owner_service


router = APIRouter(
    prefix="/owner",
    tags=["Owner"],
    dependencies=[Depends(get_current_owner)],
)


# ============================================================
# USERS + ROOMS
# ============================================================
@router.get("/users", response_model=List[UserRead], summary="Tenant roster")
def list_users():
    return owner_service.list_users()


@router.post("/users", response_model=AddUserResult, summary="Add a tenant")
def add_user(payload: UserCreate):
    return owner_service.add_user(payload)


@router.get("/rooms", response_model=RoomAvailability, summary="Unoccupied rooms")
def list_rooms():
    return owner_service.room_availability()


@router.get(
    "/users/{user_id}/deletion-review",
    response_model=DeletionReview,
    summary="Rent and deposit status before deleting a tenant",
)
def review_user_deletion(user_id: str):
    return owner_service.review_user_deletion(user_id)


@router.delete("/users/{user_id}", response_model=DeleteUserResult, summary="Delete a fully paid-up tenant")
def delete_user(user_id: str):
    """
    Removes the tenant's rents, maintenance requests and user row, in that
    order. Refused with 409 while any rent is unpaid.
    """
    return owner_service.delete_user(user_id)


# ============================================================
# RENTS
# ============================================================
@router.get("/rents", response_model=List[RentRead], summary="All rent records")
def list_rents():
    return owner_service.list_rents()


@router.post("/rents/generate", response_model=RentGenerationResult, summary="Generate a month's rent")
def generate_rent(payload: RentGenerate):
    """One pending rent per tenant who has none for the month yet."""
    return owner_service.generate_rent(payload.month, payload.amount)


@router.post("/rents/{rent_id}/paid", response_model=RentStatusResult, summary="Mark rent as paid")
def mark_rent_paid(rent_id: str):
    return owner_service.mark_rent_paid(rent_id)


# ============================================================
# MAINTENANCE
# ============================================================
@router.get("/maintenance", response_model=List[MaintenanceRead], summary="All maintenance requests")
def list_maintenance():
    return owner_service.list_maintenance()


@router.patch("/maintenance/{request_id}", response_model=MaintenanceRead, summary="Change request status")
def update_maintenance_status(request_id: str, payload: MaintenanceStatusUpdate):
    return owner_service.update_maintenance_status(request_id, payload.status)


# ============================================================
# ACTION DISPATCH
# ============================================================
def _set_maintenance_status(owner: OwnerIdentity, request: ActionRequest):
    if not request.value:
        raise InputValidationError("A status value is required")
    return owner_service.update_maintenance_status(request.target, request.value)


OWNER_ACTIONS = ActionTable(
    Role.owner,
    {
        OwnerAction.mark_rent_paid: lambda owner, req: owner_service.mark_rent_paid(req.target),
        OwnerAction.set_maintenance_status: _set_maintenance_status,
        OwnerAction.review_user_delete: lambda owner, req: owner_service.review_user_deletion(req.target),
        OwnerAction.delete_user: lambda owner, req: owner_service.delete_user(req.target),
    },
)


@router.post("/actions/{action_id}", summary="Run a row action")
def run_action(
    action_id: str,
    payload: ActionRequest,
    owner: OwnerIdentity = Depends(get_current_owner),
):
    return OWNER_ACTIONS.dispatch(action_id, owner, payload)
