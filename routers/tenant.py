# routers/tenant.py

from typing import List

from fastapi import APIRouter, Depends

from core.actions import ActionTable, TenantAction
from dependencies.auth import get_tenant_session
from models.actions import ActionRequest
from models.auth import TenantSession
from models.enums import Role
from models.maintenance import MaintenanceCreate, MaintenanceRead, MaintenanceResult
from models.rent import PaymentRequest, PaymentResult, PendingRents
from services import tenant_service


router = APIRouter(
    prefix="/tenant",
    tags=["Tenant"],
)


# ============================================================
# RENTS
# ============================================================
@router.get("/rents/pending", response_model=PendingRents, summary="Pending rents and total due")
def pending_rents(session: TenantSession = Depends(get_tenant_session)):
    return tenant_service.pending_rents(session)


@router.post("/rents/{rent_id}/pay", response_model=PaymentResult, summary="Pay a pending rent")
def pay_rent(
    rent_id: str,
    payload: PaymentRequest,
    session: TenantSession = Depends(get_tenant_session),
):
    """
    Validates the UPI id locally, then marks the rent paid.
    No payment gateway is contacted.
    """
    return tenant_service.pay_rent(session, rent_id, payload.upi_id)


# ============================================================
# MAINTENANCE
# ============================================================
@router.get("/maintenance", response_model=List[MaintenanceRead], summary="My maintenance requests")
def my_requests(session: TenantSession = Depends(get_tenant_session)):
    return tenant_service.my_requests(session)


@router.post("/maintenance", response_model=MaintenanceResult, summary="Submit a maintenance request")
def submit_request(
    payload: MaintenanceCreate,
    session: TenantSession = Depends(get_tenant_session),
):
    return tenant_service.submit_request(session, payload.request)


# ============================================================
# ACTION DISPATCH
# ============================================================
TENANT_ACTIONS = ActionTable(
    Role.user,
    {
        TenantAction.pay_rent: lambda session, req: tenant_service.pay_rent(
            session, req.target, req.value or ""
        ),
    },
)


@router.post("/actions/{action_id}", summary="Run a row action")
def run_action(
    action_id: str,
    payload: ActionRequest,
    session: TenantSession = Depends(get_tenant_session),
):
    return TENANT_ACTIONS.dispatch(action_id, session, payload)
