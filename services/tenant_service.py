# services/tenant_service.py

from typing import List

from core import notices
from core.actions import TenantAction, action_link
from core.config import settings
from core.data_access import insert_rows, lookup_rows, select_rows, update_rows
from core.errors import DataAccessError, ErrorKind, conflict, not_found
from core.formatting import format_currency, format_date, to_amount
from core.logging_config import logger
from core.validation import require, validate_upi_id
from models.auth import TenantSession
from models.enums import MaintenanceStatus, RentStatus
from models.maintenance import MaintenanceRead, MaintenanceResult
from models.rent import PaymentResult, PendingRents, RentRead


def _pending_view(row: dict) -> RentRead:
    rent = RentRead(**row)
    rent.amount_display = format_currency(rent.amount)
    rent.actions = [action_link(TenantAction.pay_rent, rent.id, "Pay")]
    return rent


def _request_view(row: dict) -> MaintenanceRead:
    item = MaintenanceRead(**row)
    item.created_display = format_date(row.get("created_at"))
    return item


# ============================================================
# PENDING RENTS
# ============================================================
def pending_rents(session: TenantSession) -> PendingRents:
    rows = lookup_rows(
        "rents",
        "email",
        session.email,
        filters={"status": RentStatus.pending.value},
        order_by="created_at",
        desc=True,
        operation="Error loading pending rents",
    )

    total = sum(to_amount(r.get("amount")) for r in rows)
    ordered = sorted(rows, key=lambda r: r.get("month") or "")

    return PendingRents(
        rents=[_pending_view(r) for r in ordered],
        total_pending=total,
        total_pending_display=format_currency(total),
        notice=None if rows else notices.info("No pending rents found"),
    )


# ============================================================
# PAYMENT (status flip only, no gateway)
# ============================================================
def pay_rent(session: TenantSession, rent_id: str, upi_id: str) -> PaymentResult:
    upi_id = validate_upi_id(upi_id)

    rows = select_rows("rents", {"id": rent_id}, operation="Failed to process payment")
    rent = rows[0] if rows else None
    if not rent or str(rent.get("email") or "").strip().lower() != session.email.strip().lower():
        raise not_found("Rent record not found")
    if rent.get("status") == RentStatus.paid.value:
        raise conflict(f"Rent for {rent.get('month')} is already paid")

    updated = update_rows(
        "rents",
        {"id": rent_id},
        {"status": RentStatus.paid.value},
        operation="Failed to process payment",
    )
    if not updated:
        raise DataAccessError(ErrorKind.unknown, "Failed to process payment")

    paid = updated[0]
    logger.info(f"Tenant {session.email} paid rent {rent_id} for {paid.get('month')} via UPI {upi_id}")

    return PaymentResult(
        rent=_pending_view(paid).model_copy(update={"actions": []}),
        close_after_seconds=settings.PAYMENT_CLOSE_DELAY_SECONDS,
        pending=pending_rents(session),
        notice=notices.success(f"Payment successful! Rent for {paid.get('month')} marked as paid."),
    )


# ============================================================
# MAINTENANCE
# ============================================================
def my_requests(session: TenantSession) -> List[MaintenanceRead]:
    rows = lookup_rows(
        "maintenance",
        "email",
        session.email,
        order_by="created_at",
        desc=True,
        operation="Error loading requests",
    )
    return [_request_view(r) for r in rows]


def submit_request(session: TenantSession, text: str) -> MaintenanceResult:
    text = (text or "").strip()
    require(text, message="Please enter a request description")

    created = insert_rows(
        "maintenance",
        [
            {
                "name": session.name,
                "email": session.email,
                "request": text,
                "status": MaintenanceStatus.open.value,
            }
        ],
        operation="Failed to submit request",
    )
    if not created:
        raise DataAccessError(ErrorKind.unknown, "Failed to submit request")

    logger.info(f"Maintenance request submitted by {session.email}")
    return MaintenanceResult(
        request=_request_view(created[0]),
        requests=my_requests(session),
        notice=notices.success("Maintenance request submitted successfully!"),
    )
