# models/rent.py

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, field_validator

from models.actions import ActionLink
from models.enums import RentStatus
from models.notice import Notice
from models.user import UserRead


class RentGenerate(BaseModel):
    month: str = ""
    amount: Optional[float] = None


class RentRead(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    month: Optional[str] = None
    amount: float = 0
    status: RentStatus = RentStatus.pending
    created_at: Optional[datetime] = None

    amount_display: str = ""
    actions: List[ActionLink] = []

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v):
        return str(v)

    @field_validator("amount", mode="before")
    @classmethod
    def amount_default(cls, v):
        return 0 if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def status_default(cls, v):
        return v or RentStatus.pending


class RentGenerationResult(BaseModel):
    month: str
    generated: int
    skipped: int
    rents: List[RentRead]
    notice: Notice


class PendingRents(BaseModel):
    rents: List[RentRead]
    total_pending: float
    total_pending_display: str
    notice: Optional[Notice] = None


class PaymentRequest(BaseModel):
    upi_id: str = ""


class PaymentResult(BaseModel):
    rent: RentRead
    close_after_seconds: int
    pending: PendingRents
    notice: Notice


class RentStatusResult(BaseModel):
    rent: RentRead
    notice: Notice


class DeletionReview(BaseModel):
    user: UserRead
    rents: List[RentRead]
    deposit_to_return: float
    deposit_display: str
    unpaid_count: int
    all_paid: bool
    can_delete: bool
    actions: List[ActionLink] = []
    notice: Notice
