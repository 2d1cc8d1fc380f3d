# models/user.py

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator

from models.actions import ActionLink
from models.notice import Notice


# ===============================================================
# TENANT (users table) MODELS
# ===============================================================

class UserCreate(BaseModel):
    """Owner's add-user form."""
    name: str
    room: str
    contact_no: str
    email: EmailStr
    password: str
    deposit: float = Field(ge=0)

    @field_validator("room", mode="before")
    @classmethod
    def room_as_str(cls, v):
        return None if v is None else str(v)


class UserRead(BaseModel):
    """A roster row. The password column is never returned."""
    id: str
    name: Optional[str] = None
    room: Optional[str] = None
    contact_no: Optional[str] = None
    email: Optional[str] = None
    deposit: Optional[float] = None
    created_at: Optional[datetime] = None

    deposit_display: str = ""
    actions: List[ActionLink] = []

    @field_validator("id", "room", "contact_no", mode="before")
    @classmethod
    def as_str(cls, v):
        return None if v is None else str(v)


# ===============================================================
# ROOMS
# ===============================================================

class RoomOption(BaseModel):
    value: str
    label: str
    disabled: bool = False


class RoomAvailability(BaseModel):
    available: List[str]
    options: List[RoomOption]
    selectable: bool


# ===============================================================
# MUTATION RESULTS
# ===============================================================

class AddUserResult(BaseModel):
    user: UserRead
    users: List[UserRead]
    rooms: RoomAvailability
    notice: Notice


class DeleteUserResult(BaseModel):
    user_id: str
    rents_deleted: int
    maintenance_deleted: int
    users: List[UserRead]
    rooms: RoomAvailability
    notice: Notice
