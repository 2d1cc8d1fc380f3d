# models/maintenance.py

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, field_validator

from models.actions import ActionLink
from models.enums import MaintenanceStatus
from models.notice import Notice


class MaintenanceCreate(BaseModel):
    request: str = ""


class MaintenanceStatusUpdate(BaseModel):
    status: str


class MaintenanceRead(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    request: Optional[str] = None
    status: MaintenanceStatus = MaintenanceStatus.open
    created_at: Optional[datetime] = None

    created_display: str = ""
    actions: List[ActionLink] = []

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v):
        return str(v)

    @field_validator("status", mode="before")
    @classmethod
    def status_default(cls, v):
        return v or MaintenanceStatus.open


class MaintenanceResult(BaseModel):
    request: MaintenanceRead
    requests: List[MaintenanceRead] = []
    notice: Notice
