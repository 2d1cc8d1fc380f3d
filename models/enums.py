from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# LOGIN ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Role selector on the login form."""

    owner = "owner"
    user = "user"


# -----------------------------------------------------
# RENT STATUS
# -----------------------------------------------------
class RentStatus(BaseStrEnum):
    pending = "pending"
    paid = "paid"


# -----------------------------------------------------
# MAINTENANCE STATUS
# -----------------------------------------------------
class MaintenanceStatus(BaseStrEnum):
    """Workflow state for a maintenance request."""

    open = "open"
    in_progress = "in-progress"
    closed = "closed"


# -----------------------------------------------------
# NOTICE LEVEL
# -----------------------------------------------------
class NoticeLevel(BaseStrEnum):
    """Colour of the transient message shown to the user."""

    success = "success"
    error = "error"
    info = "info"
