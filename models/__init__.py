# -------------------------
# Enums
# -------------------------
from .enums import (
    BaseStrEnum,
    Role,
    RentStatus,
    MaintenanceStatus,
    NoticeLevel,
)

# -------------------------
# Notices + Actions
# -------------------------
from .notice import Notice
from .actions import ActionLink, ActionRequest

# -------------------------
# Auth Models
# -------------------------
from .auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    OwnerIdentity,
    TenantSession,
)

# -------------------------
# User (tenant) Models
# -------------------------
from .user import (
    UserCreate,
    UserRead,
    RoomOption,
    RoomAvailability,
    AddUserResult,
    DeleteUserResult,
)

# -------------------------
# Rent Models
# -------------------------
from .rent import (
    RentGenerate,
    RentRead,
    RentGenerationResult,
    RentStatusResult,
    PendingRents,
    PaymentRequest,
    PaymentResult,
    DeletionReview,
)

# -------------------------
# Maintenance Models
# -------------------------
from .maintenance import (
    MaintenanceCreate,
    MaintenanceStatusUpdate,
    MaintenanceRead,
    MaintenanceResult,
)
