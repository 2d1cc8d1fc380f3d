from typing import Optional
from pydantic import BaseModel

from models.enums import Role
from models.notice import Notice


# -----------------------------------------------------
# LOGIN REQUEST
# -----------------------------------------------------
class LoginRequest(BaseModel):
    # Blank defaults so missing fields reach the "fill in all fields" check
    email: str = ""
    password: str = ""
    role: str = ""


# -----------------------------------------------------
# LOGIN RESPONSE
# -----------------------------------------------------
class LoginResponse(BaseModel):
    access_token: str         # Supabase JWT (owner) or portal session token (tenant)
    token_type: str = "bearer"
    role: Role
    redirect_to: str          # "owner" or "user" dashboard
    name: Optional[str] = None
    notice: Notice


# -----------------------------------------------------
# IDENTITIES
# -----------------------------------------------------
class OwnerIdentity(BaseModel):
    id: str
    email: str
    access_token: str


REQUIRED_SESSION_KEYS = ("user_email", "user_name", "user_id")


class TenantSession(BaseModel):
    """Explicit tenant session, rebuilt from the session store on every request."""
    token: str
    email: str
    name: str
    user_id: str
    room: Optional[str] = None

    @classmethod
    def from_store(cls, token: str, values: Optional[dict]) -> Optional["TenantSession"]:
        """None unless email, name and id are all present."""
        if not values:
            return None
        if not all(values.get(k) for k in REQUIRED_SESSION_KEYS):
            return None
        return cls(
            token=token,
            email=values["user_email"],
            name=values["user_name"],
            user_id=str(values["user_id"]),
            room=values.get("user_room") or None,
        )

    @staticmethod
    def store_values(row: dict) -> Optional[dict]:
        """Session-store values for a `users` row, or None if the row cannot back a session."""
        values = {
            "user_email": str(row.get("email") or "").strip(),
            "user_name": str(row.get("name") or "").strip(),
            "user_id": str(row.get("id") or ""),
            "user_room": str(row.get("room") or ""),
        }
        if not all(values[k] for k in REQUIRED_SESSION_KEYS):
            return None
        return values


class MeResponse(BaseModel):
    role: Role
    email: str
    name: Optional[str] = None
    room: Optional[str] = None
