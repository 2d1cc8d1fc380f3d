from typing import Union

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from core import notices
from core.session_store import SessionStore, get_session_store
from dependencies.auth import bearer_scheme, get_current_owner
from models.auth import LoginRequest, LoginResponse, MeResponse, OwnerIdentity, TenantSession
from models.enums import Role
from models.notice import Notice
from services import auth_service


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


def get_identity(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    store: SessionStore = Depends(get_session_store),
) -> Union[OwnerIdentity, TenantSession]:
    """Tenant session if the token is one of ours, otherwise an owner JWT."""
    token = credentials.credentials
    session = TenantSession.from_store(token, store.get(token))
    if session is not None:
        return session
    return get_current_owner(credentials)


# ============================================================
# LOGIN
# ============================================================
@router.post("/login", response_model=LoginResponse, summary="Owner or tenant login")
def login(payload: LoginRequest, store: SessionStore = Depends(get_session_store)):
    """
    `role = "owner"` signs in through Supabase Auth.
    `role = "user"` checks the tenant's row in the users table and opens a
    portal session.
    """
    return auth_service.login(payload, store)


# ============================================================
# LOGOUT
# ============================================================
@router.post("/logout", response_model=Notice, summary="End the current session")
def logout(
    identity=Depends(get_identity),
    store: SessionStore = Depends(get_session_store),
):
    if isinstance(identity, TenantSession):
        auth_service.logout_tenant(identity, store)
    else:
        auth_service.logout_owner(identity)
    return notices.success("Logged out")


# ============================================================
# CURRENT IDENTITY
# ============================================================
@router.get("/me", response_model=MeResponse, summary="Current owner or tenant")
def read_me(identity=Depends(get_identity)):
    if isinstance(identity, TenantSession):
        return MeResponse(
            role=Role.user,
            email=identity.email,
            name=identity.name,
            room=identity.room,
        )
    return MeResponse(role=Role.owner, email=identity.email)
