from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client

from core.config import settings
from core.session_store import SessionStore, get_session_store
from core.supabase_client import get_supabase_client
from models.auth import OwnerIdentity, TenantSession


bearer_scheme = HTTPBearer()


def _login_required(detail: str) -> HTTPException:
    headers = {"WWW-Authenticate": "Bearer"}
    if settings.FRONTEND_LOGIN_URL:
        headers["X-Login-Redirect"] = settings.FRONTEND_LOGIN_URL
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers=headers,
    )


# ============================================================
# OWNER SESSION (Supabase Auth JWT)
# ============================================================
def get_current_owner(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> OwnerIdentity:

    token = credentials.credentials
    unauthorized = _login_required("Owner session expired. Please log in again.")

    client: Client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    # ---------------------------------------------------------
    # Validate JWT via Supabase GoTrue
    # ---------------------------------------------------------
    try:
        auth_resp = client.auth.get_user(token)
        if not auth_resp or not auth_resp.user:
            raise unauthorized
        auth_user = auth_resp.user
    except Exception:
        raise unauthorized

    if not auth_user.email:
        raise unauthorized

    return OwnerIdentity(
        id=str(auth_user.id),
        email=auth_user.email,
        access_token=token,
    )


# ============================================================
# TENANT SESSION (portal session store)
# ============================================================
def get_tenant_session(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    store: SessionStore = Depends(get_session_store),
) -> TenantSession:

    token = credentials.credentials
    session = TenantSession.from_store(token, store.get(token))
    if session is None:
        raise _login_required("Tenant session expired. Please log in again.")
    return session
