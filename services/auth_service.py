# services/auth_service.py

import hmac

from core import notices
from core.data_access import lookup_one
from core.errors import (
    AuthenticationError,
    DataAccessError,
    ErrorKind,
    InputValidationError,
    extract_supabase_error,
)
from core.logging_config import logger
from core.session_store import SessionStore
from core.supabase_client import get_supabase_client
from core.validation import require
from models.auth import LoginRequest, LoginResponse, OwnerIdentity, TenantSession
from models.enums import Role


INVALID_CREDENTIALS = "Invalid email or password"


# ============================================================
# LOGIN
# ============================================================
def login(payload: LoginRequest, store: SessionStore) -> LoginResponse:
    email = payload.email.strip()
    require(email, payload.password, payload.role)

    try:
        role = Role(payload.role)
    except ValueError:
        raise InputValidationError("Please select a valid role")

    if role == Role.owner:
        return login_owner(email, payload.password)
    return login_tenant(email, payload.password, store)


def login_owner(email: str, password: str) -> LoginResponse:
    """Credential check is delegated entirely to Supabase Auth."""
    client = get_supabase_client()
    if not client:
        raise DataAccessError(ErrorKind.unknown, "Supabase client not configured")

    try:
        response = client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
    except Exception as e:
        logger.warning(f"Owner login failed for {email}: {type(e).__name__}")
        raise AuthenticationError(extract_supabase_error(e) or "Invalid owner credentials")

    session = getattr(response, "session", None)
    if not session or not session.access_token:
        raise AuthenticationError("Invalid owner credentials")

    logger.info(f"Owner logged in: {email}")
    return LoginResponse(
        access_token=session.access_token,
        role=Role.owner,
        redirect_to="owner",
        notice=notices.success("Logged in"),
    )


def login_tenant(email: str, password: str, store: SessionStore) -> LoginResponse:
    """
    Tenants live in the `users` table: look the row up by email
    (case-insensitive, exact-match fallback) and compare trimmed
    plaintext passwords.
    """
    try:
        row = lookup_one("users", "email", email, operation="Login error")
    except DataAccessError as err:
        if err.kind == ErrorKind.not_found:
            raise AuthenticationError(INVALID_CREDENTIALS)
        logger.error(f"Tenant lookup failed for {email}: {err.detail}")
        raise

    if not row:
        logger.warning(f"Tenant login failed for {email}: no such user")
        raise AuthenticationError(INVALID_CREDENTIALS)

    stored = str(row.get("password") or "").strip()
    entered = password.strip()
    if not hmac.compare_digest(stored.encode(), entered.encode()):
        logger.warning(f"Tenant login failed for {email}: password mismatch")
        raise AuthenticationError(INVALID_CREDENTIALS)

    values = TenantSession.store_values(row)
    if values is None:
        logger.warning(f"Tenant login failed for {email}: users row lacks name or id")
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = store.create(values)

    logger.info(f"Tenant logged in: {row.get('email')}")
    return LoginResponse(
        access_token=token,
        role=Role.user,
        redirect_to="user",
        name=row.get("name"),
        notice=notices.success(f"Welcome, {row.get('name')}"),
    )


# ============================================================
# LOGOUT
# ============================================================
def logout_owner(owner: OwnerIdentity) -> None:
    client = get_supabase_client()
    if not client:
        return

    try:
        client.auth.admin.sign_out(owner.access_token)
    except Exception as e:
        # The token still expires on its own
        logger.warning(f"Owner sign-out failed for {owner.email}: {extract_supabase_error(e)}")
    else:
        logger.info(f"Owner logged out: {owner.email}")


def logout_tenant(session: TenantSession, store: SessionStore) -> None:
    store.delete(session.token)
    logger.info(f"Tenant logged out: {session.email}")
