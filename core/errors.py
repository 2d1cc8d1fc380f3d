# core/errors.py

from typing import Optional

from models.enums import BaseStrEnum


# =================================================================
#  ERROR KINDS
# =================================================================

class ErrorKind(BaseStrEnum):
    """What went wrong in the data-access layer, independent of wording."""

    permission_denied = "permission_denied"
    not_found = "not_found"
    conflict = "conflict"
    unknown = "unknown"


# PostgREST / Postgres codes
PERMISSION_CODES = {"42501", "PGRST301", "PGRST302"}
NOT_FOUND_CODES = {"PGRST116"}
CONFLICT_CODES = {"23505", "23503"}

PERMISSION_MARKERS = ("permission", "policy", "row-level security")
NOT_FOUND_MARKERS = ("no rows", "not found", "does not exist")
CONFLICT_MARKERS = ("duplicate", "unique", "foreign key")

RLS_HINT = "Check the row-level security policies for this table in the Supabase SQL editor."


def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1 - PostgREST APIError / GoTrue AuthApiError
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Case 2 - errors with args (common)
    if getattr(error, "args", None):
        return str(error.args[0])

    # Case 3 - plain string fallback
    return str(error) or "Unknown Supabase error"


def classify_supabase_error(error: Exception) -> ErrorKind:
    """
    Map a provider error onto an ErrorKind.
    Codes win over message text; text is only consulted when no code matches.
    """
    code = str(getattr(error, "code", "") or "")

    if code in PERMISSION_CODES:
        return ErrorKind.permission_denied
    if code in NOT_FOUND_CODES:
        return ErrorKind.not_found
    if code in CONFLICT_CODES:
        return ErrorKind.conflict

    text = extract_supabase_error(error).lower()
    if any(marker in text for marker in PERMISSION_MARKERS):
        return ErrorKind.permission_denied
    if any(marker in text for marker in CONFLICT_MARKERS):
        return ErrorKind.conflict
    if any(marker in text for marker in NOT_FOUND_MARKERS):
        return ErrorKind.not_found

    return ErrorKind.unknown


# =================================================================
#  EXCEPTIONS
# =================================================================

class PortalError(Exception):
    """Base for every failure that is shown to the user as a notice."""

    status_code = 500
    kind = ErrorKind.unknown

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputValidationError(PortalError):
    """Missing or malformed input; raised before any backend call."""

    status_code = 400
    kind = "validation"


class AuthenticationError(PortalError):
    status_code = 401
    kind = "authentication"


class UnknownActionError(PortalError):
    status_code = 404
    kind = ErrorKind.not_found


KIND_STATUS = {
    ErrorKind.permission_denied: 403,
    ErrorKind.not_found: 404,
    ErrorKind.conflict: 409,
    ErrorKind.unknown: 500,
}


class DataAccessError(PortalError):
    """
    A Supabase call failed, or a domain rule rejected the request.

    `message` is what the user sees; `detail` keeps the raw provider text.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        operation: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        if kind == ErrorKind.permission_denied:
            message = f"{message}. {RLS_HINT}"
        super().__init__(message)
        self.kind = kind
        self.operation = operation
        self.detail = detail
        self.status_code = KIND_STATUS[kind]

    @classmethod
    def from_exception(cls, error: Exception, operation: str) -> "DataAccessError":
        detail = extract_supabase_error(error)
        return cls(
            classify_supabase_error(error),
            f"{operation}: {detail}",
            operation=operation,
            detail=detail,
        )


def not_found(message: str) -> DataAccessError:
    return DataAccessError(ErrorKind.not_found, message)


def conflict(message: str) -> DataAccessError:
    return DataAccessError(ErrorKind.conflict, message)
