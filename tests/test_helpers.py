# tests/test_helpers.py

"""
Tests for formatting, validation, error classification, lookups and the
session store.
"""

import pytest
from unittest.mock import patch
from postgrest.exceptions import APIError

from core.actions import ActionTable, OwnerAction
from core.data_access import MatchMode, escape_like, lookup_rows
from core.errors import (
    DataAccessError,
    ErrorKind,
    InputValidationError,
    UnknownActionError,
    classify_supabase_error,
)
from core.formatting import format_currency, format_date
from core.session_store import InMemorySessionStore
from core.validation import validate_upi_id
from models.actions import ActionRequest
from models.auth import TenantSession
from models.enums import Role
from services.owner_service import compute_available_rooms, plan_rent_rows, unpaid_rents


# ============================================================
# FORMATTING
# ============================================================
def test_format_currency():
    assert format_currency(1200) == "₹1200.00"
    assert format_currency("99.5") == "₹99.50"
    assert format_currency(None) == "₹0.00"


def test_format_date():
    assert format_date("2025-01-05T10:20:30.123456+00:00") == "January 5, 2025"
    assert format_date("2025-12-31T00:00:00Z") == "December 31, 2025"
    assert format_date(None) == "N/A"
    assert format_date("yesterday") == "N/A"


# ============================================================
# VALIDATION
# ============================================================
@pytest.mark.parametrize("upi_id", ["name@bank", "asha.k-1_x@okaxis", "ab@cd"])
def test_valid_upi_ids(upi_id):
    assert validate_upi_id(f" {upi_id} ") == upi_id


@pytest.mark.parametrize("upi_id", ["bad-format", "a@bank", "name@bank1", "name@b", "na me@bank", ""])
def test_invalid_upi_ids(upi_id):
    with pytest.raises(InputValidationError):
        validate_upi_id(upi_id)


# ============================================================
# ERROR KINDS
# ============================================================
@pytest.mark.parametrize(
    "error, kind",
    [
        (APIError({"code": "42501", "message": "denied"}), ErrorKind.permission_denied),
        (APIError({"code": "PGRST116", "message": "JSON object requested, multiple (or no) rows returned"}), ErrorKind.not_found),
        (APIError({"code": "23505", "message": "duplicate key value"}), ErrorKind.conflict),
        (Exception("new row violates row-level security policy"), ErrorKind.permission_denied),
        (Exception("connection reset"), ErrorKind.unknown),
    ],
)
def test_classify_supabase_error(error, kind):
    assert classify_supabase_error(error) == kind


def test_permission_error_carries_hint():
    err = DataAccessError.from_exception(APIError({"code": "42501", "message": "denied"}), "Error loading rents")

    assert err.status_code == 403
    assert err.detail == "denied"
    assert err.message.startswith("Error loading rents: denied.")
    assert "row-level security" in err.message


# ============================================================
# DOMAIN RULES
# ============================================================
def test_available_rooms_is_pool_minus_occupied():
    assert compute_available_rooms(["1", 2, " 15 ", None, ""]) == [str(n) for n in range(3, 15)]
    assert compute_available_rooms(str(n) for n in range(1, 16)) == []


def test_plan_rent_rows_skips_covered_and_duplicates():
    users = [
        {"name": "A", "email": "A@x.com"},
        {"name": "A2", "email": "a@X.com"},
        {"name": "B", "email": "b@x.com"},
        {"name": "NoMail", "email": None},
    ]
    rows = plan_rent_rows(users, [{"email": "b@x.com"}], "2025-01", 1000)

    assert rows == [
        {"name": "A", "email": "A@x.com", "month": "2025-01", "amount": 1000, "status": "pending"}
    ]


def test_unpaid_rents():
    rents = [{"status": "paid"}, {"status": "pending"}, {"status": None}]
    assert len(unpaid_rents(rents)) == 2


# ============================================================
# LOOKUPS
# ============================================================
def test_escape_like():
    assert escape_like("a_b%c@x.com") == "a\\_b\\%c@x.com"


def test_lookup_treats_underscore_literally(fake_supabase):
    fake_supabase.seed(
        "users",
        {"name": "A", "email": "a_b@x.com"},
        {"name": "B", "email": "axb@x.com"},
    )

    rows = lookup_rows("users", "email", "A_B@X.COM")

    assert [r["name"] for r in rows] == ["A"]


def test_lookup_exact_mode(fake_supabase):
    fake_supabase.seed("users", {"name": "A", "email": "Foo@Bar.com"})

    assert lookup_rows("users", "email", "foo@bar.com", match=MatchMode.exact) == []


def test_lookup_without_fallback_raises(fake_supabase):
    fake_supabase.fail("users", "select", APIError({"code": "42501", "message": "denied"}))

    with pytest.raises(DataAccessError) as exc:
        lookup_rows("users", "email", "a@x.com", fallback=False)

    assert exc.value.kind == ErrorKind.permission_denied
    assert len(fake_supabase.calls) == 1


def test_lookup_unconfigured_client():
    with patch("core.data_access.get_supabase_client", return_value=None):
        with pytest.raises(DataAccessError) as exc:
            lookup_rows("users", "email", "a@x.com")

    assert exc.value.status_code == 500


# ============================================================
# SESSION STORE
# ============================================================
def test_session_store_roundtrip():
    store = InMemorySessionStore()
    token = store.create({"user_email": "a@x.com", "user_name": "A", "user_id": "1", "extra": "dropped"})

    assert store.get(token) == {"user_email": "a@x.com", "user_name": "A", "user_id": "1", "user_room": None}

    store.delete(token)
    assert store.get(token) is None


def test_session_store_expiry():
    store = InMemorySessionStore()
    store.set("t", {"user_email": "a@x.com"}, ttl_seconds=0)

    assert store.get("t") is None
    assert store.size() == 0


def test_tenant_session_requires_core_keys():
    assert TenantSession.from_store("t", {"user_email": "a@x.com", "user_name": "A"}) is None
    assert TenantSession.from_store("t", None) is None

    session = TenantSession.from_store(
        "t", {"user_email": "a@x.com", "user_name": "A", "user_id": 7, "user_room": ""}
    )
    assert session.user_id == "7"
    assert session.room is None


# ============================================================
# ACTION TABLES
# ============================================================
def test_action_table_dispatch():
    table = ActionTable(Role.owner, {OwnerAction.mark_rent_paid: lambda ctx, req: (ctx, req.target)})

    assert table.ids() == ["rent.mark_paid"]
    assert table.dispatch("rent.mark_paid", "owner", ActionRequest(target="9")) == ("owner", "9")

    with pytest.raises(UnknownActionError):
        table.dispatch("rent.delete", "owner", ActionRequest(target="9"))
