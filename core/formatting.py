# core/formatting.py

from datetime import date, datetime
from typing import Optional, Union

from core.config import settings


def to_amount(value) -> float:
    """Parse a stored amount; anything unparseable counts as zero."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def format_currency(amount) -> str:
    """`₹1200.00` style; missing amounts render as zero."""
    return f"{settings.CURRENCY_SYMBOL}{to_amount(amount):.2f}"


def format_date(value: Optional[Union[str, date, datetime]]) -> str:
    """
    Render an ISO timestamp (as Supabase returns it) as "January 5, 2025".
    Empty or unparseable values render as "N/A".
    """
    if not value:
        return "N/A"

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return "N/A"

    return f"{value.strftime('%B')} {value.day}, {value.year}"
