"""Display formatting for amounts, timestamps, ids and status labels."""

from __future__ import annotations

import re
from datetime import datetime

from marketplace_admin.domains.constants import STATUS_LABELS

# Postgres trims trailing zeros from fractional seconds; padded back to 6 digits before parsing.
_FRACTION_RE = re.compile(r"\.(\d+)(?=[+-]\d\d:?\d\d$|$)")

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "NGN": "₦",
    "INR": "₹",
    "KES": "KSh ",
    "GHS": "GH₵",
    "ZAR": "R",
}


def format_currency(amount: float | int | None, currency: str | None = "USD") -> str:
    """format_currency(1234.5, "USD") -> '$1,234.50'. Unknown codes are suffixed."""
    value = float(amount or 0)
    code = (currency or "USD").upper()
    sign = "-" if value < 0 else ""
    body = f"{abs(value):,.2f}"
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{sign}{symbol}{body}"
    return f"{sign}{body} {code}"


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_date(value: str | None) -> str:
    """'2024-03-05T10:00:00Z' -> 'Mar 05, 2024'."""
    dt = parse_timestamp(value)
    return dt.strftime("%b %d, %Y") if dt else "-"


def format_datetime(value: str | None) -> str:
    dt = parse_timestamp(value)
    return dt.strftime("%b %d, %Y %H:%M") if dt else "-"


def short_id(item_id: str | None) -> str:
    if not item_id:
        return "-"
    return f"#{item_id[-6:]}"


def status_label(kind: str, value: str | None) -> str:
    """Label for a status / type value; falls back to the title-cased value."""
    if not value:
        return "Unknown"
    labels = STATUS_LABELS.get(kind, {})
    return labels.get(value, value.replace("_", " ").title())
