"""Display formatting and status styling."""

from datetime import datetime

UNLIMITED = -1

_MUTED = "text-muted-foreground bg-muted/50"

ORDER_STATUS_STYLES = {
    "completed": "text-success bg-success/10",
    "processing": "text-warning bg-warning/10",
    "cancelled": "text-destructive bg-destructive/10",
}

PAYMENT_STATUS_STYLES = {
    "paid": "text-success bg-success/10",
    "failed": "text-destructive bg-destructive/10",
    "pending": "text-warning bg-warning/10",
}

SUBSCRIPTION_STATUS_STYLES = {
    "active": "text-success bg-success/10 border-success/20",
    "inactive": "text-destructive bg-destructive/10 border-destructive/20",
    "cancelled": "text-warning bg-warning/10 border-warning/20",
}
SUBSCRIPTION_STATUS_DEFAULT = f"{_MUTED} border-border"

DASHBOARD_ORDER_STATUS_STYLES = {
    "completed": "text-success",
    "processing": "text-warning",
    "pending": "text-muted-foreground",
}


def status_style(table: dict[str, str], status: str, default: str = _MUTED) -> str:
    """Look up the style for a status, falling back to the muted style."""
    return table.get(status, default)


def payment_status_style(status: str) -> str:
    # Unknown payment states render like pending ones.
    return status_style(PAYMENT_STATUS_STYLES, status, PAYMENT_STATUS_STYLES["pending"])


def subscription_status_style(status: str) -> str:
    return status_style(SUBSCRIPTION_STATUS_STYLES, status, SUBSCRIPTION_STATUS_DEFAULT)


def format_currency(amount: float) -> str:
    """Format an amount as US dollars, e.g. ``$1,234.50``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_date(value: datetime | None, *, long: bool = False) -> str:
    """Format a date as ``Jan 5, 2024`` (or ``January 5, 2024`` when long)."""
    if value is None:
        return "N/A"
    month = "%B" if long else "%b"
    return f"{value.strftime(month)} {value.day}, {value.year}"


def limit_label(limit: int) -> str:
    """Render a plan limit, where -1 means unlimited."""
    return "Unlimited" if limit == UNLIMITED else str(limit)


def capitalize_status(status: str) -> str:
    return status[:1].upper() + status[1:]
