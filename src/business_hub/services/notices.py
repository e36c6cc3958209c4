"""User-facing notifications for page actions."""

from dataclasses import dataclass

from business_hub.domain.errors import ApiError


@dataclass(frozen=True)
class Notice:
    """A transient message shown after an action."""

    title: str
    description: str
    variant: str = "default"


def success_notice(title: str, description: str) -> Notice:
    """Build a notice for a completed action."""
    return Notice(title=title, description=description)


def failure_notice(title: str, error: ApiError, fallback: str) -> Notice:
    """Build a notice for a failed call, preferring the server's message."""
    return Notice(
        title=title,
        description=error.message or fallback,
        variant="destructive",
    )
