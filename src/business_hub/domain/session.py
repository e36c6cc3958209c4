"""Domain models for the client-held session."""

from dataclasses import dataclass

from business_hub.domain.models import Business


@dataclass(frozen=True)
class Session:
    """Bearer token plus the cached business profile."""

    token: str
    business: Business | None


@dataclass(frozen=True)
class SessionExpired:
    """Emitted when the API rejects the stored credentials."""

    method: str
    path: str
