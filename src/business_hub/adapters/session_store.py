"""Client-side session storage."""

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

from business_hub.domain.models import Business
from business_hub.domain.session import Session

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
BUSINESS_KEY = "business"


class SessionStore(Protocol):
    """Interface for the stored credential and business profile."""

    def get_token(self) -> str | None:
        """Return the stored bearer token, if any."""

    def get_business(self) -> Business | None:
        """Return the cached business profile, if any."""

    def save(self, session: Session) -> None:
        """Store the token and business profile together."""

    def clear(self) -> None:
        """Remove both the token and the business profile."""


@dataclass
class InMemorySessionStore(SessionStore):
    """Session store that lives for the lifetime of the process."""

    session: Session | None = None

    def get_token(self) -> str | None:
        return self.session.token if self.session else None

    def get_business(self) -> Business | None:
        return self.session.business if self.session else None

    def save(self, session: Session) -> None:
        self.session = session

    def clear(self) -> None:
        self.session = None


@dataclass
class FileSessionStore(SessionStore):
    """Durable session store backed by a JSON file.

    The file holds two keys, ``token`` and ``business``. Both are written and
    removed together.
    """

    path: Path

    def get_token(self) -> str | None:
        """Return the stored bearer token, if any."""
        token = self._read().get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def get_business(self) -> Business | None:
        """Return the cached business profile, if any."""
        raw = self._read().get(BUSINESS_KEY)
        return _parse_business(raw) if isinstance(raw, dict) else None

    def save(self, session: Session) -> None:
        """Persist the session to disk."""
        payload: dict[str, object] = {
            TOKEN_KEY: session.token,
            BUSINESS_KEY: _dump_business(session.business),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload), encoding="utf-8")

    def clear(self) -> None:
        """Delete the session file."""
        self.path.unlink(missing_ok=True)

    def _read(self) -> dict[str, object]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            data = {}
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable session file %s", self.path)
            data = {}
        return data if isinstance(data, dict) else {}


def _dump_business(business: Business | None) -> dict[str, object] | None:
    if business is None:
        return None
    payload = asdict(business)
    for key in ("created_at", "updated_at"):
        value = payload[key]
        payload[key] = value.isoformat() if value else None
    return payload


def _parse_business(raw: dict[str, object]) -> Business | None:
    business_id = raw.get("id")
    if not isinstance(business_id, str) or not business_id:
        logger.warning("Ignoring cached business without an id")
        return None
    return Business(
        id=business_id,
        name=str(raw.get("name") or ""),
        email=str(raw.get("email") or ""),
        phone=raw.get("phone"),  # type: ignore[arg-type]
        address=raw.get("address"),  # type: ignore[arg-type]
        created_at=_parse_datetime(raw.get("created_at")),
        updated_at=_parse_datetime(raw.get("updated_at")),
    )


def _parse_datetime(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
