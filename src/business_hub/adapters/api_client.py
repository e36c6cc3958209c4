"""HTTP client for the BusinessHub REST API.

Every outbound call goes through :class:`HttpxApiClient`, which attaches the
stored bearer token and treats an unauthorized response as the end of the
session: the store is cleared and subscribers are told the session expired.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

import httpx
from business_hub.adapters.api_models import ApiEnvelope
from business_hub.adapters.session_store import SessionStore
from business_hub.domain.errors import (
    ApiRequestError,
    ApiTransportError,
    SessionExpiredError,
)
from business_hub.domain.session import SessionExpired

logger = logging.getLogger(__name__)

SessionExpiredListener = Callable[[SessionExpired], None]


class ApiClient(Protocol):
    """Interface for authenticated calls to the remote API."""

    async def request(
        self, method: str, path: str, payload: dict[str, object] | None = None
    ) -> ApiEnvelope:
        """Send a request and return the parsed response envelope."""

    def on_session_expired(self, listener: SessionExpiredListener) -> None:
        """Subscribe to session-expired events."""


@dataclass
class HttpxApiClient(ApiClient):
    """API client implemented with httpx."""

    base_url: str
    session_store: SessionStore
    http_client: httpx.AsyncClient
    listeners: list[SessionExpiredListener] = field(default_factory=list)

    @classmethod
    def create(cls, base_url: str, session_store: SessionStore) -> "HttpxApiClient":
        """Create an API client with a managed httpx session."""
        return cls(
            base_url=base_url,
            session_store=session_store,
            http_client=httpx.AsyncClient(
                headers={"Content-Type": "application/json"}
            ),
        )

    def on_session_expired(self, listener: SessionExpiredListener) -> None:
        """Register a callback fired whenever the API rejects the session."""
        self.listeners.append(listener)

    async def request(
        self, method: str, path: str, payload: dict[str, object] | None = None
    ) -> ApiEnvelope:
        """Send a request with the stored credentials and inspect the response."""
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            response = await self.http_client.request(
                method, url, json=payload, headers=self._auth_headers()
            )
        except httpx.TransportError as exc:
            logger.warning("Transport failure on %s %s: %s", method, path, exc)
            raise ApiTransportError from exc
        return self._inspect(method, path, response)

    async def get(self, path: str) -> ApiEnvelope:
        return await self.request("GET", path)

    async def post(self, path: str, payload: dict[str, object]) -> ApiEnvelope:
        return await self.request("POST", path, payload)

    async def put(self, path: str, payload: dict[str, object]) -> ApiEnvelope:
        return await self.request("PUT", path, payload)

    async def delete(self, path: str) -> ApiEnvelope:
        return await self.request("DELETE", path)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    def _auth_headers(self) -> dict[str, str]:
        token = self.session_store.get_token()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _inspect(self, method: str, path: str, response: httpx.Response) -> ApiEnvelope:
        if response.status_code == httpx.codes.UNAUTHORIZED:
            self._expire_session(method, path)
            raise SessionExpiredError
        envelope = _parse_envelope(response)
        if response.is_error:
            message = envelope.message if envelope else None
            logger.warning(
                "API %s %s failed with status %s", method, path, response.status_code
            )
            raise ApiRequestError(response.status_code, message)
        if envelope is None:
            if not response.content:
                return ApiEnvelope(success=True)
            raise ApiRequestError(response.status_code, "Malformed API response")
        return envelope

    def _expire_session(self, method: str, path: str) -> None:
        logger.warning(
            "Session rejected on %s %s; clearing stored session", method, path
        )
        self.session_store.clear()
        event = SessionExpired(method=method, path=path)
        for listener in list(self.listeners):
            listener(event)


def _parse_envelope(response: httpx.Response) -> ApiEnvelope | None:
    try:
        return ApiEnvelope.model_validate(response.json())
    except ValueError:  # includes pydantic.ValidationError
        return None
