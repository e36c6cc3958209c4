"""Pydantic models for the remote API response envelope."""

from typing import Any

from pydantic import BaseModel

from business_hub.domain.errors import ApiRejectedError


class ApiEnvelope(BaseModel):
    """Wrapper shared by every API response."""

    success: bool
    data: Any = None
    message: str | None = None

    def unwrap(self) -> Any:
        """Return ``data``, refusing envelopes the server marked as failed."""
        if not self.success:
            raise ApiRejectedError(self.message)
        return self.data
