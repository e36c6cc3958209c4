"""Login, registration and logout."""

import logging
from dataclasses import dataclass

from business_hub.adapters.gateways import AuthGateway
from business_hub.adapters.session_store import SessionStore
from business_hub.domain.models import Business
from business_hub.domain.session import Session

logger = logging.getLogger(__name__)

DEFAULT_BUSINESS_NAME = "Business"


@dataclass
class AuthService:
    """Application service for the session lifecycle."""

    gateway: AuthGateway
    session_store: SessionStore

    async def login(self, email: str, password: str) -> Business:
        """Authenticate and store the token and business profile together."""
        result = await self.gateway.login(email, password)
        self.session_store.save(Session(token=result.token, business=result.business))
        logger.info("Logged in business %s", result.business.id)
        return result.business

    async def register(self, business_name: str, email: str, password: str) -> None:
        """Create a business account."""
        await self.gateway.register(business_name, email, password)

    def logout(self) -> None:
        """Forget the stored session without contacting the API."""
        self.session_store.clear()

    def is_authenticated(self) -> bool:
        return self.session_store.get_token() is not None

    def business_name(self) -> str:
        """Return the cached business name for greetings."""
        business = self.session_store.get_business()
        return business.name if business and business.name else DEFAULT_BUSINESS_NAME
