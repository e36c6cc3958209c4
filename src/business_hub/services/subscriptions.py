"""Subscription overview page logic."""

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime

from business_hub.adapters.gateways import SubscriptionsGateway
from business_hub.domain.errors import ApiError
from business_hub.domain.models import Subscription
from business_hub.services.notices import Notice, failure_notice, success_notice

BILLING_PERIOD_DAYS = 30
_SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class SubscriptionListing:
    subscriptions: list[Subscription] = field(default_factory=list)
    notice: Notice | None = None

    @property
    def active(self) -> list[Subscription]:
        return active_subscriptions(self.subscriptions)


def active_subscriptions(subscriptions: list[Subscription]) -> list[Subscription]:
    return [sub for sub in subscriptions if sub.status == "active"]


def plan_name(subscription: Subscription, default: str = "Unknown Plan") -> str:
    plan = subscription.plan.entity
    return plan.name if plan else default


def days_remaining(end_date: datetime, now: datetime | None = None) -> int:
    """Whole days left until ``end_date``, rounded up."""
    current = now or datetime.now(tz=UTC)
    if end_date.tzinfo is None:
        end_date = end_date.replace(tzinfo=UTC)
    return math.ceil((end_date - current).total_seconds() / _SECONDS_PER_DAY)


def period_progress(days_left: int) -> float:
    """Share of a billing period still remaining, clamped to 0-100."""
    return max(0.0, min(100.0, days_left / BILLING_PERIOD_DAYS * 100))


@dataclass
class SubscriptionService:
    """Application service for the subscriptions page."""

    gateway: SubscriptionsGateway

    async def load(self) -> SubscriptionListing:
        try:
            return SubscriptionListing(subscriptions=await self.gateway.list())
        except ApiError as exc:
            return SubscriptionListing(
                notice=failure_notice(
                    "Error loading subscriptions",
                    exc,
                    "Failed to load subscription data",
                )
            )

    async def update(
        self, subscription_id: str, changes: dict[str, object]
    ) -> SubscriptionListing:
        """Apply a partial update, then re-fetch the subscriptions."""
        try:
            await self.gateway.update(subscription_id, changes)
            notice = success_notice(
                "Subscription updated", "Subscription has been updated successfully"
            )
        except ApiError as exc:
            notice = failure_notice("Error", exc, "Failed to update subscription")
        listing = await self.load()
        if listing.notice is None:
            listing.notice = notice
        return listing
