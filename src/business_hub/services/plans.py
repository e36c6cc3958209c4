"""Plan catalogue and plan selection."""

from dataclasses import dataclass, field

from business_hub.adapters.gateways import PlansGateway, SubscriptionsGateway
from business_hub.domain.errors import ApiError
from business_hub.domain.models import Plan
from business_hub.services.notices import Notice, failure_notice, success_notice


def plan_tier(name: str) -> str:
    """Classify a plan by name for its badge."""
    lowered = name.lower()
    if "premium" in lowered or "pro" in lowered:
        return "premium"
    if "enterprise" in lowered or "business" in lowered:
        return "enterprise"
    return "standard"


def is_popular(name: str) -> bool:
    lowered = name.lower()
    return "pro" in lowered or "business" in lowered


@dataclass
class PlanCatalogue:
    plans: list[Plan] = field(default_factory=list)
    notice: Notice | None = None


@dataclass(frozen=True)
class PlanSelection:
    """Outcome of choosing a plan; ``activated`` means go to the dashboard."""

    activated: bool
    notice: Notice


@dataclass
class PlanService:
    """Application service for the plan selection page."""

    plans_gateway: PlansGateway
    subscriptions_gateway: SubscriptionsGateway

    async def load(self) -> PlanCatalogue:
        try:
            return PlanCatalogue(plans=await self.plans_gateway.list())
        except ApiError as exc:
            return PlanCatalogue(
                notice=failure_notice(
                    "Error loading plans", exc, "Failed to load subscription plans"
                )
            )

    async def select(self, plan_id: str) -> PlanSelection:
        """Subscribe the business to a plan."""
        try:
            await self.subscriptions_gateway.create({"planId": plan_id})
        except ApiError as exc:
            return PlanSelection(
                activated=False,
                notice=failure_notice(
                    "Failed to select plan", exc, "Please try again"
                ),
            )
        return PlanSelection(
            activated=True,
            notice=success_notice(
                "Plan selected successfully", "Your subscription has been activated!"
            ),
        )
