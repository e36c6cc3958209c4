"""Tests for subscriptions and plan selection."""

import asyncio
from datetime import UTC, datetime, timedelta

from business_hub.containers import AppContainer
from business_hub.services.plans import is_popular, plan_tier
from business_hub.services.subscriptions import (
    days_remaining,
    period_progress,
    plan_name,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def test_days_remaining_rounds_up() -> None:
    assert days_remaining(NOW + timedelta(days=10), now=NOW) == 10
    assert days_remaining(NOW + timedelta(days=2, hours=1), now=NOW) == 3
    assert days_remaining(NOW - timedelta(days=1), now=NOW) == -1


def test_days_remaining_treats_naive_dates_as_utc() -> None:
    naive_end = datetime(2024, 3, 11, 12, 0)

    assert days_remaining(naive_end, now=NOW) == 10


def test_period_progress_is_clamped() -> None:
    assert period_progress(15) == 50.0
    assert period_progress(45) == 100.0
    assert period_progress(-3) == 0.0


def test_plan_tier_and_popularity() -> None:
    assert plan_tier("Premium") == "premium"
    assert plan_tier("Pro Monthly") == "premium"
    assert plan_tier("Enterprise") == "enterprise"
    assert plan_tier("Small Business") == "enterprise"
    assert plan_tier("Starter") == "standard"
    assert is_popular("Pro")
    assert is_popular("Business")
    assert not is_popular("Starter")


def test_select_plan_creates_subscription(
    container: AppContainer, backend, logged_in
) -> None:
    selection = asyncio.run(container.plan_service.select("plan-pro"))
    listing = asyncio.run(container.subscription_service.load())

    assert selection.activated
    assert selection.notice.title == "Plan selected successfully"
    assert [plan_name(sub) for sub in listing.active] == ["Pro"]
    assert backend.subscriptions[0]["plan"]["_id"] == "plan-pro"


def test_select_plan_failure_reports_message(
    container: AppContainer, backend, logged_in
) -> None:
    backend.fail("/subscriptions", 409, "Already subscribed")

    selection = asyncio.run(container.plan_service.select("plan-pro"))

    assert not selection.activated
    assert selection.notice.description == "Already subscribed"
    assert selection.notice.variant == "destructive"


def test_plans_load(container: AppContainer, logged_in) -> None:
    catalogue = asyncio.run(container.plan_service.load())

    assert [plan.id for plan in catalogue.plans] == ["plan-basic", "plan-pro"]


def test_update_subscription_refetches(
    container: AppContainer, backend, logged_in
) -> None:
    asyncio.run(container.plan_service.select("plan-basic"))
    subscription_id = backend.subscriptions[0]["_id"]

    listing = asyncio.run(
        container.subscription_service.update(subscription_id, {"status": "cancelled"})
    )

    assert listing.subscriptions[0].status == "cancelled"
    assert listing.active == []
    assert plan_name(listing.subscriptions[0]) == "Basic"
    assert backend.paths()[-2:] == [
        ("PUT", f"/subscriptions/{subscription_id}"),
        ("GET", "/subscriptions"),
    ]


def test_unpopulated_plan_name_uses_default(
    container: AppContainer, backend, logged_in
) -> None:
    backend.subscriptions.append(
        {"_id": "sub-1", "business": "biz-1", "plan": "plan-basic", "status": "inactive"}
    )

    listing = asyncio.run(container.subscription_service.load())

    assert plan_name(listing.subscriptions[0]) == "Unknown Plan"
