"""Dashboard metrics and derived values."""

from dataclasses import dataclass

from business_hub.adapters.gateways import DashboardGateway
from business_hub.domain.errors import ApiError
from business_hub.domain.models import DashboardMetrics, Order
from business_hub.services.formatting import (
    DASHBOARD_ORDER_STATUS_STYLES,
    UNLIMITED,
    capitalize_status,
    format_currency,
    status_style,
)
from business_hub.services.notices import Notice, failure_notice


@dataclass(frozen=True)
class MetricCard:
    title: str
    value: int


@dataclass(frozen=True)
class RecentOrderRow:
    code: str
    customer_name: str
    total: str
    status: str
    style: str


@dataclass(frozen=True)
class PhotoUsage:
    used: int
    limit: int
    percentage: float
    bar_width: float
    label: str


@dataclass(frozen=True)
class DashboardPage:
    """Everything the dashboard page shows."""

    business_name: str
    cards: list[MetricCard]
    photo_usage: PhotoUsage
    recent_orders: list[RecentOrderRow]
    notice: Notice | None = None


def photo_usage_percentage(metrics: DashboardMetrics) -> float:
    """Percentage of the photo quota in use; 0 for unlimited or empty quotas."""
    if metrics.photos_limit == UNLIMITED or metrics.photos_limit <= 0:
        return 0.0
    return metrics.photos_used / metrics.photos_limit * 100


def photo_usage(metrics: DashboardMetrics) -> PhotoUsage:
    percentage = photo_usage_percentage(metrics)
    unlimited = metrics.photos_limit == UNLIMITED
    return PhotoUsage(
        used=metrics.photos_used,
        limit=metrics.photos_limit,
        percentage=percentage,
        bar_width=min(percentage, 100.0),
        label="Unlimited" if unlimited else f"{percentage:.1f}%",
    )


def metric_cards(metrics: DashboardMetrics) -> list[MetricCard]:
    return [
        MetricCard("Total Products", metrics.total_products),
        MetricCard("Total Customers", metrics.total_customers),
        MetricCard("Total Orders", metrics.total_orders),
        MetricCard("Active Subscriptions", metrics.active_subscriptions),
    ]


def recent_order_row(order: Order) -> RecentOrderRow:
    customer = order.customer.entity
    return RecentOrderRow(
        code=order.code,
        customer_name=customer.name if customer else "Customer",
        total=format_currency(order.total),
        status=capitalize_status(order.status),
        style=status_style(DASHBOARD_ORDER_STATUS_STYLES, order.status),
    )


@dataclass
class DashboardService:
    """Application service behind the dashboard page."""

    gateway: DashboardGateway

    async def load(self, business_name: str) -> DashboardPage:
        """Fetch metrics and build the page, reporting failures as a notice."""
        notice = None
        try:
            metrics = await self.gateway.get_metrics()
        except ApiError as exc:
            metrics = DashboardMetrics()
            notice = failure_notice(
                "Error loading dashboard", exc, "Failed to load dashboard metrics"
            )
        return DashboardPage(
            business_name=business_name,
            cards=metric_cards(metrics),
            photo_usage=photo_usage(metrics),
            recent_orders=[recent_order_row(order) for order in metrics.recent_orders],
            notice=notice,
        )
