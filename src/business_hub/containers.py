"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from business_hub.adapters.api_client import ApiClient, HttpxApiClient
from business_hub.adapters.gateways import (
    AuthGateway,
    CustomersGateway,
    DashboardGateway,
    OrdersGateway,
    PlansGateway,
    ProductsGateway,
    SubscriptionsGateway,
)
from business_hub.adapters.session_store import FileSessionStore, SessionStore
from business_hub.config import Settings
from business_hub.services.auth import AuthService
from business_hub.services.customers import CustomerService
from business_hub.services.dashboard import DashboardService
from business_hub.services.orders import OrderService
from business_hub.services.plans import PlanService
from business_hub.services.products import ProductService
from business_hub.services.subscriptions import SubscriptionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_store: SessionStore
    api_client: ApiClient
    auth_service: AuthService
    dashboard_service: DashboardService
    plan_service: PlanService
    product_service: ProductService
    customer_service: CustomerService
    order_service: OrderService
    subscription_service: SubscriptionService
    close_resources: Callable[[], Awaitable[None]]


def build_services(
    settings: Settings,
    session_store: SessionStore,
    api_client: ApiClient,
    close_resources: Callable[[], Awaitable[None]],
) -> AppContainer:
    """Wire gateways and services on top of an existing client."""
    products_gateway = ProductsGateway(api_client)
    customers_gateway = CustomersGateway(api_client)
    subscriptions_gateway = SubscriptionsGateway(api_client)
    return AppContainer(
        settings=settings,
        session_store=session_store,
        api_client=api_client,
        auth_service=AuthService(AuthGateway(api_client), session_store),
        dashboard_service=DashboardService(DashboardGateway(api_client)),
        plan_service=PlanService(
            plans_gateway=PlansGateway(api_client),
            subscriptions_gateway=subscriptions_gateway,
        ),
        product_service=ProductService(products_gateway),
        customer_service=CustomerService(customers_gateway),
        order_service=OrderService(
            orders_gateway=OrdersGateway(api_client),
            customers_gateway=customers_gateway,
            products_gateway=products_gateway,
        ),
        subscription_service=SubscriptionService(subscriptions_gateway),
        close_resources=close_resources,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    session_store = FileSessionStore(Path(resolved_settings.session_file))
    api_client = HttpxApiClient.create(resolved_settings.api_base_url, session_store)

    async def close_resources() -> None:
        await api_client.close()

    return build_services(resolved_settings, session_store, api_client, close_resources)
