"""Resource gateways over the BusinessHub API.

Each gateway is a fixed set of calls with a fixed path and verb. Gateways do
no validation of their own; the remote API accepts or rejects payloads.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from business_hub.adapters.api_client import ApiClient
from business_hub.domain.models import (
    Business,
    Customer,
    DashboardMetrics,
    Order,
    OrderLine,
    Photo,
    Plan,
    Populated,
    Product,
    Reference,
    Subscription,
)

T = TypeVar("T")
Row = dict[str, object]


@dataclass(frozen=True)
class LoginResult:
    """Token and profile returned by a successful login."""

    token: str
    business: Business


@dataclass
class AuthGateway:
    """Calls for login and registration."""

    client: ApiClient

    async def login(self, email: str, password: str) -> LoginResult:
        """Exchange credentials for a bearer token."""
        envelope = await self.client.request(
            "POST", "/auth/login", {"email": email, "password": password}
        )
        data = envelope.unwrap()
        return LoginResult(
            token=str(data["token"]), business=parse_business(data["business"])
        )

    async def register(self, business_name: str, email: str, password: str) -> None:
        """Register a new business account."""
        envelope = await self.client.request(
            "POST",
            "/auth/register",
            {"businessName": business_name, "email": email, "password": password},
        )
        envelope.unwrap()


@dataclass
class PlansGateway:
    """Read-only access to the plan catalogue."""

    client: ApiClient

    async def list(self) -> list[Plan]:
        envelope = await self.client.request("GET", "/plans")
        return [parse_plan(row) for row in envelope.unwrap() or []]


@dataclass
class DashboardGateway:
    """Access to aggregate dashboard metrics."""

    client: ApiClient

    async def get_metrics(self) -> DashboardMetrics:
        envelope = await self.client.request("GET", "/dashboard")
        return parse_metrics(envelope.unwrap() or {})


@dataclass
class _CollectionGateway(Generic[T]):
    client: ApiClient
    path: str
    parse: Callable[[Row], T]

    async def list(self) -> list[T]:
        """Return every entity visible to the current session."""
        envelope = await self.client.request("GET", self.path)
        return [self.parse(row) for row in envelope.unwrap() or []]

    async def create(self, payload: dict[str, object]) -> T | None:
        """Submit a new entity and return the server's copy when echoed."""
        envelope = await self.client.request("POST", self.path, payload)
        return self._parse_echo(envelope.unwrap())

    async def update(self, entity_id: str, payload: dict[str, object]) -> T | None:
        """Submit a partial update keyed by entity id."""
        envelope = await self.client.request(
            "PUT", f"{self.path}/{entity_id}", payload
        )
        return self._parse_echo(envelope.unwrap())

    def _parse_echo(self, data: object) -> T | None:
        if isinstance(data, dict) and "_id" in data:
            return self.parse(data)
        return None


@dataclass
class _CrudGateway(_CollectionGateway[T]):
    async def delete(self, entity_id: str) -> None:
        """Remove an entity by id."""
        envelope = await self.client.request("DELETE", f"{self.path}/{entity_id}")
        envelope.unwrap()


class ProductsGateway(_CrudGateway[Product]):
    def __init__(self, client: ApiClient) -> None:
        super().__init__(client=client, path="/products", parse=parse_product)


class CustomersGateway(_CrudGateway[Customer]):
    def __init__(self, client: ApiClient) -> None:
        super().__init__(client=client, path="/customers", parse=parse_customer)


class OrdersGateway(_CrudGateway[Order]):
    def __init__(self, client: ApiClient) -> None:
        super().__init__(client=client, path="/orders", parse=parse_order)


class SubscriptionsGateway(_CollectionGateway[Subscription]):
    def __init__(self, client: ApiClient) -> None:
        super().__init__(
            client=client, path="/subscriptions", parse=parse_subscription
        )


def parse_business(row: Row) -> Business:
    """Parse a business profile payload."""
    return Business(
        id=str(row["_id"]),
        name=str(row.get("name") or ""),
        email=str(row.get("email") or ""),
        phone=_optional_str(row.get("phone")),
        address=_optional_str(row.get("address")),
        created_at=_parse_datetime(row.get("createdAt")),
        updated_at=_parse_datetime(row.get("updatedAt")),
    )


def parse_plan(row: Row) -> Plan:
    """Parse a plan payload."""
    return Plan(
        id=str(row["_id"]),
        name=str(row.get("name") or ""),
        price=float(row.get("price") or 0),
        description=str(row.get("description") or ""),
        features=tuple(str(item) for item in row.get("features") or []),
        photo_limit=int(row.get("photoLimit") or 0),
        products_limit=int(row.get("productsLimit") or 0),
        customers_limit=int(row.get("customersLimit") or 0),
    )


def parse_subscription(row: Row) -> Subscription:
    """Parse a subscription payload."""
    return Subscription(
        id=str(row["_id"]),
        business=_parse_ref(row.get("business"), parse_business),
        plan=_parse_ref(row.get("plan"), parse_plan),
        status=str(row.get("status") or "inactive"),
        start_date=_parse_datetime(row.get("startDate")),
        end_date=_parse_datetime(row.get("endDate")),
    )


def parse_photo(row: Row) -> Photo:
    """Parse a photo payload."""
    product = row.get("product")
    return Photo(
        id=str(row["_id"]),
        filename=str(row.get("filename") or ""),
        url=str(row.get("url") or ""),
        size=int(row.get("size") or 0),
        mimetype=str(row.get("mimetype") or ""),
        product=_parse_ref(product, parse_product) if product else None,
        upload_date=_parse_datetime(row.get("uploadDate")),
    )


def parse_product(row: Row) -> Product:
    """Parse a product payload."""
    return Product(
        id=str(row["_id"]),
        business=_parse_ref(row.get("business"), parse_business),
        name=str(row.get("name") or ""),
        description=str(row.get("description") or ""),
        price=float(row.get("price") or 0),
        category=str(row.get("category") or ""),
        status=str(row.get("status") or "active"),
        photos=tuple(
            parse_photo(photo)
            for photo in row.get("photos") or []
            if isinstance(photo, dict)
        ),
        created_at=_parse_datetime(row.get("createdAt")),
    )


def parse_customer(row: Row) -> Customer:
    """Parse a customer payload."""
    return Customer(
        id=str(row["_id"]),
        business=_parse_ref(row.get("business"), parse_business),
        name=str(row.get("name") or ""),
        email=str(row.get("email") or ""),
        phone=_optional_str(row.get("phone")),
        address=_optional_str(row.get("address")),
        notes=_optional_str(row.get("notes")),
        created_at=_parse_datetime(row.get("createdAt")),
    )


def parse_order(row: Row) -> Order:
    """Parse an order payload."""
    lines = tuple(
        OrderLine(
            product=_parse_ref(line.get("product"), parse_product),
            quantity=int(line.get("quantity") or 0),
            price=float(line.get("price") or 0),
        )
        for line in row.get("products") or []
    )
    return Order(
        id=str(row["_id"]),
        business=_parse_ref(row.get("business"), parse_business),
        customer=_parse_ref(row.get("customer"), parse_customer),
        lines=lines,
        total=float(row.get("total") or 0),
        status=str(row.get("status") or "pending"),
        payment_status=str(row.get("paymentStatus") or "pending"),
        order_date=_parse_datetime(row.get("orderDate")),
    )


def parse_metrics(row: Row) -> DashboardMetrics:
    """Parse the dashboard metrics payload; missing counters default to zero."""
    return DashboardMetrics(
        total_products=int(row.get("totalProducts") or 0),
        total_customers=int(row.get("totalCustomers") or 0),
        total_orders=int(row.get("totalOrders") or 0),
        active_subscriptions=int(row.get("activeSubscriptions") or 0),
        photos_used=int(row.get("photosUsed") or 0),
        photos_limit=int(row.get("photosLimit") or 0),
        recent_orders=[parse_order(order) for order in row.get("recentOrders") or []],
    )


def _parse_ref(
    value: object, parse: Callable[[Row], T]
) -> Reference | Populated[T]:
    # The API sends either the id or the populated document.
    if isinstance(value, dict):
        return Populated(parse(value))
    return Reference(id=str(value or ""))


def _optional_str(value: object) -> str | None:
    return str(value) if value else None


def _parse_datetime(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    return datetime.fromisoformat(value)
