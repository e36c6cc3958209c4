"""Domain models for the business dashboard."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Reference:
    """A nested entity the server returned as a bare id."""

    id: str

    @property
    def entity(self) -> None:
        """References never carry the entity itself."""
        return None


@dataclass(frozen=True)
class Populated(Generic[T]):
    """A nested entity the server returned in full."""

    entity: T

    @property
    def id(self) -> str:
        return self.entity.id  # type: ignore[attr-defined]


@dataclass(frozen=True)
class Business:
    """Represents the authenticated business profile."""

    id: str
    name: str
    email: str
    phone: str | None = None
    address: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Plan:
    """Represents a subscription plan offered by the platform."""

    id: str
    name: str
    price: float
    description: str
    features: tuple[str, ...]
    photo_limit: int
    products_limit: int
    customers_limit: int


@dataclass(frozen=True)
class Subscription:
    """Represents a business subscription to a plan."""

    id: str
    business: Reference | Populated[Business]
    plan: Reference | Populated[Plan]
    status: str
    start_date: datetime | None
    end_date: datetime | None = None


@dataclass(frozen=True)
class Photo:
    """Represents an uploaded product photo."""

    id: str
    filename: str
    url: str
    size: int
    mimetype: str
    product: "Reference | Populated[Product] | None" = None
    upload_date: datetime | None = None


@dataclass(frozen=True)
class Product:
    """Represents a product in the business catalogue."""

    id: str
    business: Reference | Populated[Business]
    name: str
    description: str
    price: float
    category: str
    status: str
    photos: tuple[Photo, ...] = ()
    created_at: datetime | None = None


@dataclass(frozen=True)
class Customer:
    """Represents a customer of the business."""

    id: str
    business: Reference | Populated[Business]
    name: str
    email: str
    phone: str | None = None
    address: str | None = None
    notes: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class OrderLine:
    """A product line within an order."""

    product: Reference | Populated[Product]
    quantity: int
    price: float


@dataclass(frozen=True)
class Order:
    """Represents a customer order."""

    id: str
    business: Reference | Populated[Business]
    customer: Reference | Populated[Customer]
    lines: tuple[OrderLine, ...]
    total: float
    status: str
    payment_status: str
    order_date: datetime | None = None

    @property
    def code(self) -> str:
        """Short order code shown to users."""
        return self.id[-6:]


@dataclass(frozen=True)
class DashboardMetrics:
    """Aggregate metrics for the dashboard."""

    total_products: int = 0
    total_customers: int = 0
    total_orders: int = 0
    active_subscriptions: int = 0
    photos_used: int = 0
    photos_limit: int = 0
    recent_orders: list[Order] = field(default_factory=list)
