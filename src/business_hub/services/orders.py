"""Order page logic: composite loading, order drafts and totals."""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from business_hub.adapters.gateways import (
    CustomersGateway,
    OrdersGateway,
    ProductsGateway,
)
from business_hub.domain.errors import ApiError, OrderValidationError
from business_hub.domain.models import Customer, Order, Product
from business_hub.services.notices import Notice, failure_notice, success_notice
from business_hub.services.search import matches

logger = logging.getLogger(__name__)

EMPTY_ORDER_MESSAGE = "Please select a customer and at least one product"
QUANTITY_MESSAGE = "Quantity must be at least 1"


@dataclass
class OrderDraft:
    """Order form state: a customer and selected products with quantities.

    ``quantities`` keeps selection order; a product is selected exactly when
    it has an entry. Prices come from the catalogue the form was rendered
    with, as a product id to unit price mapping.
    """

    customer_id: str = ""
    quantities: dict[str, int] = field(default_factory=dict)

    @property
    def product_ids(self) -> list[str]:
        return list(self.quantities)

    def toggle_product(self, product_id: str) -> None:
        """Select a product with quantity 1, or deselect it."""
        if product_id in self.quantities:
            del self.quantities[product_id]
        else:
            self.quantities[product_id] = 1

    def set_quantity(self, product_id: str, quantity: int) -> None:
        """Change the quantity of a selected product."""
        if product_id not in self.quantities:
            raise KeyError(product_id)
        if quantity < 1:
            raise OrderValidationError(QUANTITY_MESSAGE)
        self.quantities[product_id] = quantity

    def total(self, prices: Mapping[str, float]) -> float:
        """Sum of price times quantity over the selected products."""
        return sum(
            prices.get(product_id, 0.0) * quantity
            for product_id, quantity in self.quantities.items()
        )

    def validate(self) -> None:
        """Reject empty drafts and quantities below one."""
        if not self.customer_id or not self.quantities:
            raise OrderValidationError(EMPTY_ORDER_MESSAGE)
        if any(quantity < 1 for quantity in self.quantities.values()):
            raise OrderValidationError(QUANTITY_MESSAGE)

    def to_payload(self, prices: Mapping[str, float]) -> dict[str, object]:
        return {
            "customerId": self.customer_id,
            "products": [
                {
                    "productId": product_id,
                    "quantity": quantity,
                    "price": prices.get(product_id, 0.0),
                }
                for product_id, quantity in self.quantities.items()
            ],
            "total": self.total(prices),
        }


@dataclass
class OrdersPage:
    """Orders with the customers and products needed to create new ones."""

    orders: list[Order] = field(default_factory=list)
    customers: list[Customer] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)
    notice: Notice | None = None


def filter_orders(orders: list[Order], search: str = "") -> list[Order]:
    """Filter by order code or populated customer name."""
    result = []
    for order in orders:
        customer = order.customer.entity
        if matches(search, order.code, customer.name if customer else None):
            result.append(order)
    return result


@dataclass
class OrderService:
    """Application service for the orders page."""

    orders_gateway: OrdersGateway
    customers_gateway: CustomersGateway
    products_gateway: ProductsGateway

    async def load(self) -> OrdersPage:
        """Fetch orders, customers and products concurrently.

        The three fetches succeed or fail together: if any of them fails the
        page is empty and carries a single notice.
        """
        try:
            orders, customers, products = await asyncio.gather(
                self.orders_gateway.list(),
                self.customers_gateway.list(),
                self.products_gateway.list(),
            )
        except ApiError as exc:
            logger.warning("Failed to load orders page: %s", exc)
            return OrdersPage(
                notice=failure_notice(
                    "Error loading data", exc, "Failed to load orders data"
                )
            )
        return OrdersPage(orders=orders, customers=customers, products=products)

    async def create(self, draft: OrderDraft, prices: Mapping[str, float]) -> None:
        """Submit a draft; invalid drafts never reach the network."""
        draft.validate()
        await self.orders_gateway.create(draft.to_payload(prices))

    async def submit(
        self, draft: OrderDraft, prices: Mapping[str, float]
    ) -> OrdersPage:
        """Create an order priced from the catalogue the caller already holds.

        Raises :class:`OrderValidationError` before any request is sent when the
        draft is invalid.
        """
        draft.validate()
        try:
            await self.create(draft, prices)
            notice = success_notice(
                "Order created", "Order has been created successfully"
            )
        except ApiError as exc:
            notice = failure_notice("Error", exc, "Failed to create order")
        page = await self.load()
        if page.notice is None:
            page.notice = notice
        return page


def price_index(products: list[Product]) -> dict[str, float]:
    """Unit price per product id."""
    return {product.id: product.price for product in products}
