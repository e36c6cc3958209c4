"""Catalogue endpoints: products, customers and orders."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from business_hub.api.models import CustomerFormBody, OrderFormBody, ProductFormBody
from business_hub.api.visitors import require_visitor
from business_hub.services.customers import (
    CustomerForm,
    CustomerListing,
    filter_customers,
)
from business_hub.services.formatting import (
    ORDER_STATUS_STYLES,
    format_currency,
    format_date,
    payment_status_style,
    status_style,
)
from business_hub.services.orders import OrderDraft, OrdersPage, filter_orders
from business_hub.services.products import (
    ProductForm,
    ProductListing,
    categories,
    filter_products,
)

if TYPE_CHECKING:
    from business_hub.containers import AppContainer
    from business_hub.domain.models import Order
    from business_hub.services.notices import Notice

router = APIRouter(tags=["catalogue"], dependencies=[Depends(require_visitor)])


@router.get("/products")
async def list_products(
    request: Request, search: str = "", category: str = ""
) -> dict[str, object]:
    """Return the catalogue filtered by search text and category."""
    container: AppContainer = request.app.state.container
    listing = await container.product_service.load()
    return _products_view(listing, search, category)


@router.post("/products")
async def create_product(body: ProductFormBody, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    listing = await container.product_service.save(ProductForm(**body.model_dump()))
    return _products_view(listing)


@router.put("/products/{product_id}")
async def update_product(
    product_id: str, body: ProductFormBody, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    listing = await container.product_service.save(
        ProductForm(**body.model_dump()), product_id=product_id
    )
    return _products_view(listing)


@router.delete("/products/{product_id}")
async def delete_product(product_id: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    listing = await container.product_service.delete(product_id)
    return _products_view(listing)


@router.get("/customers")
async def list_customers(request: Request, search: str = "") -> dict[str, object]:
    """Return customers filtered by name, email or phone."""
    container: AppContainer = request.app.state.container
    listing = await container.customer_service.load()
    return _customers_view(listing, search)


@router.post("/customers")
async def create_customer(
    body: CustomerFormBody, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    listing = await container.customer_service.save(CustomerForm(**body.model_dump()))
    return _customers_view(listing)


@router.put("/customers/{customer_id}")
async def update_customer(
    customer_id: str, body: CustomerFormBody, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    listing = await container.customer_service.save(
        CustomerForm(**body.model_dump()), customer_id=customer_id
    )
    return _customers_view(listing)


@router.delete("/customers/{customer_id}")
async def delete_customer(customer_id: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    listing = await container.customer_service.delete(customer_id)
    return _customers_view(listing)


@router.get("/orders")
async def list_orders(request: Request, search: str = "") -> dict[str, object]:
    """Return orders plus the customers and products for the order form."""
    container: AppContainer = request.app.state.container
    page = await container.order_service.load()
    return _orders_view(page, search)


@router.post("/orders")
async def create_order(body: OrderFormBody, request: Request) -> dict[str, object]:
    """Create an order priced with the catalogue the form was rendered with."""
    container: AppContainer = request.app.state.container
    draft = OrderDraft(customer_id=body.customer_id, quantities=dict(body.quantities))
    page = await container.order_service.submit(draft, body.prices)
    return _orders_view(page)


def _notice(notice: Notice | None) -> dict[str, str] | None:
    return asdict(notice) if notice else None


def _products_view(
    listing: ProductListing, search: str = "", category: str = ""
) -> dict[str, object]:
    return {
        "products": [
            {**asdict(product), "price_display": format_currency(product.price)}
            for product in filter_products(listing.products, search, category)
        ],
        "categories": categories(listing.products),
        "notice": _notice(listing.notice),
    }


def _customers_view(listing: CustomerListing, search: str = "") -> dict[str, object]:
    return {
        "customers": [
            {**asdict(customer), "since": format_date(customer.created_at)}
            for customer in filter_customers(listing.customers, search)
        ],
        "notice": _notice(listing.notice),
    }


def _order_row(order: Order) -> dict[str, object]:
    customer = order.customer.entity
    return {
        "id": order.id,
        "code": order.code,
        "customer": customer.name if customer else None,
        "items": sum(line.quantity for line in order.lines),
        "total": format_currency(order.total),
        "status": order.status,
        "status_style": status_style(ORDER_STATUS_STYLES, order.status),
        "payment_status": order.payment_status,
        "payment_style": payment_status_style(order.payment_status),
        "order_date": format_date(order.order_date),
    }


def _orders_view(page: OrdersPage, search: str = "") -> dict[str, object]:
    return {
        "orders": [_order_row(order) for order in filter_orders(page.orders, search)],
        "customers": [
            {"id": customer.id, "name": customer.name} for customer in page.customers
        ],
        "products": [
            {
                "id": product.id,
                "name": product.name,
                "price": product.price,
                "price_display": format_currency(product.price),
            }
            for product in page.products
        ],
        "notice": _notice(page.notice),
    }
