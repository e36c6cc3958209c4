"""Tests for the product and customer pages."""

import asyncio

from business_hub.containers import AppContainer
from business_hub.services.customers import CustomerForm
from business_hub.services.products import ProductForm


def test_save_new_product_then_refetch(
    container: AppContainer, backend, logged_in
) -> None:
    form = ProductForm(
        name="Mug", description="Stoneware", price=8.5, category="Kitchen"
    )

    listing = asyncio.run(container.product_service.save(form))

    assert listing.notice is not None
    assert listing.notice.title == "Product created"
    assert [(p.name, p.price, p.category) for p in listing.products] == [
        ("Mug", 8.5, "Kitchen")
    ]
    assert backend.paths() == [("POST", "/products"), ("GET", "/products")]


def test_update_product_uses_put(container: AppContainer, backend, logged_in) -> None:
    backend.products.append(
        {"_id": "prod-1", "name": "Mug", "description": "", "price": 8, "category": ""}
    )
    form = ProductForm(name="Big Mug", description="", price=10, category="Kitchen")

    listing = asyncio.run(container.product_service.save(form, product_id="prod-1"))

    assert listing.notice is not None
    assert listing.notice.title == "Product updated"
    assert listing.products[0].name == "Big Mug"
    assert backend.paths()[0] == ("PUT", "/products/prod-1")


def test_delete_product_failure_keeps_catalogue(
    container: AppContainer, backend, logged_in
) -> None:
    backend.products.append({"_id": "prod-1", "name": "Mug", "price": 8})
    backend.fail("/products/prod-1", 409, "Product has orders")

    listing = asyncio.run(container.product_service.delete("prod-1"))

    assert listing.notice is not None
    assert listing.notice.description == "Product has orders"
    assert [p.id for p in listing.products] == ["prod-1"]


def test_load_products_failure_without_message_uses_fallback(
    container: AppContainer, backend, logged_in
) -> None:
    backend.offline.add("/products")

    listing = asyncio.run(container.product_service.load())

    assert listing.products == []
    assert listing.notice is not None
    assert listing.notice.description == "Failed to load products"


def test_customer_round_trip_and_delete(
    container: AppContainer, backend, logged_in
) -> None:
    form = CustomerForm(name="Jo Park", email="jo@example.com", phone="555-0101")

    created = asyncio.run(container.customer_service.save(form))
    customer = created.customers[0]
    edited = CustomerForm.from_customer(customer)
    deleted = asyncio.run(container.customer_service.delete(customer.id))

    assert (customer.name, customer.email, customer.phone) == (
        "Jo Park",
        "jo@example.com",
        "555-0101",
    )
    assert edited == CustomerForm(
        name="Jo Park", email="jo@example.com", phone="555-0101"
    )
    assert deleted.customers == []
    assert deleted.notice is not None
    assert deleted.notice.title == "Customer deleted"
