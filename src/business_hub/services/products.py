"""Product catalogue page logic."""

from dataclasses import dataclass, field

from business_hub.adapters.gateways import ProductsGateway
from business_hub.domain.errors import ApiError
from business_hub.domain.models import Product
from business_hub.services.notices import Notice, failure_notice, success_notice
from business_hub.services.search import matches


@dataclass(frozen=True)
class ProductForm:
    """Values submitted from the product form."""

    name: str
    description: str
    price: float
    category: str

    def to_payload(self) -> dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
        }


@dataclass
class ProductListing:
    """A product collection plus the notice produced while loading it."""

    products: list[Product] = field(default_factory=list)
    notice: Notice | None = None


def filter_products(
    products: list[Product], search: str = "", category: str = ""
) -> list[Product]:
    """Filter by name/description substring and exact category."""
    return [
        product
        for product in products
        if matches(search, product.name, product.description)
        and (not category or product.category == category)
    ]


def categories(products: list[Product]) -> list[str]:
    """Distinct non-empty categories in first-seen order."""
    return list(dict.fromkeys(p.category for p in products if p.category))


@dataclass
class ProductService:
    """Application service for the products page."""

    gateway: ProductsGateway

    async def load(self) -> ProductListing:
        """Fetch the catalogue; failures leave it empty with a notice."""
        try:
            return ProductListing(products=await self.gateway.list())
        except ApiError as exc:
            return ProductListing(
                notice=failure_notice(
                    "Error loading products", exc, "Failed to load products"
                )
            )

    async def save(
        self, form: ProductForm, product_id: str | None = None
    ) -> ProductListing:
        """Create or update a product, then re-fetch the catalogue."""
        try:
            if product_id:
                await self.gateway.update(product_id, form.to_payload())
                notice = success_notice(
                    "Product updated", "Product has been updated successfully"
                )
            else:
                await self.gateway.create(form.to_payload())
                notice = success_notice(
                    "Product created", "Product has been created successfully"
                )
        except ApiError as exc:
            notice = failure_notice("Error", exc, "Failed to save product")
        return await self._reload(notice)

    async def delete(self, product_id: str) -> ProductListing:
        """Delete a product, then re-fetch the catalogue."""
        try:
            await self.gateway.delete(product_id)
            notice = success_notice(
                "Product deleted", "Product has been deleted successfully"
            )
        except ApiError as exc:
            notice = failure_notice("Error", exc, "Failed to delete product")
        return await self._reload(notice)

    async def _reload(self, notice: Notice) -> ProductListing:
        listing = await self.load()
        if listing.notice is None:
            listing.notice = notice
        return listing
