"""Customer directory page logic."""

from dataclasses import dataclass, field

from business_hub.adapters.gateways import CustomersGateway
from business_hub.domain.errors import ApiError
from business_hub.domain.models import Customer
from business_hub.services.notices import Notice, failure_notice, success_notice
from business_hub.services.search import matches


@dataclass(frozen=True)
class CustomerForm:
    """Values submitted from the customer form."""

    name: str
    email: str
    phone: str = ""
    address: str = ""
    notes: str = ""

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerForm":
        """Pre-fill the form for editing an existing customer."""
        return cls(
            name=customer.name,
            email=customer.email,
            phone=customer.phone or "",
            address=customer.address or "",
            notes=customer.notes or "",
        )

    def to_payload(self) -> dict[str, object]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "notes": self.notes,
        }


@dataclass
class CustomerListing:
    customers: list[Customer] = field(default_factory=list)
    notice: Notice | None = None


def filter_customers(customers: list[Customer], search: str = "") -> list[Customer]:
    """Filter by name, email or phone."""
    return [
        customer
        for customer in customers
        if matches(search, customer.name, customer.email, customer.phone)
    ]


@dataclass
class CustomerService:
    """Application service for the customers page."""

    gateway: CustomersGateway

    async def load(self) -> CustomerListing:
        try:
            return CustomerListing(customers=await self.gateway.list())
        except ApiError as exc:
            return CustomerListing(
                notice=failure_notice(
                    "Error loading customers", exc, "Failed to load customers"
                )
            )

    async def save(
        self, form: CustomerForm, customer_id: str | None = None
    ) -> CustomerListing:
        """Create or update a customer, then re-fetch the directory."""
        try:
            if customer_id:
                await self.gateway.update(customer_id, form.to_payload())
                notice = success_notice(
                    "Customer updated", "Customer has been updated successfully"
                )
            else:
                await self.gateway.create(form.to_payload())
                notice = success_notice(
                    "Customer created", "Customer has been created successfully"
                )
        except ApiError as exc:
            notice = failure_notice("Error", exc, "Failed to save customer")
        return await self._reload(notice)

    async def delete(self, customer_id: str) -> CustomerListing:
        try:
            await self.gateway.delete(customer_id)
            notice = success_notice(
                "Customer deleted", "Customer has been deleted successfully"
            )
        except ApiError as exc:
            notice = failure_notice("Error", exc, "Failed to delete customer")
        return await self._reload(notice)

    async def _reload(self, notice: Notice) -> CustomerListing:
        listing = await self.load()
        if listing.notice is None:
            listing.notice = notice
        return listing
