"""Pydantic models for dashboard form submissions."""

from pydantic import BaseModel, Field, NonNegativeFloat, PositiveInt, model_validator


class LoginForm(BaseModel):
    email: str
    password: str


class RegisterForm(BaseModel):
    business_name: str = Field(alias="businessName")
    email: str
    password: str


class ProductFormBody(BaseModel):
    """Product form payload; price accepts numeric strings."""

    name: str
    description: str = ""
    price: float
    category: str = ""


class CustomerFormBody(BaseModel):
    name: str
    email: str
    phone: str = ""
    address: str = ""
    notes: str = ""


class OrderFormBody(BaseModel):
    """Order form payload keyed by product id.

    ``prices`` holds the unit prices the form was rendered with; every selected
    product needs one.
    """

    customer_id: str = Field(default="", alias="customerId")
    quantities: dict[str, PositiveInt] = Field(default_factory=dict)
    prices: dict[str, NonNegativeFloat] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_prices(self) -> "OrderFormBody":
        missing = [pid for pid in self.quantities if pid not in self.prices]
        if missing:
            raise ValueError(f"Missing price for {', '.join(missing)}")
        return self


class SubscriptionUpdateBody(BaseModel):
    status: str | None = None
    plan_id: str | None = Field(default=None, alias="planId")

    def to_changes(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)
