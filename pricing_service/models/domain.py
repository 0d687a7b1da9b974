"""
Domain models - records owned by the storefront backend
"""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pricing_service.utils.money import round_half_up


class CamelModel(BaseModel):
    """Model exchanged with the storefront in camelCase"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Address(CamelModel):
    """Shipping address as submitted at checkout"""
    first_name: Optional[str] = Field(None, description="Submitter first name")
    last_name: Optional[str] = Field(None, description="Submitter last name")
    email: Optional[str] = Field(None, description="Submitter email")
    address: Optional[str] = Field(None, description="Legacy single-line address")
    address_line1: Optional[str] = Field(None, description="Address line 1")
    address_line2: Optional[str] = Field(None, description="Address line 2")
    city: Optional[str] = Field(None, description="City")
    postcode: Optional[str] = Field(None, description="Postcode / zip code")
    country: Optional[str] = Field(None, description="Country display name")
    # Partner-specific fields
    business_name: Optional[str] = Field(None, description="Partner business name")
    is_for_client: bool = Field(False, description="Partner orders on behalf of a client")
    client_name: Optional[str] = Field(None, description="Client display name")
    client_email: Optional[str] = Field(None, description="Client email")


class Country(BaseModel):
    """Shipping country"""
    code: str = Field(..., description="ISO 3166-1 alpha-2 code")
    name: str = Field(..., description="Display name")
    currency_code: str = Field("", description="ISO 4217 currency code")
    currency_symbol: str = Field("", description="Currency symbol")
    flag: str = Field("", description="Flag emoji")


class PricingTier(BaseModel):
    """Digital bundle pricing tier"""
    id: Optional[str] = None
    quantity: int = Field(..., ge=1, description="Tier threshold (number of images)")
    price_gbp: int = Field(..., ge=0, description="Tier price in pence")
    discount_percentage: float = Field(0.0, description="Advertised discount")
    is_active: bool = True

    @property
    def price_per_item(self) -> int:
        return round_half_up(self.price_gbp / self.quantity)


class OrderItem(BaseModel):
    """Persisted order line"""
    id: Optional[str] = None
    product_id: Optional[str] = None
    unit_price: int = Field(0, description="Realised unit price (minor units)")
    original_price: Optional[int] = Field(None, description="Pre-discount unit price (minor units)")
    quantity: int = Field(1, ge=0)
    total_price: Optional[int] = Field(None, description="unit_price x quantity (minor units)")


class Order(BaseModel):
    """Persisted order with its lines"""
    id: Optional[str] = None
    currency: Optional[str] = None
    subtotal_amount: Optional[int] = None
    shipping_amount: Optional[int] = None
    total_amount: Optional[int] = None
    order_items: List[OrderItem] = Field(default_factory=list)


class ReferralDiscount(BaseModel):
    eligible: bool = False
    amount: int = Field(0, description="Discount in pence")
    description: str = ""


class ReferralValidation(BaseModel):
    """Referral eligibility verdict from the storefront"""
    valid: bool
    error: Optional[str] = None
    discount: Optional[ReferralDiscount] = None


class ValidationResult(CamelModel):
    """Outcome of a single validation step"""
    is_valid: bool
    error: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class StructuredAddressLines(BaseModel):
    kind: Literal["structured"] = "structured"
    line1: str
    line2: Optional[str] = None


class LegacyAddressLine(BaseModel):
    kind: Literal["legacy"] = "legacy"
    line: str


ResolvedAddressLines = Annotated[
    Union[StructuredAddressLines, LegacyAddressLine],
    Field(discriminator="kind")
]


class AddressLines(BaseModel):
    """Address lines in the print vendor's format"""
    address1: str
    address2: Optional[str] = None


class CheckoutOptions(CamelModel):
    """Optional checks requested for a checkout attempt"""
    validate_referral: bool = False
    referral_code: Optional[str] = None
    order_total: Optional[float] = Field(None, description="Order total in pounds")
