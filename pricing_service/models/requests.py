"""
Pydantic models for incoming requests
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pricing_service.core.enums import MessageRole, UserType
from pricing_service.models.domain import Address, CamelModel, CheckoutOptions, Country, Order

EXAMPLE_ADDRESS = {
    "firstName": "Jane",
    "lastName": "Smith",
    "email": "jane@example.com",
    "addressLine1": "10 Downing Street",
    "city": "London",
    "postcode": "SW1A 2AA",
    "country": "United Kingdom",
    "isForClient": False,
}

EXAMPLE_COUNTRY = {
    "code": "GB",
    "name": "United Kingdom",
    "currency_code": "GBP",
    "currency_symbol": "£",
    "flag": "🇬🇧",
}


class BundlePriceRequest(BaseModel):
    """Price request for a digital bundle"""
    quantity: int = Field(..., description="Number of images in the bundle")

    model_config = ConfigDict(json_schema_extra={"example": {"quantity": 3}})


class OrderPricingRequest(BaseModel):
    """Pricing breakdown request for a persisted order"""
    order: Order = Field(..., description="Order with its items")
    role: MessageRole = Field(MessageRole.CUSTOMER, description="Audience of discount messages")
    commission_rate: Optional[float] = Field(
        None,
        ge=0,
        description="Commission rate in percent, applied to the order total"
    )

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "order": {
                "currency": "GBP",
                "shipping_amount": 499,
                "total_amount": 2199,
                "order_items": [
                    {"unit_price": 850, "original_price": 1000, "quantity": 2, "total_price": 1700}
                ]
            },
            "role": "partner",
            "commission_rate": 10
        }
    })


class AddressValidationRequest(CamelModel):
    address: Address
    countries: List[Country] = Field(default_factory=list)

    model_config = ConfigDict(json_schema_extra={
        "example": {"address": EXAMPLE_ADDRESS, "countries": [EXAMPLE_COUNTRY]}
    })


class AddressNormalizationRequest(CamelModel):
    address: Address
    user_type: UserType = Field(UserType.CUSTOMER, description="customer or partner")


class CheckoutValidationRequest(CamelModel):
    """Complete checkout data"""
    address: Address
    countries: List[Country] = Field(default_factory=list)
    cart_items: List[Dict[str, Any]] = Field(default_factory=list)
    options: CheckoutOptions = Field(default_factory=CheckoutOptions)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "address": EXAMPLE_ADDRESS,
            "countries": [EXAMPLE_COUNTRY],
            "cartItems": [{"productId": "prod_123", "quantity": 1}],
            "options": {"validateReferral": True, "referralCode": "PAWS10", "orderTotal": 29.99}
        }
    })


class ShippingOptionsRequest(CamelModel):
    shipping_address: Dict[str, Any] = Field(..., description="Vendor-format shipping address")
    cart_items: List[Dict[str, Any]] = Field(default_factory=list)


class CurrencyConversionRequest(CamelModel):
    amount: float
    from_currency: str = Field(..., min_length=3, max_length=3)
    to_currency: str = Field(..., min_length=3, max_length=3)
