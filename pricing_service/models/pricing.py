"""
Derived pricing views - computed from records, never persisted
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from pricing_service.core.enums import RateSource
from pricing_service.models.domain import ReferralValidation, ValidationResult


class NextTier(BaseModel):
    """Upsell lookahead to the next bundle tier"""
    quantity: int
    price_per_item: int
    additional_savings: int


class BundlePricing(BaseModel):
    """Price of a digital bundle of a given size"""
    quantity: int = Field(..., description="Requested number of images")
    price_per_item: int = Field(..., description="Per-image price in pence")
    total_price: int = Field(..., description="price_per_item x quantity in pence")
    savings: int = Field(..., ge=0, description="Saving versus single-image price in pence")
    discount_percentage: float = Field(..., ge=0.0, description="Saving as a percentage")
    next_tier: Optional[NextTier] = None


class ItemPricingRaw(BaseModel):
    original_price: int
    unit_price: int
    total_price: int
    discount_per_unit: int
    discount_total: int


class ItemPricing(BaseModel):
    """Display and calculation view of an order line"""
    original_price: Optional[str] = Field(None, description="Formatted pre-discount unit price")
    unit_price: str
    total_price: str
    has_discount: bool
    discount_per_unit: int = Field(..., ge=0)
    discount_total: int = Field(..., ge=0)
    discount_percentage: int = Field(..., ge=0)
    discount_per_unit_formatted: Optional[str] = None
    discount_total_formatted: Optional[str] = None
    quantity: int
    raw: ItemPricingRaw


class OrderPricingRaw(BaseModel):
    subtotal: int
    shipping: int
    total: int
    discount: int
    items_total: int
    order_adjustment: int


class OrderPricing(BaseModel):
    """Display and calculation view of an order"""
    subtotal: str
    shipping: str
    total: str
    has_order_discount: bool
    total_discount_amount: int
    total_discount_formatted: Optional[str] = None
    order_adjustment: int = Field(
        ...,
        description="items + shipping - total; order-level promotions not modelled per item"
    )
    is_reconciled: bool
    raw: OrderPricingRaw
    currency: str
    currency_symbol: str


class CurrencyConversion(BaseModel):
    from_amount: float
    from_currency: str
    to_amount: float
    to_currency: str
    rate: float
    source: RateSource


class ShippingOptionsResult(BaseModel):
    success: bool
    shipping_options: Optional[List[Dict[str, Any]]] = None
    error: Optional[str] = None


class CheckoutValidation(BaseModel):
    """Composite verdict of a checkout attempt"""
    address: ValidationResult
    cart: ValidationResult
    referral: Optional[ReferralValidation] = None
    overall: ValidationResult
