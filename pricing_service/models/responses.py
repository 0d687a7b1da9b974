"""
Pydantic models for API responses
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from pricing_service.core.enums import OrderType
from pricing_service.models.domain import AddressLines, PricingTier
from pricing_service.models.pricing import ItemPricing, OrderPricing


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    pricing_tiers_available: Optional[bool] = Field(None, description="Bundle tiers loaded")


class TiersResponse(BaseModel):
    tiers: List[PricingTier]


class StatusResponse(BaseModel):
    status: str


class OrderItemPricingEntry(BaseModel):
    item_id: Optional[str] = None
    pricing: ItemPricing
    discount_message: Optional[str] = None


class OrderPricingResponse(BaseModel):
    """Order pricing with per-item breakdowns"""
    order: OrderPricing
    items: List[OrderItemPricingEntry]
    commission_amount: Optional[int] = Field(None, description="Commission in minor units")
    commission_formatted: Optional[str] = None


class AddressNormalizationResponse(BaseModel):
    customer_email: str
    customer_name: str
    order_type: OrderType
    address_lines: AddressLines
    combined_address: str
