"""
Order pricing handlers - discount breakdowns for persisted orders
"""
from fastapi import APIRouter, Depends

from pricing_service.api.dependencies import get_order_pricing_formatter
from pricing_service.models.requests import OrderPricingRequest
from pricing_service.models.responses import OrderItemPricingEntry, OrderPricingResponse
from pricing_service.services.discount_messaging import get_discount_message
from pricing_service.services.order_pricing import OrderPricingFormatter

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("/pricing", response_model=OrderPricingResponse)
async def get_order_pricing(
    request: OrderPricingRequest,
    formatter: OrderPricingFormatter = Depends(get_order_pricing_formatter)
) -> OrderPricingResponse:
    """
    Order and item pricing with discount messages for the requested role

    Commission is derived from the stored order total when a rate is given.
    """
    order = request.order
    order_pricing = formatter.get_order_pricing(order)

    items = [
        OrderItemPricingEntry(
            item_id=item.id,
            pricing=pricing,
            discount_message=get_discount_message(pricing, request.role)
        )
        for item, pricing in zip(order.order_items, formatter.get_items_pricing(order))
    ]

    commission_amount = None
    commission_formatted = None
    if request.commission_rate is not None:
        commission_amount = formatter.calculate_commission(
            order_pricing.raw.total, request.commission_rate
        )
        commission_formatted = formatter.format_price(commission_amount, order_pricing.currency)

    return OrderPricingResponse(
        order=order_pricing,
        items=items,
        commission_amount=commission_amount,
        commission_formatted=commission_formatted
    )
