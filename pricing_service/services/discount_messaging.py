"""
Role-specific discount messages
"""
from typing import Optional, Union

from pricing_service.core.enums import MessageRole
from pricing_service.models.pricing import ItemPricing

MESSAGE_TEMPLATES = {
    MessageRole.CUSTOMER: "You saved: {amount}",
    MessageRole.PARTNER: "Partner Discount: {amount} ({percentage}% off)",
    MessageRole.ADMIN: "Discount Applied: {amount} ({percentage}% off)",
}


def get_discount_message(
    pricing: ItemPricing,
    role: Union[MessageRole, str] = MessageRole.CUSTOMER
) -> Optional[str]:
    """
    Discount message for the given audience

    Args:
        pricing: Item pricing computed by OrderPricingFormatter
        role: customer, partner or admin

    Returns:
        Message, or None when the item carries no discount
    """
    if not pricing.has_discount:
        return None

    template = MESSAGE_TEMPLATES[MessageRole(role)]
    return template.format(
        amount=pricing.discount_total_formatted,
        percentage=pricing.discount_percentage
    )
