"""
Discount breakdowns for persisted orders

Only the stored pair unit_price / original_price is trusted; every discount
figure is derived from it. Missing optional fields mean "no discount", never
an error.
"""
from typing import List, Optional

from pricing_service.models.domain import Order, OrderItem
from pricing_service.models.pricing import (
    ItemPricing,
    ItemPricingRaw,
    OrderPricing,
    OrderPricingRaw
)
from pricing_service.utils.money import (
    DEFAULT_CURRENCY,
    currency_symbol,
    format_price,
    round_half_up
)


def _original_price(item: OrderItem) -> Optional[int]:
    """Reference price, or None when absent (zero counts as absent)"""
    return item.original_price or None


def _line_total(item: OrderItem) -> int:
    if item.total_price is not None:
        return item.total_price
    return item.unit_price * item.quantity


class OrderPricingFormatter:
    """
    Item and order pricing views for dashboards and confirmations
    """

    def __init__(self, default_currency: str = DEFAULT_CURRENCY):
        self.default_currency = default_currency

    def currency_of(self, order: Order) -> str:
        return (order.currency or self.default_currency).upper()

    def format_price(self, amount: int, currency: Optional[str] = None) -> str:
        return format_price(amount, currency or self.default_currency)

    def get_item_pricing(self, item: OrderItem, order: Order) -> ItemPricing:
        """
        Pricing view of a single order line

        Args:
            item: Order line
            order: Order the line belongs to (for its currency)

        Returns:
            ItemPricing with minor-unit and formatted values
        """
        currency = self.currency_of(order)
        original_price = _original_price(item)
        total_price = _line_total(item)

        has_discount = original_price is not None and original_price != item.unit_price
        discount_per_unit = max(0, original_price - item.unit_price) if has_discount else 0
        discount_total = discount_per_unit * item.quantity
        discount_percentage = (
            round_half_up(discount_per_unit / original_price * 100) if has_discount else 0
        )

        return ItemPricing(
            original_price=self.format_price(original_price, currency) if original_price else None,
            unit_price=self.format_price(item.unit_price, currency),
            total_price=self.format_price(total_price, currency),
            has_discount=has_discount,
            discount_per_unit=discount_per_unit,
            discount_total=discount_total,
            discount_percentage=discount_percentage,
            discount_per_unit_formatted=(
                self.format_price(discount_per_unit, currency) if has_discount else None
            ),
            discount_total_formatted=(
                self.format_price(discount_total, currency) if has_discount else None
            ),
            quantity=item.quantity,
            raw=ItemPricingRaw(
                original_price=original_price or item.unit_price,
                unit_price=item.unit_price,
                total_price=total_price,
                discount_per_unit=discount_per_unit,
                discount_total=discount_total
            )
        )

    def get_items_pricing(self, order: Order) -> List[ItemPricing]:
        return [self.get_item_pricing(item, order) for item in order.order_items]

    def get_order_pricing(self, order: Order) -> OrderPricing:
        """
        Pricing view of a whole order

        Order-level amounts fall back to values aggregated from the lines when
        they are missing. The difference between line totals plus shipping and
        the stored total is reported as order_adjustment (e.g. a referral
        discount applied to the whole order).
        """
        currency = self.currency_of(order)
        items = order.order_items

        items_total = sum(_line_total(item) for item in items)
        original_total = sum(
            (_original_price(item) or item.unit_price) * item.quantity for item in items
        )
        discount = max(0, original_total - items_total)

        subtotal = order.subtotal_amount or items_total
        shipping = order.shipping_amount or 0
        total = order.total_amount if order.total_amount is not None else subtotal + shipping
        order_adjustment = items_total + shipping - total

        return OrderPricing(
            subtotal=self.format_price(subtotal, currency),
            shipping=self.format_price(shipping, currency),
            total=self.format_price(total, currency),
            has_order_discount=discount > 0,
            total_discount_amount=discount,
            total_discount_formatted=self.format_price(discount, currency) if discount > 0 else None,
            order_adjustment=order_adjustment,
            is_reconciled=order_adjustment == 0,
            raw=OrderPricingRaw(
                subtotal=subtotal,
                shipping=shipping,
                total=total,
                discount=discount,
                items_total=items_total,
                order_adjustment=order_adjustment
            ),
            currency=currency,
            currency_symbol=currency_symbol(currency)
        )

    @staticmethod
    def calculate_commission(amount: int, rate_percent: float) -> int:
        """Commission in minor units for an amount at a percentage rate"""
        if amount <= 0 or rate_percent <= 0:
            return 0
        return round_half_up(amount * rate_percent / 100)
