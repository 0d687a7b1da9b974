"""
Client for the storefront's referral, cart and shipping endpoints
"""
from typing import Any, Dict, List, Optional

from pricing_service.infrastructure.http_clients.base_client import BaseHTTPClient


class StorefrontClient(BaseHTTPClient):
    """HTTP client for the sibling storefront API endpoints"""

    def validate_referral(
        self,
        referral_code: str,
        customer_email: str,
        order_total: float
    ) -> Dict[str, Any]:
        """
        Check referral eligibility

        Args:
            referral_code: Code entered at checkout
            customer_email: Canonical customer email
            order_total: Order total in pounds

        Returns:
            Referral validation body
        """
        return self._request(
            "POST",
            "/referrals/validate",
            default_error="Failed to validate referral code",
            json={
                "referralCode": referral_code,
                "customerEmail": customer_email,
                "orderTotal": order_total,
            },
        )

    def validate_cart(self, auth_token: str) -> Dict[str, Any]:
        """
        Run full cart validation, including print vendor availability

        Args:
            auth_token: Bearer token of the shopper

        Returns:
            Body with isValid, errors and warnings
        """
        return self._request(
            "POST",
            "/cart/validate",
            default_error="Cart validation request failed",
            headers={"Authorization": f"Bearer {auth_token}"},
            json={"mode": "full"},
        )

    def get_shipping_options(
        self,
        shipping_address: Dict[str, Any],
        cart_items: List[Dict[str, Any]],
        auth_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {auth_token}"} if auth_token else None
        return self._request(
            "POST",
            "/shipping/options",
            default_error="Failed to fetch shipping options",
            headers=headers,
            json={
                "shippingAddress": shipping_address,
                "cartItems": cart_items,
            },
        )
