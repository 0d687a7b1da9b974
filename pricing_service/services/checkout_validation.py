"""
Checkout validation shared by customer and partner checkouts
"""
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from pricing_service.core.exceptions import RemoteServiceError
from pricing_service.core.logging import get_logger
from pricing_service.infrastructure.http_clients.storefront_client import StorefrontClient
from pricing_service.models.domain import (
    Address,
    CheckoutOptions,
    Country,
    ReferralValidation,
    StructuredAddressLines,
    ValidationResult
)
from pricing_service.models.pricing import CheckoutValidation, ShippingOptionsResult
from pricing_service.services.address import get_customer_email, resolve_address_lines

logger = get_logger(__name__)


class CheckoutValidationService:
    """
    Validates checkout data

    Local checks collect every problem instead of stopping at the first one.
    Remote checks (cart, referral, shipping) never raise: failures come back
    as invalid results.
    """

    EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

    # country code -> (pattern, human readable format)
    POSTCODE_RULES = {
        'GB': (
            re.compile(r'^[A-Z]{1,2}[0-9][A-Z0-9]?\s?[0-9][A-Z]{2}$', re.IGNORECASE),
            "UK postcode format (e.g., SW1A 1AA)"
        ),
        'US': (
            re.compile(r'^[0-9]{5}(-[0-9]{4})?$'),
            "US zip code format (e.g., 12345 or 12345-6789)"
        ),
        'CA': (
            re.compile(r'^[A-Z][0-9][A-Z]\s?[0-9][A-Z][0-9]$', re.IGNORECASE),
            "Canadian postal code format (e.g., K1A 0A6)"
        ),
        'DE': (re.compile(r'^[0-9]{5}$'), "5-digit postal code (e.g., 12345)"),
        'FR': (re.compile(r'^[0-9]{5}$'), "5-digit postal code (e.g., 12345)"),
        'AU': (re.compile(r'^[0-9]{4}$'), "4-digit postcode (e.g., 1234)"),
    }

    OVERALL_ERROR = "Please fix the validation errors above"

    def __init__(self, storefront_client: StorefrontClient, max_line_length: int = 35):
        """
        Args:
            storefront_client: Client for referral, cart and shipping endpoints
            max_line_length: Print vendor limit per address line
        """
        self.storefront_client = storefront_client
        self.max_line_length = max_line_length

    def validate_address(
        self,
        address: Address,
        countries: Optional[List[Country]] = None
    ) -> ValidationResult:
        """
        Validate a shipping address with country-specific postcode rules

        Args:
            address: Submitted address
            countries: Shipping countries; when given the country must be one of them

        Returns:
            ValidationResult with all problems joined by "; "
        """
        errors: List[str] = []

        if not self._clean(address.first_name):
            errors.append("First name is required")
        if not self._clean(address.last_name):
            errors.append("Last name is required")

        email = self._clean(address.email)
        if not email:
            errors.append("Email address is required")
        elif not self.is_valid_email(email):
            errors.append("Please enter a valid email address")

        errors.extend(self._address_line_errors(address))

        if not self._clean(address.city):
            errors.append("City is required")

        postcode = self._clean(address.postcode)
        if not postcode:
            errors.append("Postcode is required")

        country = self._clean(address.country)
        if not country:
            errors.append("Country is required")
        elif countries and not any(c.name == address.country for c in countries):
            errors.append("Please select a valid country from the list")

        if postcode:
            postcode_result = self._validate_postcode(postcode, address.country, countries)
            if not postcode_result.is_valid:
                errors.append(postcode_result.error or "Invalid postcode format")

        # Partner orders placed on behalf of a client
        if address.is_for_client:
            if not self._clean(address.client_name):
                errors.append("Client name is required")
            client_email = self._clean(address.client_email)
            if not client_email:
                errors.append("Client email is required")
            elif not self.is_valid_email(client_email):
                errors.append("Please enter a valid client email address")

        if errors:
            logger.debug("Address validation failed", errors_count=len(errors))

        return ValidationResult(
            is_valid=not errors,
            error="; ".join(errors) if errors else None
        )

    def _address_line_errors(self, address: Address) -> List[str]:
        limit = self.max_line_length
        lines = resolve_address_lines(address)

        if isinstance(lines, StructuredAddressLines):
            errors = []
            if not lines.line1:
                errors.append("Address line 1 is required")
            elif len(lines.line1) > limit:
                errors.append(
                    f"Address line 1 must be {limit} characters or less (Gelato requirement). "
                    "Please use Address Line 2 for additional details."
                )
            if lines.line2 and len(lines.line2) > limit:
                errors.append(f"Address line 2 must be {limit} characters or less")
            return errors

        if not lines.line:
            return ["Address is required"]
        if len(lines.line) > limit:
            return [f"Address must be {limit} characters or less (Gelato requirement)"]
        return []

    def _validate_postcode(
        self,
        postcode: str,
        country: Optional[str],
        countries: Optional[List[Country]] = None
    ) -> ValidationResult:
        """Check the postcode against the pattern of the selected country"""
        if not postcode:
            return ValidationResult(is_valid=False, error="Postcode is required")

        country_info = next((c for c in countries or [] if c.name == country), None)
        rule = self.POSTCODE_RULES.get(country_info.code) if country_info else None

        # Unknown countries only need a non-empty postcode
        if rule is None:
            return ValidationResult(is_valid=True)

        pattern, postcode_format = rule
        if pattern.match(postcode):
            return ValidationResult(is_valid=True)
        return ValidationResult(
            is_valid=False,
            error=f"Please enter a valid {postcode_format}"
        )

    def is_valid_email(self, email: str) -> bool:
        return bool(self.EMAIL_PATTERN.match(email))

    def validate_referral_code(
        self,
        referral_code: Optional[str],
        customer_email: Optional[str],
        order_total: float
    ) -> ReferralValidation:
        """
        Check a referral code (customer orders only)

        Args:
            referral_code: Code entered at checkout
            customer_email: Canonical customer email
            order_total: Order total in pounds

        Returns:
            ReferralValidation from the storefront, or an invalid result on failure
        """
        if not referral_code or not customer_email:
            return ReferralValidation(
                valid=False,
                error="Referral code and customer email required"
            )

        try:
            data = self.storefront_client.validate_referral(
                referral_code, customer_email, order_total
            )
            return ReferralValidation.model_validate(data)

        except RemoteServiceError as e:
            logger.error("Error validating referral", error=e.message, **e.details)
            # Only error statuses carry a reason the shopper can act on
            status_code = e.details.get("status_code")
            is_error_status = status_code is not None and not 200 <= status_code < 300
            error = e.message if is_error_status else "Failed to validate referral code"
            return ReferralValidation(valid=False, error=error)

        except ValidationError as e:
            logger.error("Unexpected referral validation response", error=str(e))
            return ReferralValidation(valid=False, error="Failed to validate referral code")

    def validate_cart(self, auth_token: str) -> ValidationResult:
        """
        Validate cart items, including print vendor availability

        Args:
            auth_token: Shopper's bearer token

        Returns:
            ValidationResult with the first cart error and all warnings
        """
        try:
            data = self.storefront_client.validate_cart(auth_token)
        except RemoteServiceError as e:
            logger.error("Error validating cart", error=e.message, **e.details)
            return ValidationResult(
                is_valid=False,
                error=f"Validation service error: {e.message}"
            )

        if not isinstance(data, dict):
            return ValidationResult(
                is_valid=False,
                error="Validation service error: Invalid response"
            )

        errors = [e for e in data.get("errors") or [] if isinstance(e, dict)]
        warnings = [w for w in data.get("warnings") or [] if isinstance(w, dict)]

        return ValidationResult(
            is_valid=bool(data.get("isValid")),
            error=errors[0].get("error") if errors else None,
            warnings=[str(w["message"]) for w in warnings if w.get("message")]
        )

    def get_shipping_options(
        self,
        shipping_address: Dict[str, Any],
        cart_items: List[Dict[str, Any]],
        auth_token: Optional[str] = None
    ) -> ShippingOptionsResult:
        """Shipping options from the print vendor; an empty list is a failure"""
        try:
            data = self.storefront_client.get_shipping_options(
                shipping_address, cart_items, auth_token
            )
        except RemoteServiceError as e:
            logger.error("Error fetching shipping options", error=e.message, **e.details)
            return ShippingOptionsResult(success=False, error=e.message)

        shipping_options = data.get("shippingOptions") if isinstance(data, dict) else None
        if not shipping_options:
            logger.warning("No shipping options available")
            return ShippingOptionsResult(
                success=False,
                error="No shipping options available for this address"
            )

        return ShippingOptionsResult(success=True, shipping_options=shipping_options)

    def validate_checkout(
        self,
        address: Address,
        countries: List[Country],
        cart_items: List[Dict[str, Any]],
        auth_token: str,
        options: Optional[CheckoutOptions] = None
    ) -> CheckoutValidation:
        """
        Validate a complete checkout attempt

        The cart is always validated remotely, even when the address already
        failed. The referral is checked only when requested with a code and a
        positive order total.

        Returns:
            CheckoutValidation with per-step results and the overall verdict
        """
        options = options or CheckoutOptions()

        logger.info(
            "Validating checkout",
            cart_items_count=len(cart_items),
            validate_referral=options.validate_referral
        )

        address_result = self.validate_address(address, countries)
        cart_result = self.validate_cart(auth_token)

        referral_result = None
        if (
            options.validate_referral
            and options.referral_code
            and options.order_total is not None
            and options.order_total > 0
        ):
            referral_result = self.validate_referral_code(
                options.referral_code,
                get_customer_email(address),
                options.order_total
            )

        all_valid = (
            address_result.is_valid
            and cart_result.is_valid
            and (referral_result is None or referral_result.valid)
        )

        logger.info(
            "Checkout validation completed",
            is_valid=all_valid,
            address_valid=address_result.is_valid,
            cart_valid=cart_result.is_valid,
            referral_valid=referral_result.valid if referral_result else None
        )

        return CheckoutValidation(
            address=address_result,
            cart=cart_result,
            referral=referral_result,
            overall=ValidationResult(
                is_valid=all_valid,
                error=None if all_valid else self.OVERALL_ERROR
            )
        )

    @staticmethod
    def _clean(value: Optional[str]) -> str:
        return (value or "").strip()
