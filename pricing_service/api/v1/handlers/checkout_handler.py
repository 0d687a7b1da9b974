"""
Checkout handlers - address, cart, referral and shipping validation
"""
from typing import Optional

from fastapi import APIRouter, Depends

from pricing_service.api.dependencies import (
    get_auth_token,
    get_checkout_validation_service,
    get_optional_auth_token
)
from pricing_service.core.logging import get_logger
from pricing_service.models.domain import ValidationResult
from pricing_service.models.pricing import CheckoutValidation, ShippingOptionsResult
from pricing_service.models.requests import (
    AddressNormalizationRequest,
    AddressValidationRequest,
    CheckoutValidationRequest,
    ShippingOptionsRequest
)
from pricing_service.models.responses import AddressNormalizationResponse
from pricing_service.services.address import (
    get_address_lines_for_gelato,
    get_combined_address,
    get_customer_email,
    get_customer_name,
    get_order_type
)
from pricing_service.services.checkout_validation import CheckoutValidationService

logger = get_logger(__name__)
router = APIRouter(prefix="/checkout", tags=["Checkout"])


@router.post("/address/validate", response_model=ValidationResult)
async def validate_address(
    request: AddressValidationRequest,
    validator: CheckoutValidationService = Depends(get_checkout_validation_service)
) -> ValidationResult:
    """Validate a shipping address; problems are returned, never raised"""
    return validator.validate_address(request.address, request.countries)


@router.post("/address/normalize", response_model=AddressNormalizationResponse)
async def normalize_address(request: AddressNormalizationRequest) -> AddressNormalizationResponse:
    """Customer identity, order type and vendor address lines"""
    address = request.address
    return AddressNormalizationResponse(
        customer_email=get_customer_email(address),
        customer_name=get_customer_name(address),
        order_type=get_order_type(request.user_type, address.is_for_client),
        address_lines=get_address_lines_for_gelato(address),
        combined_address=get_combined_address(address)
    )


@router.post("/validate", response_model=CheckoutValidation)
def validate_checkout(
    request: CheckoutValidationRequest,
    auth_token: str = Depends(get_auth_token),
    validator: CheckoutValidationService = Depends(get_checkout_validation_service)
) -> CheckoutValidation:
    """
    Validate a complete checkout

    Always answers 200 with a structured verdict; remote failures show up as
    invalid steps.
    """
    logger.info("Received checkout validation request")
    return validator.validate_checkout(
        address=request.address,
        countries=request.countries,
        cart_items=request.cart_items,
        auth_token=auth_token,
        options=request.options
    )


@router.post("/shipping-options", response_model=ShippingOptionsResult)
def get_shipping_options(
    request: ShippingOptionsRequest,
    auth_token: Optional[str] = Depends(get_optional_auth_token),
    validator: CheckoutValidationService = Depends(get_checkout_validation_service)
) -> ShippingOptionsResult:
    """Shipping options for an address; the bearer token is optional here"""
    return validator.get_shipping_options(
        request.shipping_address,
        request.cart_items,
        auth_token
    )
