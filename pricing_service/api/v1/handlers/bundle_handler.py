"""
Bundle pricing handlers - digital download bundle prices and tiers
"""
from fastapi import APIRouter, Depends, HTTPException, status

from pricing_service.api.dependencies import get_bundle_pricing_service
from pricing_service.core.exceptions import ConfigurationError, InvalidArgumentError
from pricing_service.core.logging import get_logger
from pricing_service.models.pricing import BundlePricing
from pricing_service.models.requests import BundlePriceRequest
from pricing_service.models.responses import StatusResponse, TiersResponse
from pricing_service.services.bundle_pricing import BundlePricingService

logger = get_logger(__name__)
router = APIRouter(prefix="/bundles", tags=["Bundles"])


@router.post("/price", response_model=BundlePricing)
def calculate_bundle_price(
    request: BundlePriceRequest,
    pricing_service: BundlePricingService = Depends(get_bundle_pricing_service)
) -> BundlePricing:
    """
    Price a bundle of digital downloads

    Raises:
        HTTPException 400: Quantity is not positive
        HTTPException 503: Pricing tiers are not configured
        HTTPException 500: Internal server error
    """
    try:
        return pricing_service.calculate_bundle_price(request.quantity)

    except InvalidArgumentError as e:
        logger.warning("Invalid bundle quantity", quantity=request.quantity)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid quantity",
                "message": e.message,
                "details": e.details
            }
        )

    except ConfigurationError as e:
        logger.error("Bundle pricing misconfigured", error=e.message, **e.details)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error": "Pricing unavailable",
                "message": e.message,
                "details": e.details
            }
        )

    except Exception as e:
        logger.error("Unexpected error", error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "message": "An unexpected error occurred"
            }
        )


@router.get("/tiers", response_model=TiersResponse)
def list_tiers(
    pricing_service: BundlePricingService = Depends(get_bundle_pricing_service)
) -> TiersResponse:
    """Active pricing tiers, for the admin UI and price tables"""
    try:
        return TiersResponse(tiers=pricing_service.get_all_tiers())
    except ConfigurationError as e:
        logger.error("Bundle pricing misconfigured", error=e.message)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "Pricing unavailable", "message": e.message}
        )


@router.post("/cache/clear", response_model=StatusResponse)
async def clear_tier_cache(
    pricing_service: BundlePricingService = Depends(get_bundle_pricing_service)
) -> StatusResponse:
    """Drop the cached tiers so the next request reloads them"""
    pricing_service.clear_cache()
    return StatusResponse(status="cleared")
