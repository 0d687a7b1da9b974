"""
Health check handlers
"""
from fastapi import APIRouter, Depends

from pricing_service.api.dependencies import get_bundle_pricing_service
from pricing_service.config import get_settings
from pricing_service.core.exceptions import ConfigurationError
from pricing_service.models.responses import HealthResponse
from pricing_service.services.bundle_pricing import BundlePricingService

router = APIRouter(prefix="/health", tags=["Health"])


def _tiers_available(pricing_service: BundlePricingService) -> bool:
    try:
        return bool(pricing_service.get_all_tiers())
    except ConfigurationError:
        return False


@router.get("", response_model=HealthResponse)
@router.get("/", response_model=HealthResponse, include_in_schema=False)
async def health_check() -> HealthResponse:
    """
    Liveness check
    Does not touch the backend
    """
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        version=settings.APP_VERSION
    )


@router.get("/ready", response_model=HealthResponse)
def readiness_check(
    pricing_service: BundlePricingService = Depends(get_bundle_pricing_service)
) -> HealthResponse:
    """
    Readiness check for Kubernetes
    Ready once bundle pricing tiers can be loaded
    """
    settings = get_settings()
    is_ready = _tiers_available(pricing_service)

    return HealthResponse(
        status="ready" if is_ready else "not_ready",
        version=settings.APP_VERSION,
        pricing_tiers_available=is_ready
    )
