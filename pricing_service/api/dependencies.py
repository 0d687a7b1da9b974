"""
FastAPI dependencies

HTTP clients and the bundle pricing service (which owns the tier cache) are
shared; the stateless services are built per request.
"""
from functools import lru_cache
from typing import Optional

from fastapi import Header, HTTPException, status

from pricing_service.config import get_settings
from pricing_service.infrastructure.http_clients.backend_client import BackendClient
from pricing_service.infrastructure.http_clients.exchange_rate_client import ExchangeRateClient
from pricing_service.infrastructure.http_clients.storefront_client import StorefrontClient
from pricing_service.services.bundle_pricing import BundlePricingService
from pricing_service.services.checkout_validation import CheckoutValidationService
from pricing_service.services.currency_converter import CurrencyConverter
from pricing_service.services.order_pricing import OrderPricingFormatter


@lru_cache()
def get_storefront_client() -> StorefrontClient:
    settings = get_settings()
    return StorefrontClient(
        settings.STOREFRONT_API_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS
    )


@lru_cache()
def get_backend_client() -> BackendClient:
    settings = get_settings()
    return BackendClient(
        settings.supabase_rest_url,
        settings.SUPABASE_ANON_KEY,
        timeout=settings.HTTP_TIMEOUT_SECONDS
    )


@lru_cache()
def get_bundle_pricing_service() -> BundlePricingService:
    """Bundle pricing service (singleton, keeps the tier snapshot)"""
    settings = get_settings()
    return BundlePricingService(
        backend_client=get_backend_client(),
        tiers_table=settings.BUNDLE_TIERS_TABLE,
        bundle_product_name=settings.BUNDLE_PRODUCT_NAME,
        cache_seconds=settings.BUNDLE_TIER_CACHE_SECONDS
    )


@lru_cache()
def get_currency_converter() -> CurrencyConverter:
    """Currency converter (singleton, keeps the live rate cache)"""
    settings = get_settings()
    rate_client = ExchangeRateClient(
        settings.EXCHANGE_RATE_API_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS
    )
    return CurrencyConverter(
        rate_client=rate_client,
        cache_seconds=settings.EXCHANGE_RATE_CACHE_SECONDS
    )


def get_checkout_validation_service() -> CheckoutValidationService:
    settings = get_settings()
    return CheckoutValidationService(
        storefront_client=get_storefront_client(),
        max_line_length=settings.ADDRESS_LINE_MAX_LENGTH
    )


def get_order_pricing_formatter() -> OrderPricingFormatter:
    return OrderPricingFormatter(default_currency=get_settings().DEFAULT_CURRENCY)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[len("bearer "):].strip() or None
    return None


def get_optional_auth_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    return _bearer_token(authorization)


def get_auth_token(authorization: Optional[str] = Header(None)) -> str:
    """Bearer token forwarded to the storefront as-is"""
    token = _bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Unauthorized", "message": "Bearer token required"}
        )
    return token


def close_http_clients() -> None:
    """Close the sessions of every client created so far and forget them"""
    if get_currency_converter.cache_info().currsize:
        rate_client = get_currency_converter().rate_client
        if rate_client is not None:
            rate_client.session.close()

    for factory in (get_storefront_client, get_backend_client):
        if factory.cache_info().currsize:
            factory().session.close()

    for factory in (
        get_bundle_pricing_service,
        get_currency_converter,
        get_storefront_client,
        get_backend_client
    ):
        factory.cache_clear()
