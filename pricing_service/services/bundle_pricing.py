"""
Tiered pricing for digital download bundles

Customers get a lower per-image price when buying several images, e.g.:
- 1 image:   £9.99
- 2 images:  £17.49
- 3 images:  £22.49
- 10 images: £50.99
"""
import time
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError

from pricing_service.core.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    RemoteServiceError
)
from pricing_service.core.logging import get_logger
from pricing_service.infrastructure.http_clients.backend_client import BackendClient
from pricing_service.models.domain import PricingTier
from pricing_service.models.pricing import BundlePricing, NextTier
from pricing_service.utils.money import format_price

logger = get_logger(__name__)


class BundlePricingService:
    """
    Calculates bundle prices from the active tier table
    Tiers are cached as a snapshot and reloaded once it is older than cache_seconds
    """

    def __init__(
        self,
        backend_client: BackendClient,
        tiers_table: str = "digital_bundle_tiers",
        bundle_product_name: str = "Digital Download Bundle",
        cache_seconds: int = 300,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Args:
            backend_client: Managed backend REST client
            tiers_table: Table holding the tiers
            bundle_product_name: Name of the master bundle product
            cache_seconds: Lifetime of the tier snapshot
            clock: Monotonic clock, replaceable in tests
        """
        self.backend_client = backend_client
        self.tiers_table = tiers_table
        self.bundle_product_name = bundle_product_name
        self.cache_seconds = cache_seconds
        self._clock = clock
        # (tiers, loaded_at) - replaced as a whole, never mutated
        self._snapshot: Optional[Tuple[List[PricingTier], float]] = None

    def load_tiers(self) -> List[PricingTier]:
        """
        Active tiers in ascending quantity order

        A failed reload keeps serving the previous snapshot (or nothing).

        Raises:
            ConfigurationError: Backend is not configured
        """
        snapshot = self._snapshot
        now = self._clock()
        if snapshot is not None and now - snapshot[1] < self.cache_seconds:
            return snapshot[0]

        logger.info("Loading bundle pricing tiers", table=self.tiers_table)

        try:
            rows = self.backend_client.select(
                self.tiers_table,
                {"select": "*", "is_active": "eq.true", "order": "quantity.asc"}
            )
            tiers = [PricingTier.model_validate(row) for row in rows]
        except (RemoteServiceError, ValidationError) as e:
            logger.error("Failed to load bundle pricing tiers", error=str(e))
            return snapshot[0] if snapshot else []

        tiers = sorted((tier for tier in tiers if tier.is_active), key=lambda t: t.quantity)
        self._snapshot = (tiers, now)

        logger.info("Loaded bundle pricing tiers", count=len(tiers))
        return tiers

    def get_all_tiers(self) -> List[PricingTier]:
        return self.load_tiers()

    def calculate_bundle_price(self, quantity: int) -> BundlePricing:
        """
        Price a bundle of the given size

        The selected tier is the largest one whose quantity does not exceed the
        request; its per-image price applies to every image in the bundle.

        Args:
            quantity: Number of images, at least 1

        Returns:
            BundlePricing with savings against the single-image price

        Raises:
            InvalidArgumentError: quantity <= 0
            ConfigurationError: No usable tiers
        """
        if quantity <= 0:
            raise InvalidArgumentError(
                "Quantity must be greater than 0",
                details={"quantity": quantity}
            )

        tiers = self.load_tiers()
        if not tiers:
            raise ConfigurationError("No pricing tiers configured")
        self._check_tiers(tiers)

        selected = tiers[0]
        for tier in tiers:
            if tier.quantity <= quantity:
                selected = tier
            else:
                break

        base_price = tiers[0].price_per_item
        price_per_item = selected.price_per_item
        total_price = price_per_item * quantity

        base_total = base_price * quantity
        savings = max(0, base_total - total_price)
        discount_percentage = (savings / base_total) * 100 if base_total > 0 else 0.0

        next_tier = None
        for tier in tiers:
            if tier.quantity > quantity:
                next_savings = (base_price - tier.price_per_item) * tier.quantity
                next_tier = NextTier(
                    quantity=tier.quantity,
                    price_per_item=tier.price_per_item,
                    additional_savings=max(0, next_savings - savings)
                )
                break

        logger.debug(
            "Bundle price calculated",
            quantity=quantity,
            tier_quantity=selected.quantity,
            total=format_price(total_price),
            savings=format_price(savings),
            discount=f"{discount_percentage:.1f}%"
        )

        return BundlePricing(
            quantity=quantity,
            price_per_item=price_per_item,
            total_price=total_price,
            savings=savings,
            discount_percentage=max(0.0, discount_percentage),
            next_tier=next_tier
        )

    def get_master_bundle_product_id(self) -> Optional[str]:
        """Id of the single product used for all digital download bundles"""
        try:
            rows = self.backend_client.select(
                "products",
                {
                    "select": "id",
                    "name": f"eq.{self.bundle_product_name}",
                    "product_type": "eq.digital_download",
                    "is_active": "eq.true",
                    "limit": "1",
                }
            )
        except (RemoteServiceError, ConfigurationError) as e:
            logger.error("Failed to find master bundle product", error=e.message)
            return None

        if not rows or not rows[0].get("id"):
            logger.warning("Master bundle product not found", name=self.bundle_product_name)
            return None
        return str(rows[0]["id"])

    @staticmethod
    def format_price(price_in_pence: int) -> str:
        return format_price(price_in_pence, "GBP")

    def clear_cache(self) -> None:
        self._snapshot = None
        logger.info("Bundle pricing tier cache cleared")

    @staticmethod
    def _check_tiers(tiers: List[PricingTier]) -> None:
        """
        Tier table must start at a single-image tier and per-image prices
        must not rise with quantity, otherwise savings and upsell figures
        come out wrong.
        """
        if tiers[0].quantity != 1:
            raise ConfigurationError(
                "No single-image pricing tier configured",
                details={"lowest_quantity": tiers[0].quantity}
            )

        for previous, current in zip(tiers, tiers[1:]):
            if current.quantity == previous.quantity:
                raise ConfigurationError(
                    "Duplicate pricing tier quantity",
                    details={"quantity": current.quantity}
                )
            if current.price_per_item > previous.price_per_item:
                raise ConfigurationError(
                    "Per-item price must not increase with tier quantity",
                    details={
                        "quantity": current.quantity,
                        "price_per_item": current.price_per_item,
                        "previous_price_per_item": previous.price_per_item,
                    }
                )
