"""Bundle pricing: tier selection, savings, upsell lookahead and the tier cache."""

import pytest

from pricing_service.core.exceptions import ConfigurationError, InvalidArgumentError
from pricing_service.infrastructure.http_clients.backend_client import BackendClient
from pricing_service.services.bundle_pricing import BundlePricingService

TIERS_PATH = "/digital_bundle_tiers"


def service_with_rows(session, clock, rows):
    session.add(TIERS_PATH, body=rows)
    client = BackendClient("https://backend.example.com/rest/v1", "anon-key", session=session)
    return BundlePricingService(client, clock=clock)


class TestCalculateBundlePrice:

    def test_single_image_is_baseline(self, bundle_service):
        pricing = bundle_service.calculate_bundle_price(1)
        assert pricing.price_per_item == 999
        assert pricing.total_price == 999
        assert pricing.savings == 0
        assert pricing.discount_percentage == 0

    def test_two_images_use_rounded_tier_unit_price(self, bundle_service):
        pricing = bundle_service.calculate_bundle_price(2)
        # 1749 / 2 = 874.5 rounds half up
        assert pricing.price_per_item == 875
        assert pricing.total_price == 1750
        assert pricing.savings == 248
        assert pricing.discount_percentage == pytest.approx(248 / 1998 * 100)

    def test_quantity_between_tiers_uses_lower_tier(self, bundle_service):
        pricing = bundle_service.calculate_bundle_price(5)
        assert pricing.price_per_item == 750
        assert pricing.total_price == 3750
        assert pricing.savings == 4995 - 3750

    def test_quantity_above_largest_tier_extends_its_unit_price(self, bundle_service):
        pricing = bundle_service.calculate_bundle_price(12)
        assert pricing.price_per_item == 510
        assert pricing.total_price == 6120
        assert pricing.next_tier is None

    @pytest.mark.parametrize("quantity", range(1, 25))
    def test_total_is_unit_price_times_quantity(self, bundle_service, quantity):
        pricing = bundle_service.calculate_bundle_price(quantity)
        assert pricing.total_price == pricing.price_per_item * quantity

    def test_discount_does_not_drop_within_a_tier(self, bundle_service):
        percentages = [
            bundle_service.calculate_bundle_price(q).discount_percentage for q in range(3, 10)
        ]
        assert percentages == sorted(percentages)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, bundle_service, quantity):
        with pytest.raises(InvalidArgumentError):
            bundle_service.calculate_bundle_price(quantity)


class TestNextTier:

    def test_next_tier_from_single_image(self, bundle_service):
        next_tier = bundle_service.calculate_bundle_price(1).next_tier
        assert next_tier.quantity == 2
        assert next_tier.price_per_item == 875
        assert next_tier.additional_savings == 248

    def test_additional_savings_are_incremental(self, bundle_service):
        next_tier = bundle_service.calculate_bundle_price(5).next_tier
        assert next_tier.quantity == 10
        assert next_tier.price_per_item == 510
        # savings at 10 images (4890) minus savings already made at 5 (1245)
        assert next_tier.additional_savings == 4890 - 1245


class TestTierConfiguration:

    def test_no_tiers_is_configuration_error(self, session, clock):
        service = service_with_rows(session, clock, [])
        with pytest.raises(ConfigurationError):
            service.calculate_bundle_price(1)

    def test_missing_single_image_tier(self, session, clock):
        service = service_with_rows(session, clock, [
            {"quantity": 2, "price_gbp": 1749, "is_active": True},
        ])
        with pytest.raises(ConfigurationError, match="single-image"):
            service.calculate_bundle_price(2)

    def test_rising_unit_price_rejected(self, session, clock):
        service = service_with_rows(session, clock, [
            {"quantity": 1, "price_gbp": 999, "is_active": True},
            {"quantity": 2, "price_gbp": 2400, "is_active": True},
        ])
        with pytest.raises(ConfigurationError, match="must not increase"):
            service.calculate_bundle_price(2)

    def test_tiers_sorted_and_inactive_dropped(self, session, clock):
        service = service_with_rows(session, clock, [
            {"quantity": 3, "price_gbp": 2249, "is_active": True},
            {"quantity": 2, "price_gbp": 100, "is_active": False},
            {"quantity": 1, "price_gbp": 999, "is_active": True},
        ])
        assert [t.quantity for t in service.get_all_tiers()] == [1, 3]

    def test_unconfigured_backend_raises(self, session, clock):
        client = BackendClient("/rest/v1", "", session=session)
        service = BundlePricingService(client, clock=clock)
        with pytest.raises(ConfigurationError):
            service.calculate_bundle_price(1)
        assert session.calls == []


class TestTierCache:

    def test_tiers_loaded_once_within_cache_window(self, bundle_service, session, clock):
        bundle_service.calculate_bundle_price(1)
        clock.advance(299)
        bundle_service.calculate_bundle_price(2)
        assert len(session.calls_to(TIERS_PATH)) == 1

    def test_stale_cache_reloaded(self, bundle_service, session, clock):
        bundle_service.calculate_bundle_price(1)
        clock.advance(300)
        bundle_service.calculate_bundle_price(1)
        assert len(session.calls_to(TIERS_PATH)) == 2

    def test_failed_reload_keeps_previous_snapshot(self, bundle_service, session, clock):
        session.add(TIERS_PATH, status=500, body={"error": "db down"})
        bundle_service.calculate_bundle_price(1)
        clock.advance(600)
        pricing = bundle_service.calculate_bundle_price(2)
        assert pricing.total_price == 1750
        assert len(session.calls_to(TIERS_PATH)) == 2

    def test_failed_first_load_is_configuration_error(self, session, clock):
        session.add(TIERS_PATH, status=500, body={"error": "db down"})
        client = BackendClient("https://backend.example.com/rest/v1", "anon-key", session=session)
        service = BundlePricingService(client, clock=clock)
        with pytest.raises(ConfigurationError):
            service.calculate_bundle_price(1)

    def test_clear_cache_forces_reload(self, bundle_service, session):
        bundle_service.calculate_bundle_price(1)
        bundle_service.clear_cache()
        bundle_service.calculate_bundle_price(1)
        assert len(session.calls_to(TIERS_PATH)) == 2

    def test_query_filters_active_tiers(self, bundle_service, session):
        bundle_service.load_tiers()
        call = session.calls_to(TIERS_PATH)[0]
        assert call["params"]["is_active"] == "eq.true"
        assert call["params"]["order"] == "quantity.asc"
        assert call["headers"]["apikey"] == "anon-key"


class TestMasterBundleProduct:

    def test_found(self, bundle_service, session):
        session.add("/products", body=[{"id": "prod_bundle"}])
        assert bundle_service.get_master_bundle_product_id() == "prod_bundle"
        params = session.calls_to("/products")[0]["params"]
        assert params["name"] == "eq.Digital Download Bundle"

    def test_missing(self, bundle_service, session):
        session.add("/products", body=[])
        assert bundle_service.get_master_bundle_product_id() is None

    def test_backend_error(self, bundle_service, session):
        session.add("/products", status=503, body={"error": "unavailable"})
        assert bundle_service.get_master_bundle_product_id() is None


def test_format_price(bundle_service):
    assert bundle_service.format_price(1749) == "£17.49"
