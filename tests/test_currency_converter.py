"""Currency conversion: live rates, caching and the fallback table."""

import pytest
import requests

from pricing_service.core.enums import RateSource
from pricing_service.infrastructure.http_clients.exchange_rate_client import ExchangeRateClient
from pricing_service.services.currency_converter import FALLBACK_RATES, CurrencyConverter

RATES_URL = "https://rates.example.com/v4/latest/USD"
LIVE_RATES = {"USD": 1, "GBP": 0.8, "EUR": 0.9}


@pytest.fixture
def rate_client(session):
    return ExchangeRateClient(RATES_URL, session=session)


@pytest.fixture
def converter(rate_client, clock):
    return CurrencyConverter(rate_client, cache_seconds=3600, clock=clock)


def test_same_currency_is_identity(converter, session):
    result = converter.convert(25.0, "gbp", "GBP")
    assert result.rate == 1.0
    assert result.to_amount == 25.0
    assert result.source == RateSource.FALLBACK
    assert session.calls == []


def test_live_rate_used(converter, session):
    session.add("/latest/USD", body={"rates": LIVE_RATES})
    result = converter.convert(10.0, "GBP", "EUR")
    assert result.source == RateSource.API
    assert result.rate == pytest.approx(0.9 / 0.8)
    assert result.to_amount == pytest.approx(11.25)


def test_live_rates_cached(converter, session, clock):
    session.add("/latest/USD", body={"rates": LIVE_RATES})
    converter.convert(10.0, "GBP", "EUR")
    clock.advance(3599)
    converter.convert(10.0, "EUR", "GBP")
    assert len(session.calls) == 1

    clock.advance(1)
    converter.convert(10.0, "EUR", "GBP")
    assert len(session.calls) == 2


def test_feed_failure_uses_fallback(converter, session):
    session.add("/latest/USD", exc=requests.ConnectionError("offline"))
    result = converter.convert(100.0, "USD", "GBP")
    assert result.source == RateSource.FALLBACK
    assert result.rate == pytest.approx(FALLBACK_RATES["GBP"])


def test_empty_feed_uses_fallback(converter, session):
    session.add("/latest/USD", body={"rates": {}})
    assert converter.convert(1.0, "USD", "EUR").source == RateSource.FALLBACK


def test_currency_missing_from_feed_uses_fallback(converter, session):
    session.add("/latest/USD", body={"rates": LIVE_RATES})
    result = converter.convert(1.0, "USD", "JPY")
    assert result.source == RateSource.FALLBACK
    assert result.rate == pytest.approx(149.5)


def test_without_client_only_fallback():
    result = CurrencyConverter().convert(10.0, "EUR", "USD")
    assert result.source == RateSource.FALLBACK
    assert result.rate == pytest.approx(1 / 0.92)


def test_supported_currencies():
    supported = CurrencyConverter.get_supported_currencies()
    assert "GBP" in supported
    assert len(supported) == len(FALLBACK_RATES)


@pytest.mark.parametrize("amount, currency, symbol, expected", [
    (1234.5, "USD", None, "$1,234.50"),
    (9.99, "gbp", None, "£9.99"),
    (10, "SEK", None, "SEK 10.00"),
    (10, "AUD", "$", "$10.00"),
])
def test_format_currency(amount, currency, symbol, expected):
    assert CurrencyConverter.format_currency(amount, currency, symbol) == expected
