"""Shared fixtures: a scripted requests session and ready-made services."""

from typing import Any, Dict, List, Optional

import pytest
import requests

from pricing_service.infrastructure.http_clients.backend_client import BackendClient
from pricing_service.infrastructure.http_clients.storefront_client import StorefrontClient
from pricing_service.models.domain import Address, Country
from pricing_service.services.bundle_pricing import BundlePricingService
from pricing_service.services.checkout_validation import CheckoutValidationService


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None):
        self.status_code = status_code
        self._body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeSession:
    """Answers requests by URL suffix; the last scripted answer for a path repeats."""

    def __init__(self):
        self.routes: Dict[str, List[Any]] = {}
        self.calls: List[Dict[str, Any]] = []

    def add(self, path: str, status: int = 200, body: Any = None,
            exc: Optional[Exception] = None) -> "FakeSession":
        self.routes.setdefault(path, []).append(exc or FakeResponse(status, body))
        return self

    def request(self, method, url, headers=None, timeout=None, **kwargs):
        self.calls.append({"method": method, "url": url, "headers": headers or {}, **kwargs})
        for path, answers in self.routes.items():
            if url.endswith(path):
                answer = answers.pop(0) if len(answers) > 1 else answers[0]
                if isinstance(answer, Exception):
                    raise answer
                return answer
        raise requests.ConnectionError(f"No route for {url}")

    def calls_to(self, path: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["url"].endswith(path)]


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


TIER_ROWS = [
    {"id": "t1", "quantity": 1, "price_gbp": 999, "discount_percentage": 0, "is_active": True},
    {"id": "t2", "quantity": 2, "price_gbp": 1749, "discount_percentage": 12, "is_active": True},
    {"id": "t3", "quantity": 3, "price_gbp": 2249, "discount_percentage": 25, "is_active": True},
    {"id": "t10", "quantity": 10, "price_gbp": 5099, "discount_percentage": 49, "is_active": True},
]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend_client(session):
    return BackendClient(
        "https://backend.example.com/rest/v1", "anon-key", session=session
    )


@pytest.fixture
def bundle_service(backend_client, session, clock):
    session.add("/digital_bundle_tiers", body=list(TIER_ROWS))
    return BundlePricingService(backend_client, cache_seconds=300, clock=clock)


@pytest.fixture
def storefront_client(session):
    return StorefrontClient("https://shop.example.com/api", session=session)


@pytest.fixture
def validator(storefront_client):
    return CheckoutValidationService(storefront_client, max_line_length=35)


@pytest.fixture
def countries():
    return [
        Country(code="GB", name="United Kingdom", currency_code="GBP", currency_symbol="£", flag="🇬🇧"),
        Country(code="US", name="United States", currency_code="USD", currency_symbol="$", flag="🇺🇸"),
        Country(code="CA", name="Canada", currency_code="CAD", currency_symbol="$", flag="🇨🇦"),
        Country(code="DE", name="Germany", currency_code="EUR", currency_symbol="€", flag="🇩🇪"),
        Country(code="AU", name="Australia", currency_code="AUD", currency_symbol="$", flag="🇦🇺"),
        Country(code="IE", name="Ireland", currency_code="EUR", currency_symbol="€", flag="🇮🇪"),
    ]


def make_address(**overrides) -> Address:
    data = {
        "firstName": "Jane",
        "lastName": "Smith",
        "email": "jane@example.com",
        "addressLine1": "10 Downing Street",
        "city": "London",
        "postcode": "SW1A 1AA",
        "country": "United Kingdom",
    }
    data.update(overrides)
    return Address.model_validate(data)


@pytest.fixture
def gb_address():
    return make_address()
