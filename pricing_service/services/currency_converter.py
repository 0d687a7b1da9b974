"""
Currency conversion with live rates and a static fallback table
"""
import time
from typing import Callable, Dict, List, Optional, Tuple

from pricing_service.core.enums import RateSource
from pricing_service.core.exceptions import RemoteServiceError
from pricing_service.core.logging import get_logger
from pricing_service.infrastructure.http_clients.exchange_rate_client import ExchangeRateClient
from pricing_service.models.pricing import CurrencyConversion

logger = get_logger(__name__)

# Units per 1 USD, used when the live feed is unavailable
FALLBACK_RATES: Dict[str, float] = {
    "USD": 1.0,
    "GBP": 0.79,
    "EUR": 0.92,
    "CAD": 1.35,
    "AUD": 1.52,
    "JPY": 149.5,
    "SGD": 1.34,
    "BRL": 5.02,
    "CHF": 0.88,
    "NZD": 1.64,
    "SEK": 10.5,
    "NOK": 10.8,
    "DKK": 6.85,
    "ISK": 138.2,
    "PLN": 4.03,
    "CZK": 22.7,
    "HUF": 361.0,
    "KRW": 1320.0,
    "HKD": 7.81,
    "MYR": 4.48,
    "THB": 35.8,
    "INR": 83.2,
    "MXN": 17.1,
    "ZAR": 18.4,
    "TRY": 30.5,
    "ILS": 3.7,
    "CNY": 7.2,
    "RUB": 91.0,
}

DISPLAY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "GBP": "£",
    "EUR": "€",
    "JPY": "¥",
    "CNY": "CN¥",
    "INR": "₹",
    "KRW": "₩",
    "CAD": "CA$",
    "AUD": "A$",
    "NZD": "NZ$",
    "HKD": "HK$",
    "MXN": "MX$",
    "BRL": "R$",
    "ILS": "₪",
}


class CurrencyConverter:
    """
    Converts amounts between currencies via USD
    Live rates are cached for cache_seconds; any failure uses FALLBACK_RATES
    """

    def __init__(
        self,
        rate_client: Optional[ExchangeRateClient] = None,
        cache_seconds: int = 3600,
        clock: Callable[[], float] = time.monotonic
    ):
        self.rate_client = rate_client
        self.cache_seconds = cache_seconds
        self._clock = clock
        self._rates: Optional[Tuple[Dict[str, float], float]] = None

    def convert(self, amount: float, from_currency: str, to_currency: str) -> CurrencyConversion:
        """
        Convert an amount

        Args:
            amount: Amount in major units of from_currency
            from_currency: ISO 4217 code
            to_currency: ISO 4217 code

        Returns:
            CurrencyConversion with the rate used and where it came from
        """
        from_currency = from_currency.upper()
        to_currency = to_currency.upper()

        if from_currency == to_currency:
            return CurrencyConversion(
                from_amount=amount,
                from_currency=from_currency,
                to_amount=amount,
                to_currency=to_currency,
                rate=1.0,
                source=RateSource.FALLBACK
            )

        rate = self._live_rate(from_currency, to_currency)
        source = RateSource.API
        if rate is None:
            rate = self._fallback_rate(from_currency, to_currency)
            source = RateSource.FALLBACK

        return CurrencyConversion(
            from_amount=amount,
            from_currency=from_currency,
            to_amount=amount * rate,
            to_currency=to_currency,
            rate=rate,
            source=source
        )

    def _live_rate(self, from_currency: str, to_currency: str) -> Optional[float]:
        if self.rate_client is None:
            return None

        snapshot = self._rates
        now = self._clock()
        if snapshot is None or now - snapshot[1] >= self.cache_seconds:
            try:
                rates = self.rate_client.fetch_rates()
            except RemoteServiceError as e:
                logger.warning("Failed to fetch live exchange rates", error=e.message)
                return None
            rates.setdefault("USD", 1.0)
            snapshot = (rates, now)
            self._rates = snapshot
            logger.info("Updated exchange rates", currencies=len(rates))

        rates = snapshot[0]
        if from_currency in rates and to_currency in rates and rates[from_currency]:
            return rates[to_currency] / rates[from_currency]
        return None

    @staticmethod
    def _fallback_rate(from_currency: str, to_currency: str) -> float:
        from_rate = FALLBACK_RATES.get(from_currency, 1.0)
        to_rate = FALLBACK_RATES.get(to_currency, 1.0)
        return to_rate / from_rate

    @staticmethod
    def get_supported_currencies() -> List[str]:
        return list(FALLBACK_RATES)

    @staticmethod
    def format_currency(amount: float, currency: str, symbol: Optional[str] = None) -> str:
        """Format a major-unit amount, e.g. 1234.5 USD -> "$1,234.50" """
        if symbol:
            return f"{symbol}{amount:.2f}"
        known_symbol = DISPLAY_SYMBOLS.get(currency.upper())
        if known_symbol:
            return f"{known_symbol}{amount:,.2f}"
        return f"{currency.upper()} {amount:,.2f}"
