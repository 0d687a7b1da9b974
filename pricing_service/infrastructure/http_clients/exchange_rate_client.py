"""
Client for the public USD-based exchange rate feed
"""
from typing import Dict

from pricing_service.core.exceptions import RemoteServiceError
from pricing_service.infrastructure.http_clients.base_client import BaseHTTPClient


class ExchangeRateClient(BaseHTTPClient):
    """Fetches the latest rates; base_url is the full feed URL"""

    def fetch_rates(self) -> Dict[str, float]:
        """
        Fetch the latest rates

        Returns:
            Mapping currency code -> units per 1 USD
        """
        data = self._request("GET", "", default_error="Exchange rate API error")
        rates = data.get("rates") if isinstance(data, dict) else None
        if not rates:
            raise RemoteServiceError("Exchange rate API returned no rates")

        return {code: float(rate) for code, rate in rates.items()}
