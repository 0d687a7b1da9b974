"""
Read-only client for the managed backend's REST interface (PostgREST)
"""
from typing import Any, Dict, List, Optional

import requests

from pricing_service.core.exceptions import ConfigurationError
from pricing_service.infrastructure.http_clients.base_client import BaseHTTPClient


class BackendClient(BaseHTTPClient):
    """
    Queries tables of the managed backend
    Filters use PostgREST syntax, e.g. {"is_active": "eq.true"}
    """

    def __init__(
        self,
        rest_url: str,
        api_key: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        super().__init__(rest_url, timeout=timeout, session=session)
        self.api_key = api_key

    def select(self, table: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """
        Select rows from a table

        Args:
            table: Table name
            params: PostgREST query parameters

        Returns:
            List of rows

        Raises:
            ConfigurationError: Backend URL or key not configured
            RemoteServiceError: Request failed
        """
        if not self.api_key or not self.base_url.startswith("http"):
            raise ConfigurationError(
                "Backend REST endpoint is not configured",
                details={"table": table}
            )

        rows = self._request(
            "GET",
            f"/{table}",
            default_error=f"Failed to query {table}",
            headers={
                "apikey": self.api_key,
                "Authorization": f"Bearer {self.api_key}",
                "Accept": "application/json",
            },
            params=params,
        )
        return rows if isinstance(rows, list) else []
