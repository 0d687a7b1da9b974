"""
Base class for outbound HTTP clients
"""
from typing import Any, Dict, Optional

import requests

from pricing_service.core.exceptions import RemoteServiceError
from pricing_service.core.logging import get_logger

logger = get_logger(__name__)


class BaseHTTPClient:
    """
    Thin wrapper over a requests session
    Every failure (network, non-2xx, invalid JSON) surfaces as RemoteServiceError
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        default_error: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any
    ) -> Any:
        """
        Send a request and decode the JSON body

        Args:
            method: HTTP method
            path: Path relative to base_url
            default_error: Message used when an error response carries none
            headers: Extra headers

        Returns:
            Decoded JSON body

        Raises:
            RemoteServiceError: On network errors, non-2xx statuses or bad JSON
        """
        url = f"{self.base_url}{path}"

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                timeout=self.timeout,
                **kwargs
            )
        except requests.RequestException as e:
            logger.warning("HTTP request failed", url=url, error=str(e))
            raise RemoteServiceError(
                str(e) or default_error,
                details={"url": url}
            ) from e

        if not response.ok:
            message = self._error_message(response) or default_error
            logger.warning(
                "HTTP request returned error status",
                url=url,
                status_code=response.status_code,
                error=message
            )
            raise RemoteServiceError(
                message,
                details={"url": url, "status_code": response.status_code}
            )

        try:
            return response.json()
        except ValueError as e:
            raise RemoteServiceError(
                "Invalid JSON in response",
                details={"url": url, "status_code": response.status_code}
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> Optional[str]:
        """Pull the "error" field out of an error body, if there is one"""
        try:
            body = response.json()
        except ValueError:
            return None

        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return None
