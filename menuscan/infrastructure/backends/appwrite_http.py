"""Appwrite REST transport.

Thin httpx wrapper shared by the Appwrite adapters:
- Project / API key / session headers
- Retry with exponential backoff on transport errors (tenacity)
- Error mapping: 404 -> NotFoundError, 409 -> ConflictError,
  anything else >= 400 -> BackendError with the server's message
"""
# mypy: warn-unused-ignores=False

import logging
from typing import Any, Dict, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from menuscan.config import AppwriteSettings
from menuscan.domain.shared.errors import BackendError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class AppwriteHttpClient:
    """
    Async HTTP client for the Appwrite REST API.

    Owns an httpx.AsyncClient, created lazily unless one is injected
    (tests inject one built on httpx.MockTransport).

    Example:
        >>> async with AppwriteHttpClient(AppwriteSettings.from_env()) as http:
        ...     account = await http.request("GET", "/account")
    """

    TIMEOUT_S = 10.0

    def __init__(
        self,
        settings: AppwriteSettings,
        client: Optional[httpx.AsyncClient] = None,
        session_secret: Optional[str] = None,
    ) -> None:
        """
        Initialize client.

        Args:
            settings: Endpoint / project / API key
            client: Preconfigured httpx client (optional)
            session_secret: User session secret for client-side calls (optional)

        Raises:
            ConfigurationError: If endpoint or project id is missing
        """
        self._settings = settings.require()
        self._client = client
        self._owns_client = client is None
        self._session_secret = session_secret

    @property
    def settings(self) -> AppwriteSettings:
        return self._settings

    def _headers(self) -> Dict[str, str]:
        headers = {
            "X-Appwrite-Project": self._settings.project_id,
            "Content-Type": "application/json",
        }
        if self._settings.api_key:
            headers["X-Appwrite-Key"] = self._settings.api_key
        if self._session_secret:
            headers["X-Appwrite-Session"] = self._session_secret
        return headers

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._settings.endpoint,
                timeout=httpx.Timeout(self.TIMEOUT_S),
            )
        return self._client

    async def __aenter__(self) -> "AppwriteHttpClient":
        """Async context manager entry."""
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    @retry(  # type: ignore[misc]
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _send(
        self,
        method: str,
        path: str,
        params: Optional[Any] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        client = self._ensure_client()
        return await client.request(
            method,
            f"{self._settings.endpoint}{path}",
            params=params,
            json=json,
            headers=self._headers(),
        )

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Any] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Perform a request and decode the JSON body.

        Args:
            method: HTTP method
            path: Path below the endpoint (e.g. "/account")
            params: Query parameters
            json: JSON body

        Returns:
            Decoded JSON, or None for empty (204) responses

        Raises:
            NotFoundError: On 404
            ConflictError: On 409
            BackendError: On transport failure or any other error status
        """
        try:
            response = await self._send(method, path, params=params, json=json)
        except httpx.TransportError as e:
            logger.error(
                "Appwrite request failed",
                extra={"method": method, "path": path, "error": str(e)},
            )
            raise BackendError(f"Network error contacting backend: {e}") from e

        if response.status_code >= 400:
            raise self._error_for(response, method, path)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_for(response: httpx.Response, method: str, path: str) -> Exception:
        message = f"Backend error {response.status_code}"
        try:
            body = response.json()
            if isinstance(body, dict) and isinstance(body.get("message"), str):
                message = body["message"]
        except ValueError:
            pass

        status = response.status_code
        if status == 404:
            logger.info("Appwrite resource not found", extra={"path": path})
            return NotFoundError(message)
        if status == 409:
            logger.info("Appwrite resource conflict", extra={"path": path})
            return ConflictError(message)

        logger.error(
            "Appwrite error response",
            extra={"method": method, "path": path, "status": status, "error": message},
        )
        return BackendError(message, status_code=status)
