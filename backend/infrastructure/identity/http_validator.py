"""Remote identity validator - Implements IIdentityValidator port.

Asks an HTTP endpoint whether a user id may use the kiosk.

Key Features:
- POST {"netid": "<id>"} -> {"allowed": true|false}
- Circuit breaker (5 failures -> 60s timeout)
- Retry logic (exponential backoff) on network and 5xx errors
"""
# mypy: warn-unused-ignores=False

import asyncio
import logging
from typing import Any, Optional

import httpx
from circuitbreaker import circuit
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from infrastructure.identity.allow_list_validator import normalize_user_id

logger = logging.getLogger(__name__)


class HttpIdentityValidator:
    """
    Identity validator backed by a remote endpoint.

    A 404 or 403 answer means "not allowed"; other client errors and
    malformed bodies count as rejection too. Network failures and 5xx
    responses are retried, then propagate to the caller.

    Example:
        >>> async with HttpIdentityValidator("https://ids.example.edu/validate") as v:
        ...     allowed = await v.is_allowed("jsmith")
    """

    TIMEOUT_S = 5.0

    def __init__(self, url: str, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize validator.

        Args:
            url: Validation endpoint
            client: Pre-built httpx client (tests); otherwise created on enter
        """
        self._url = url
        self._session: Optional[httpx.AsyncClient] = client

    async def __aenter__(self) -> "HttpIdentityValidator":
        """Async context manager entry."""
        if self._session is None:
            self._session = httpx.AsyncClient(timeout=httpx.Timeout(self.TIMEOUT_S))
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.aclose()
            self._session = None

    @circuit(  # type: ignore[misc]
        failure_threshold=5, recovery_timeout=60, name="identity_validate"
    )
    @retry(  # type: ignore[misc]
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        retry=retry_if_exception_type(
            (asyncio.TimeoutError, ConnectionError, httpx.TransportError, httpx.HTTPStatusError)
        ),
        reraise=True,
    )
    async def is_allowed(self, user_id: str) -> bool:
        """
        Ask the endpoint whether the user id is allowed.

        Raises:
            RuntimeError: If used outside the async context manager
            httpx.HTTPError: On network or server errors (after retries)
        """
        if not self._session:
            raise RuntimeError("Validator not initialized. Use async context manager.")

        netid = normalize_user_id(user_id)
        response = await self._session.post(self._url, json={"netid": netid})

        if response.status_code in (403, 404):
            logger.info("Identity rejected by endpoint", extra={"user_id": netid})
            return False

        if response.status_code >= 500:
            logger.warning(
                "Identity endpoint server error",
                extra={"user_id": netid, "status": response.status_code},
            )
            response.raise_for_status()

        if response.status_code != 200:
            logger.warning(
                "Unexpected identity endpoint status",
                extra={"user_id": netid, "status": response.status_code},
            )
            return False

        try:
            data = response.json()
        except ValueError:
            logger.warning("Malformed identity response", extra={"user_id": netid})
            return False

        return bool(isinstance(data, dict) and data.get("allowed") is True)
