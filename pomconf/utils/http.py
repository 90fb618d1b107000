"""
HTTP client utilities for pomconf.

This module provides a synchronous HTTP client with retry logic and
exponential backoff, used to probe artifact repositories.
"""

from __future__ import annotations

import time
import httpx
import random
from typing import Any, Optional

from pomconf.utils.logger import get_logger
from pomconf.__version__ import __version__
from pomconf.exceptions import NetworkError
from pomconf.constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    USER_AGENT_TEMPLATE,
)

logger = get_logger("http")


class HTTPClient:
    """HTTP client with retries and backoff.

    Timeouts, network errors and 5xx responses are retried; 4xx responses
    are returned to the caller as-is so that a missing resource can be told
    apart from a failing one.

    Args:
        timeout: Request timeout in seconds.
        max_retries: Maximum number of retry attempts.
        verify_ssl: Whether to verify SSL certificates.
        user_agent: Custom User-Agent header value.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``.

    Example:
        >>> with HTTPClient() as client:
        ...     client.exists("https://repo1.maven.org/maven2/junit/junit/4.13.2/junit-4.13.2.jar")
        True
    """

    def __init__(
        self,
        *,
        timeout: int = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self.max_retries = max_retries
        self.verify_ssl = verify_ssl
        self.user_agent = user_agent or USER_AGENT_TEMPLATE.format(version=__version__)
        self.transport = transport

        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> "HTTPClient":
        self._ensure_client()
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

    def _ensure_client(self) -> None:
        """Initialize the underlying httpx client if needed."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=httpx.Timeout(self.timeout),
                http2=True,
                verify=self.verify_ssl,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
                transport=self.transport,
            )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _sleep_before_retry(self, attempt: int) -> None:
        if attempt < self.max_retries:
            delay = (2**attempt) + random.uniform(0.0, 0.3)
            logger.debug("Retrying in %.2fs", delay)
            time.sleep(delay)

    def _request_with_retry(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute an HTTP request with retry and backoff logic."""
        self._ensure_client()
        assert self._client is not None

        clean_url = url.strip().strip("\"'")
        last_exc: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            try:
                response = self._client.request(method, clean_url, **kwargs)

                if response.status_code >= 500:
                    response.raise_for_status()

                return response

            except httpx.TimeoutException as exc:
                last_exc = exc
                logger.warning(
                    "Request timeout (%d/%d): %s",
                    attempt + 1,
                    self.max_retries + 1,
                    clean_url,
                )

            except httpx.NetworkError as exc:
                last_exc = exc
                logger.warning(
                    "Network error (%d/%d): %s",
                    attempt + 1,
                    self.max_retries + 1,
                    exc,
                )

            except httpx.HTTPStatusError as exc:
                last_exc = exc
                logger.warning(
                    "HTTP %d error (%d/%d): %s",
                    exc.response.status_code,
                    attempt + 1,
                    self.max_retries + 1,
                    clean_url,
                )

            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                # Protocol and URL errors do not go away on retry.
                logger.warning("Request to %s failed: %s", clean_url, exc)
                raise NetworkError(
                    f"Request failed: {clean_url}",
                    url=clean_url,
                ) from exc

            self._sleep_before_retry(attempt)

        raise NetworkError(
            f"Request failed after {self.max_retries + 1} attempts: {clean_url}",
            url=clean_url,
        ) from last_exc

    def head(self, url: str, **kwargs: Any) -> httpx.Response:
        """Perform a HEAD request with retry logic."""
        return self._request_with_retry("HEAD", url, **kwargs)

    def exists(self, url: str) -> bool:
        """Return True if ``url`` answers a HEAD request with a 2xx status.

        Raises:
            NetworkError: The request kept failing after all retries.
        """
        return self.head(url).is_success
