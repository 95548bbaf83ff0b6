"""
HTTP Transport for the rating service.

Handles HTTP communication with automatic retry logic and error handling.
"""

import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from reputation_gate.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RateLimitedError,
    ReputationGateError,
    ServerError,
    TransportError,
    ValidationError,
)
from reputation_gate.logging import log_http_request, log_http_response


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


class HTTPTransport:
    """
    HTTP transport layer with retry logic.

    Handles:
    - Exponential backoff with jitter for retries
    - Retry-After header respect for rate limiting
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.mnemom.ai")
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            headers: Extra headers sent with every request
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            follow_redirects=True,
            headers={"Accept": "application/json", **(headers or {})},
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(self, method: str, path: str) -> dict[str, Any]:
        """
        Make a request with automatic retry.

        Args:
            method: HTTP method
            path: API path (e.g., "/v1/reputation/agent-1")

        Returns:
            Parsed JSON response

        Raises:
            NotFoundError: On 404
            TransportError: On any other API or network error
        """
        def make_request() -> httpx.Response:
            log_http_request(method, f"{self.base_url}{path}")
            started = time.monotonic()
            response = self._client.request(method, path)
            log_http_response(
                response.status_code,
                f"{self.base_url}{path}",
                elapsed_ms=(time.monotonic() - started) * 1000,
            )
            return response

        return self._execute_with_retry(make_request)

    def _execute_with_retry(
        self, request_fn: Callable[[], httpx.Response]
    ) -> dict[str, Any]:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            request_fn: Function that makes the HTTP request

        Returns:
            Parsed JSON response

        Raises:
            ReputationGateError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                response = request_fn()

                if response.status_code < 300:
                    return self._parse_json(response)
                if response.status_code < 400:
                    # Redirects are followed; one left over has no usable Location.
                    raise TransportError(
                        "UNEXPECTED_REDIRECT",
                        f"API error: {response.status_code} {response.reason_phrase}".rstrip(),
                        response.status_code,
                    )

                error = self._parse_error_response(response)

                if not self._should_retry(response.status_code, attempt):
                    raise error

                last_error = error

                retry_after = response.headers.get("Retry-After")
                wait_time = self._get_backoff_time(attempt, retry_after)
                time.sleep(wait_time)

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError(
                        "CONNECTION_ERROR", f"API error: connection failed: {e}"
                    ) from e

                last_error = e
                wait_time = self._get_backoff_time(attempt, None)
                time.sleep(wait_time)

        # Should not reach here, but just in case
        if last_error:
            if isinstance(last_error, ReputationGateError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _get_backoff_time(
        self, attempt: int, retry_after: str | None
    ) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass  # Fall through to exponential backoff

        base_wait = self.retry_config.backoff_factor ** attempt

        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)

    def _parse_json(self, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                "INVALID_RESPONSE",
                f"API error: {response.status_code} response is not valid JSON",
                response.status_code,
            ) from e
        if not isinstance(data, dict):
            raise TransportError(
                "INVALID_RESPONSE",
                f"API error: {response.status_code} response is not a JSON object",
                response.status_code,
            )
        return data

    def _parse_error_response(self, response: httpx.Response) -> ReputationGateError:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            NotFoundError for 404, otherwise the matching TransportError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        error = data.get("error")
        if not isinstance(error, dict):
            error = {}
        status_code = response.status_code
        code = error.get("code", "UNKNOWN_ERROR")
        message = f"API error: {status_code} {response.reason_phrase}".rstrip()
        if error.get("message"):
            message = f"{message}: {error['message']}"
        meta = data.get("meta")
        request_id = meta.get("requestId") if isinstance(meta, dict) else None

        if status_code == 404:
            return NotFoundError(code, message, request_id)
        elif status_code == 401:
            return AuthenticationError(code, message, status_code, request_id)
        elif status_code == 403:
            return AuthorizationError(code, message, status_code, request_id)
        elif status_code == 429:
            retry_after_str = response.headers.get("Retry-After", "60")
            try:
                retry_after = int(retry_after_str)
            except ValueError:
                retry_after = 60
            return RateLimitedError(code, message, retry_after, status_code, request_id)
        elif status_code >= 500:
            return ServerError(code, message, status_code, request_id)
        else:
            return ValidationError(code, message, status_code, request_id)
