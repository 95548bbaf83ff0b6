"""Reputation gate exception classes."""


class ReputationGateError(Exception):
    """Base exception for all reputation gate errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(ReputationGateError):
    """Raised when gate inputs or client configuration are invalid."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class NotFoundError(ReputationGateError):
    """Raised when the rating service has no record for an entity."""

    pass


class TransportError(ReputationGateError):
    """Raised on any non-404 failure talking to the rating service."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.status_code = status_code


class AuthenticationError(TransportError):
    """Raised when the rating service rejects the credentials (401)."""

    pass


class AuthorizationError(TransportError):
    """Raised when access is denied (403)."""

    pass


class RateLimitedError(TransportError):
    """Raised when rate limited."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        status_code: int | None = 429,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, status_code, request_id)
        self.retry_after = retry_after


class ValidationError(TransportError):
    """Raised on other client errors (4xx)."""

    pass


class ServerError(TransportError):
    """Raised on server errors (5xx) and connection failures."""

    pass


class AnnotationError(ReputationGateError):
    """Raised when posting the pull-request report fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__("ANNOTATION_ERROR", message)
        self.status_code = status_code
