"""
Reputation gate logging utilities.

Provides configurable logging for HTTP requests/responses and gate verdicts.
Ensures no credentials (API tokens, Authorization headers) are logged.
"""

import logging
import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from reputation_gate.types import EntityRef, Verdict

# Create package-specific loggers
_root_logger = logging.getLogger("reputation_gate")
_http_logger = logging.getLogger("reputation_gate.http")
_gate_logger = logging.getLogger("reputation_gate.gate")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Authorization header values
    (re.compile(r"(authorization['\"]?\s*[:=]\s*['\"]?)(bearer|token|basic)\s+[^\s'\"]+", re.IGNORECASE), r"\1\2 [REDACTED]"),
    # GitHub tokens
    (re.compile(r"\b(ghp|gho|ghu|ghs|ghr|github_pat)_[A-Za-z0-9_]{16,}\b"), "[TOKEN_REDACTED]"),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = {"authorization", "secret", "token", "password", "api_key"}


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure reputation gate logging.

    Args:
        level: Default log level for all package loggers (default: INFO)
        http_level: Log level for HTTP request/response logging (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from reputation_gate.logging import configure_logging

        # Show rating service traffic
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _root_logger.setLevel(level)
    _root_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a reputation gate logger.

    Args:
        name: Logger name suffix (e.g., "http", "gate"). If None, returns the package logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _root_logger
    return logging.getLogger(f"reputation_gate.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask credentials in a string.

    Args:
        text: Text that may contain tokens or Authorization headers

    Returns:
        Text with sensitive data masked
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Set of keys to mask (default: authorization, secret, token, password, api_key)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    body: dict[str, Any] | None = None,
) -> None:
    """
    Log an HTTP request at DEBUG level with sensitive data masked.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        headers: Request headers (optional)
        body: Request body (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if headers:
        log_parts.append(f"headers={safe_log_dict(headers)}")

    if body:
        log_parts.append(f"body={safe_log_dict(body)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    body: dict[str, Any] | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log an HTTP response at DEBUG level with sensitive data masked.

    Args:
        status_code: HTTP status code
        url: Request URL
        body: Response body (optional)
        elapsed_ms: Request duration in milliseconds (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if body:
        log_parts.append(f"body={safe_log_dict(body)}")

    _http_logger.debug(" | ".join(log_parts))


def log_verdict(entity: "EntityRef", verdict: "Verdict") -> None:
    """
    Log a gate verdict at INFO level (failures at WARNING).

    Args:
        entity: The evaluated entity
        verdict: The computed verdict
    """
    normalized = verdict.normalized
    summary = (
        f"{entity.label}: score={normalized.score}, grade={normalized.grade}, "
        f"tier={normalized.tier or '-'}, passed={verdict.passed}"
    )
    if verdict.passed:
        _gate_logger.info(summary)
    else:
        _gate_logger.warning("%s | reasons=%s", summary, "; ".join(verdict.reasons))


# Export public API
__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_verdict",
]
