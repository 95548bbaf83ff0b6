"""Reputation gate - fail CI checks on untrusted agents and teams."""

from reputation_gate.annotation import AnnotationReport, PullRequestAnnotator, render_report
from reputation_gate.client import ReputationClient
from reputation_gate.config import GateConfig, GitHubContext
from reputation_gate.exceptions import (
    AnnotationError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    NotFoundError,
    RateLimitedError,
    ReputationGateError,
    ServerError,
    TransportError,
    ValidationError,
)
from reputation_gate.gate import evaluate, grade_ordinal, not_found_verdict
from reputation_gate.logging import configure_logging, get_logger
from reputation_gate.resolver import resolve_entity
from reputation_gate.transport import HTTPTransport, RetryConfig
from reputation_gate.types import (
    GRADE_ORDINALS,
    EntityKind,
    EntityRef,
    NormalizedResult,
    Policy,
    ReputationRecord,
    Verdict,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Client
    "ReputationClient",
    # Core
    "resolve_entity",
    "evaluate",
    "not_found_verdict",
    "grade_ordinal",
    # Types
    "GRADE_ORDINALS",
    "EntityKind",
    "EntityRef",
    "ReputationRecord",
    "Policy",
    "NormalizedResult",
    "Verdict",
    # Configuration
    "GateConfig",
    "GitHubContext",
    # Annotation
    "AnnotationReport",
    "PullRequestAnnotator",
    "render_report",
    # Exceptions
    "ReputationGateError",
    "ConfigurationError",
    "NotFoundError",
    "TransportError",
    "AuthenticationError",
    "AuthorizationError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "AnnotationError",
    # Transport
    "HTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
