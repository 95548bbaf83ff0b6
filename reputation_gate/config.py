"""
Gate configuration.

Inputs arrive the way GitHub Actions passes them (``INPUT_<NAME>``
environment variables) or as CLI flags; both are plain strings parsed here.
"""

import json
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from reputation_gate.client import ReputationClient
from reputation_gate.exceptions import ConfigurationError
from reputation_gate.types.gate import Policy

DEFAULT_API_URL = ReputationClient.DEFAULT_BASE_URL
DEFAULT_TIMEOUT = ReputationClient.DEFAULT_TIMEOUT


def get_input(environ: Mapping[str, str], name: str) -> str:
    """Read an action input, e.g. ``agent-id`` from ``INPUT_AGENT-ID``."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return environ.get(key, "").strip()


def parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def parse_min_score(value: str) -> int:
    """
    Parse the ``min-score`` input.

    Empty means 0 (score check disabled).

    Raises:
        ConfigurationError: If the value is not a non-negative integer
    """
    value = value.strip()
    if not value:
        return 0
    try:
        min_score = int(value)
    except ValueError:
        raise ConfigurationError(
            f"min-score must be a non-negative integer, got {value!r}"
        ) from None
    if min_score < 0:
        raise ConfigurationError(
            f"min-score must be a non-negative integer, got {min_score}"
        )
    return min_score


def parse_timeout(value: str) -> float:
    value = value.strip()
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigurationError(f"timeout must be a number of seconds, got {value!r}") from None
    if timeout <= 0:
        raise ConfigurationError(f"timeout must be positive, got {value}")
    return timeout


@dataclass
class GateConfig:
    """Inputs for one gate run."""

    agent_id: str = ""
    team_id: str = ""
    min_score: int = 0
    min_grade: str = ""
    api_url: str = DEFAULT_API_URL
    comment: bool = False
    strict_grade: bool = False
    timeout: float = DEFAULT_TIMEOUT

    @property
    def policy(self) -> Policy:
        return Policy(
            min_score=self.min_score,
            min_grade=self.min_grade,
            strict_grade=self.strict_grade,
        )

    @classmethod
    def from_inputs(cls, read: Callable[[str], str]) -> "GateConfig":
        """
        Build a config from a string-valued input reader.

        Args:
            read: Returns the raw value of an input by its action name
                (``agent-id``, ``min-score``, ...), or "" when unset

        Raises:
            ConfigurationError: On a malformed ``min-score`` or ``timeout``
        """
        return cls(
            agent_id=read("agent-id").strip(),
            team_id=read("team-id").strip(),
            min_score=parse_min_score(read("min-score")),
            min_grade=read("min-grade").strip(),
            api_url=read("api-url").strip() or DEFAULT_API_URL,
            comment=parse_bool(read("comment")),
            strict_grade=parse_bool(read("strict-grade")),
            timeout=parse_timeout(read("timeout")),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GateConfig":
        """Build a config from GitHub Actions ``INPUT_*`` variables."""
        env = os.environ if environ is None else environ
        return cls.from_inputs(lambda name: get_input(env, name))


@dataclass
class GitHubContext:
    """The parts of the workflow run the annotator needs."""

    token: str = ""
    repository: str = ""
    api_url: str = "https://api.github.com"
    pull_request_number: int | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GitHubContext":
        """
        Read the workflow context.

        The pull request number comes from the event payload at
        ``GITHUB_EVENT_PATH``; it is None outside pull-request events.
        """
        env = os.environ if environ is None else environ
        return cls(
            token=env.get("GITHUB_TOKEN", ""),
            repository=env.get("GITHUB_REPOSITORY", ""),
            api_url=env.get("GITHUB_API_URL") or "https://api.github.com",
            pull_request_number=_pull_request_number(env.get("GITHUB_EVENT_PATH", "")),
        )


def _pull_request_number(event_path: str) -> int | None:
    if not event_path:
        return None
    try:
        with open(event_path, encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, ValueError):
        return None
    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    if not isinstance(pull_request, dict):
        return None
    number = pull_request.get("number")
    return number if isinstance(number, int) else None
