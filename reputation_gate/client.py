"""
Rating service client.

Provides the primary interface for fetching reputation records.
"""

import os
from typing import Any

from reputation_gate.clients import AgentsClient, TeamsClient
from reputation_gate.exceptions import ConfigurationError, TransportError
from reputation_gate.transport import HTTPTransport, RetryConfig
from reputation_gate.types.reputation import EntityKind, EntityRef, ReputationRecord


class ReputationClient:
    """
    Client for the rating service.

    Aggregates the agent and team resource clients and normalizes either
    response shape into a ``ReputationRecord``.

    Example:
        ```python
        from reputation_gate import ReputationClient, resolve_entity

        entity = resolve_entity(agent_id="agent-42", team_id=None)
        with ReputationClient() as client:
            record = client.lookup(entity)
        ```
    """

    DEFAULT_BASE_URL = "https://api.mnemom.ai"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Base URL for API requests (default: https://api.mnemom.ai)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = HTTPTransport(
            base_url=base_url,
            timeout=timeout,
            retry_config=retry_config,
        )

        self.agents = AgentsClient(self._transport)
        self.teams = TeamsClient(self._transport)

    @classmethod
    def from_env(
        cls,
        retry_config: RetryConfig | None = None,
    ) -> "ReputationClient":
        """
        Create a client from environment variables.

        Environment variables:
            REPUTATION_GATE_API_URL: Base URL for API (optional, default: https://api.mnemom.ai)
            REPUTATION_GATE_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Raises:
            ConfigurationError: If REPUTATION_GATE_TIMEOUT is not a positive number
        """
        base_url = os.environ.get("REPUTATION_GATE_API_URL") or cls.DEFAULT_BASE_URL
        timeout_str = os.environ.get("REPUTATION_GATE_TIMEOUT")

        timeout = cls.DEFAULT_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid REPUTATION_GATE_TIMEOUT: {timeout_str!r}"
                ) from None
            if timeout <= 0:
                raise ConfigurationError(
                    f"REPUTATION_GATE_TIMEOUT must be positive, got {timeout_str}"
                )

        return cls(base_url=base_url, timeout=timeout, retry_config=retry_config)

    def lookup(self, entity: EntityRef) -> ReputationRecord:
        """
        Fetch and normalize the reputation record for an entity.

        Raises:
            NotFoundError: If the entity has no reputation record
            TransportError: On any other API error or a malformed payload
        """
        try:
            if entity.kind is EntityKind.TEAM:
                return ReputationRecord.from_team(
                    self.teams.get_reputation(entity.entity_id)
                )
            return ReputationRecord.from_agent(
                self.agents.get_reputation(entity.entity_id)
            )
        except ValueError as e:
            raise TransportError(
                "INVALID_RESPONSE",
                f"API error: invalid reputation record for {entity.label}: {e}",
            ) from e

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "ReputationClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
