"""Agents resource client."""

from typing import TYPE_CHECKING, Any

from reputation_gate.exceptions import TransportError
from reputation_gate.types.reputation import AgentReputation, EntityKind, EntityRef

if TYPE_CHECKING:
    from reputation_gate.transport import HTTPTransport


def unwrap_payload(response: dict[str, Any]) -> dict[str, Any]:
    """Return the record object, accepting an optional ``{"data": ...}`` envelope."""
    data = response.get("data", response)
    if not isinstance(data, dict):
        raise TransportError(
            "INVALID_RESPONSE", "API error: reputation payload is not a JSON object"
        )
    return data


class AgentsClient:
    """Client for agent reputation lookups."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the agents client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def get_reputation(self, agent_id: str) -> AgentReputation:
        """
        Get an agent's reputation.

        Args:
            agent_id: The unique agent identifier

        Returns:
            AgentReputation with score, grade and tier

        Raises:
            NotFoundError: If the agent has no reputation record
            TransportError: On any other API error or a malformed payload
        """
        entity = EntityRef(kind=EntityKind.AGENT, entity_id=agent_id)
        response = self.transport.request(method="GET", path=entity.lookup_path)

        data = unwrap_payload(response)
        try:
            reputation = AgentReputation.from_payload(data)
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(
                "INVALID_RESPONSE",
                f"API error: malformed reputation for agent {agent_id}: {e!r}",
            ) from e
        if not reputation.agent_id:
            reputation.agent_id = agent_id
        return reputation
