"""Teams resource client."""

from typing import TYPE_CHECKING

from reputation_gate.clients.agents import unwrap_payload
from reputation_gate.exceptions import TransportError
from reputation_gate.types.reputation import EntityKind, EntityRef, TeamReputation

if TYPE_CHECKING:
    from reputation_gate.transport import HTTPTransport


class TeamsClient:
    """Client for team reputation lookups."""

    def __init__(self, transport: "HTTPTransport") -> None:
        self.transport = transport

    def get_reputation(self, team_id: str) -> TeamReputation:
        """
        Get a team's reputation. Team records carry no tier.

        Raises:
            NotFoundError: If the team has no reputation record
            TransportError: On any other API error or a malformed payload
        """
        entity = EntityRef(kind=EntityKind.TEAM, entity_id=team_id)
        response = self.transport.request(method="GET", path=entity.lookup_path)

        data = unwrap_payload(response)
        try:
            reputation = TeamReputation.from_payload(data)
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(
                "INVALID_RESPONSE",
                f"API error: malformed reputation for team {team_id}: {e!r}",
            ) from e
        if not reputation.team_id:
            reputation.team_id = team_id
        return reputation
