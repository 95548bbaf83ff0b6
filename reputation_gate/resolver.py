"""Entity selection from caller-supplied identifiers."""

from reputation_gate.exceptions import ConfigurationError
from reputation_gate.types.reputation import EntityKind, EntityRef


def resolve_entity(agent_id: str | None, team_id: str | None) -> EntityRef:
    """
    Pick the single entity a gate run is about.

    Exactly one of ``agent_id`` and ``team_id`` must be non-empty.

    Args:
        agent_id: Agent identifier, or empty/None
        team_id: Team identifier, or empty/None

    Returns:
        EntityRef for the team if ``team_id`` is set, otherwise for the agent

    Raises:
        ConfigurationError: If both or neither identifier is supplied
    """
    agent_id = (agent_id or "").strip()
    team_id = (team_id or "").strip()

    if agent_id and team_id:
        raise ConfigurationError(
            f"Provide either agent-id or team-id, not both "
            f"(got agent-id={agent_id!r}, team-id={team_id!r})"
        )
    if not agent_id and not team_id:
        raise ConfigurationError("One of agent-id or team-id is required")

    if team_id:
        return EntityRef(kind=EntityKind.TEAM, entity_id=team_id)
    return EntityRef(kind=EntityKind.AGENT, entity_id=agent_id)
