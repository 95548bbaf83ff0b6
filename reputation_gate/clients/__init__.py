"""Rating service resource clients."""

from reputation_gate.clients.agents import AgentsClient
from reputation_gate.clients.teams import TeamsClient

__all__ = [
    "AgentsClient",
    "TeamsClient",
]
