"""
Pytest fixtures for reputation gate testing.

Provides common fixtures for testing code that uses the reputation gate.
"""

from datetime import datetime
from typing import Any, Generator

import pytest

from reputation_gate.testing.mock import MockReputationClient
from reputation_gate.types.gate import Policy
from reputation_gate.types.reputation import (
    AgentReputation,
    EntityKind,
    ReputationRecord,
    TeamReputation,
)


# ============================================================================
# Mock Client Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockReputationClient, None, None]:
    """
    Provide a MockReputationClient for testing.

    Example:
        ```python
        def test_my_gate(mock_client, sample_agent_reputation):
            mock_client.agents.configure_get_reputation(response=sample_agent_reputation)
            exit_code = run(config, client=mock_client)
            assert mock_client.was_called("agents.get_reputation")
        ```
    """
    client = MockReputationClient()
    yield client
    client.reset()


@pytest.fixture
def mock_agent_id() -> str:
    """Provide a test agent ID."""
    return "test-agent-id"


@pytest.fixture
def mock_team_id() -> str:
    """Provide a test team ID."""
    return "test-team-id"


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_agent_reputation() -> AgentReputation:
    """Provide a sample AgentReputation object."""
    return create_mock_agent_reputation(agent_id="sample-agent-id")


@pytest.fixture
def sample_team_reputation() -> TeamReputation:
    """Provide a sample TeamReputation object."""
    return create_mock_team_reputation(team_id="sample-team-id")


@pytest.fixture
def sample_record() -> ReputationRecord:
    """Provide a sample normalized agent record."""
    return create_mock_record()


@pytest.fixture
def default_policy() -> Policy:
    """Provide a policy with both checks disabled."""
    return Policy()


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_agent_reputation(
    agent_id: str = "test-agent-id",
    score: int | float = 82,
    grade: str = "AA",
    **kwargs: Any,
) -> AgentReputation:
    """
    Create an AgentReputation with customizable fields.

    Args:
        agent_id: Agent ID
        score: Reputation score
        grade: Reputation grade
        **kwargs: Additional fields to override

    Returns:
        AgentReputation object
    """
    defaults = {
        "tier": "Trusted",
        "is_eligible": True,
        "computed_at": datetime(2024, 1, 15, 12, 0, 0),
    }
    defaults.update(kwargs)
    return AgentReputation(agent_id=agent_id, score=score, grade=grade, **defaults)


def create_mock_team_reputation(
    team_id: str = "test-team-id",
    score: int | float = 74,
    grade: str = "A",
    **kwargs: Any,
) -> TeamReputation:
    """
    Create a TeamReputation with customizable fields.

    Args:
        team_id: Team ID
        score: Reputation score
        grade: Reputation grade
        **kwargs: Additional fields to override

    Returns:
        TeamReputation object
    """
    defaults = {
        "team_name": "test-team",
        "confidence": 0.9,
        "is_eligible": True,
        "computed_at": datetime(2024, 1, 15, 12, 0, 0),
    }
    defaults.update(kwargs)
    return TeamReputation(team_id=team_id, score=score, grade=grade, **defaults)


def create_mock_record(
    entity_id: str = "test-agent-id",
    entity_kind: EntityKind = EntityKind.AGENT,
    score: int | float = 82,
    grade: str = "AA",
    tier: str | None = "Trusted",
) -> ReputationRecord:
    """Create a normalized ReputationRecord. Team records never carry a tier."""
    if entity_kind is EntityKind.TEAM:
        tier = None
    return ReputationRecord(
        entity_id=entity_id,
        entity_kind=entity_kind,
        score=score,
        grade=grade,
        tier=tier,
    )


__all__ = [
    # Fixtures (exported for documentation, actual fixtures are auto-discovered)
    "mock_client",
    "mock_agent_id",
    "mock_team_id",
    "sample_agent_reputation",
    "sample_team_reputation",
    "sample_record",
    "default_policy",
    # Helper functions
    "create_mock_agent_reputation",
    "create_mock_team_reputation",
    "create_mock_record",
]
