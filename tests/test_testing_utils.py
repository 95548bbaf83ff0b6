"""
Tests for reputation gate testing utilities.

Verifies that MockReputationClient and fixtures work correctly.
"""

import io

import pytest

from reputation_gate.action import EXIT_ERROR, ActionOutput, run
from reputation_gate.config import GateConfig
from reputation_gate.exceptions import NotFoundError, TransportError
from reputation_gate.testing import (
    MockReputationClient,
    create_mock_agent_reputation,
    create_mock_record,
    create_mock_team_reputation,
)
from reputation_gate.types.gate import Policy
from reputation_gate.types.reputation import (
    AgentReputation,
    EntityKind,
    EntityRef,
    ReputationRecord,
    TeamReputation,
)


class TestMockReputationClient:
    """Tests for MockReputationClient."""

    def test_default_responses(self) -> None:
        """Test that mock client returns sensible defaults."""
        mock = MockReputationClient()

        agent = mock.agents.get_reputation("agent-1")
        assert agent.agent_id == "agent-1"
        assert agent.tier is not None

        team = mock.teams.get_reputation("team-1")
        assert team.team_id == "team-1"

    def test_configured_responses(self) -> None:
        """Test that configured responses are returned."""
        mock = MockReputationClient()
        mock.agents.configure_get_reputation(
            response=create_mock_agent_reputation(agent_id="custom", score=99, grade="AAA")
        )

        reputation = mock.agents.get_reputation("any-id")
        assert reputation.agent_id == "custom"
        assert reputation.score == 99

    def test_configured_errors(self) -> None:
        """Test that configured errors are raised."""
        mock = MockReputationClient()
        mock.teams.configure_get_reputation(error=NotFoundError("NOT_FOUND", "no record"))

        with pytest.raises(NotFoundError) as exc_info:
            mock.lookup(EntityRef(EntityKind.TEAM, "ghost"))

        assert exc_info.value.code == "NOT_FOUND"

    def test_lookup_normalizes(self) -> None:
        mock = MockReputationClient()

        agent = mock.lookup(EntityRef(EntityKind.AGENT, "a"))
        team = mock.lookup(EntityRef(EntityKind.TEAM, "t"))

        assert agent.entity_kind is EntityKind.AGENT
        assert team.entity_kind is EntityKind.TEAM
        assert team.tier is None

    def test_invalid_record_becomes_transport_error(self) -> None:
        mock = MockReputationClient()
        mock.agents.configure_get_reputation(
            response=create_mock_agent_reputation(agent_id="a", score=float("nan"))
        )

        with pytest.raises(TransportError) as exc_info:
            mock.lookup(EntityRef(EntityKind.AGENT, "a"))

        assert exc_info.value.code == "INVALID_RESPONSE"
        assert "Agent a" in exc_info.value.message

    def test_invalid_record_is_fatal_for_run(self) -> None:
        mock = MockReputationClient()
        mock.teams.configure_get_reputation(
            response=create_mock_team_reputation(team_id="core", grade=None)
        )
        output = ActionOutput(stream=io.StringIO())

        assert run(GateConfig(team_id="core"), client=mock, output=output) == EXIT_ERROR
        assert output.outputs == {}

    def test_call_tracking(self) -> None:
        """Test that method calls are tracked."""
        mock = MockReputationClient()

        mock.lookup(EntityRef(EntityKind.AGENT, "a1"))
        mock.lookup(EntityRef(EntityKind.AGENT, "a2"))

        assert mock.was_called("agents.get_reputation")
        assert mock.call_count("agents.get_reputation") == 2
        assert not mock.was_called("teams.get_reputation")
        assert [call.args for call in mock.get_calls("agents.get_reputation")] == [
            ("a1",),
            ("a2",),
        ]

    def test_reset(self) -> None:
        """Test that reset clears calls and responses."""
        mock = MockReputationClient()
        mock.agents.configure_get_reputation(
            response=create_mock_agent_reputation(agent_id="custom")
        )
        mock.agents.get_reputation("a")

        mock.reset()

        assert mock.get_calls() == []
        assert mock.agents.get_reputation("after-reset").agent_id == "after-reset"

    def test_context_manager(self) -> None:
        with MockReputationClient() as mock:
            assert mock.lookup(EntityRef(EntityKind.AGENT, "a")) is not None


class TestHelperFunctions:
    """Tests for helper functions."""

    def test_create_mock_agent_reputation(self) -> None:
        reputation = create_mock_agent_reputation(agent_id="a", tier="Verified")

        assert isinstance(reputation, AgentReputation)
        assert reputation.tier == "Verified"
        assert reputation.grade == "AA"  # Default

    def test_create_mock_team_reputation(self) -> None:
        reputation = create_mock_team_reputation(team_name="Platform")

        assert isinstance(reputation, TeamReputation)
        assert reputation.team_name == "Platform"

    def test_create_mock_record_team_drops_tier(self) -> None:
        record = create_mock_record(entity_kind=EntityKind.TEAM, tier="ignored")

        assert isinstance(record, ReputationRecord)
        assert record.tier is None


class TestFixtures:
    """The pytest plugin fixtures are wired up through tests/conftest.py."""

    def test_sample_fixtures(
        self,
        sample_agent_reputation: AgentReputation,
        sample_team_reputation: TeamReputation,
        sample_record: ReputationRecord,
        default_policy: Policy,
    ) -> None:
        assert sample_agent_reputation.agent_id == "sample-agent-id"
        assert sample_team_reputation.team_id == "sample-team-id"
        assert sample_record.entity_kind is EntityKind.AGENT
        assert default_policy == Policy(min_score=0, min_grade="")

    def test_mock_client_fixture(self, mock_client: MockReputationClient) -> None:
        assert mock_client.get_calls() == []
