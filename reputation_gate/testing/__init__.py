"""Reputation gate testing utilities.

Provides a mock client and fixtures for testing code that uses the
reputation gate.
"""

from reputation_gate.testing.fixtures import (
    create_mock_agent_reputation,
    create_mock_record,
    create_mock_team_reputation,
)
from reputation_gate.testing.mock import MockCall, MockReputationClient, MockResponse

__all__ = [
    # Mock client
    "MockReputationClient",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_agent_reputation",
    "create_mock_team_reputation",
    "create_mock_record",
]
