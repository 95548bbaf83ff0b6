"""
Pytest plugin for reputation gate testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["reputation_gate.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from reputation_gate.testing.fixtures import (
    default_policy,
    mock_agent_id,
    mock_client,
    mock_team_id,
    sample_agent_reputation,
    sample_record,
    sample_team_reputation,
)

__all__ = [
    "mock_client",
    "mock_agent_id",
    "mock_team_id",
    "sample_agent_reputation",
    "sample_team_reputation",
    "sample_record",
    "default_policy",
]
