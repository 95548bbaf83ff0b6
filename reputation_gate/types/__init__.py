"""Reputation gate type definitions."""

from reputation_gate.types.gate import GRADE_ORDINALS, NormalizedResult, Policy, Verdict
from reputation_gate.types.reputation import (
    AgentReputation,
    EntityKind,
    EntityRef,
    ReputationRecord,
    TeamReputation,
)

__all__ = [
    # Entities
    "EntityKind",
    "EntityRef",
    # Wire shapes
    "AgentReputation",
    "TeamReputation",
    # Normalized record
    "ReputationRecord",
    # Policy and verdict
    "GRADE_ORDINALS",
    "Policy",
    "NormalizedResult",
    "Verdict",
]
