"""Reputation data models.

The rating service answers in one of two shapes, one per entity kind. Both
are normalized into a single ``ReputationRecord`` tagged with its
``EntityKind`` so the gate never branches on shape.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import quote


class EntityKind(str, Enum):
    """Kind of rated entity."""

    AGENT = "agent"
    TEAM = "team"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class EntityRef:
    """The one entity a gate run is about."""

    kind: EntityKind
    entity_id: str

    @property
    def label(self) -> str:
        """Human-readable label, e.g. ``Agent x42``."""
        return f"{self.kind.label} {self.entity_id}"

    @property
    def quoted_id(self) -> str:
        return quote(self.entity_id, safe="")

    @property
    def lookup_path(self) -> str:
        """Rating service path for this entity's reputation."""
        if self.kind is EntityKind.TEAM:
            return f"/v1/teams/{self.quoted_id}/reputation"
        return f"/v1/reputation/{self.quoted_id}"


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.rstrip("Z"))


@dataclass
class AgentReputation:
    """Agent reputation as returned by the rating service."""

    agent_id: str
    score: int | float
    grade: str
    tier: str | None
    is_eligible: bool
    computed_at: datetime | None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "AgentReputation":
        # Handle both camelCase and snake_case from backend
        return cls(
            agent_id=data.get("agent_id") or data.get("agentId") or "",
            score=data["score"],
            grade=data["grade"],
            tier=data.get("tier"),
            is_eligible=bool(data.get("is_eligible", data.get("isEligible", False))),
            computed_at=_parse_timestamp(
                data.get("computed_at") or data.get("computedAt")
            ),
        )


@dataclass
class TeamReputation:
    """Team reputation as returned by the rating service. Teams have no tier."""

    team_id: str
    team_name: str
    score: int | float
    grade: str
    confidence: float | None
    is_eligible: bool
    computed_at: datetime | None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "TeamReputation":
        return cls(
            team_id=data.get("team_id") or data.get("teamId") or "",
            team_name=data.get("team_name") or data.get("teamName") or "",
            score=data["score"],
            grade=data["grade"],
            confidence=data.get("confidence"),
            is_eligible=bool(data.get("is_eligible", data.get("isEligible", False))),
            computed_at=_parse_timestamp(
                data.get("computed_at") or data.get("computedAt")
            ),
        )


@dataclass(frozen=True)
class ReputationRecord:
    """Normalized reputation record the gate evaluates."""

    entity_id: str
    entity_kind: EntityKind
    score: int | float
    grade: str
    tier: str | None = None

    def __post_init__(self) -> None:
        if not self.entity_id:
            raise ValueError("entity_id must be non-empty")
        if isinstance(self.score, bool) or not isinstance(self.score, (int, float)):
            raise ValueError(f"score must be a number, got {self.score!r}")
        if not math.isfinite(self.score):
            raise ValueError(f"score must be finite, got {self.score!r}")
        if self.score < 0:
            raise ValueError(f"score must be non-negative, got {self.score}")
        if not isinstance(self.grade, str):
            raise ValueError(f"grade must be a string, got {self.grade!r}")
        if self.tier is not None and not isinstance(self.tier, str):
            raise ValueError(f"tier must be a string, got {self.tier!r}")

    @classmethod
    def from_agent(cls, reputation: AgentReputation) -> "ReputationRecord":
        return cls(
            entity_id=reputation.agent_id,
            entity_kind=EntityKind.AGENT,
            score=reputation.score,
            grade=reputation.grade,
            tier=reputation.tier or None,
        )

    @classmethod
    def from_team(cls, reputation: TeamReputation) -> "ReputationRecord":
        return cls(
            entity_id=reputation.team_id,
            entity_kind=EntityKind.TEAM,
            score=reputation.score,
            grade=reputation.grade,
        )

    @classmethod
    def not_rated(cls, entity: EntityRef) -> "ReputationRecord":
        """Sentinel record for an entity the service has never rated."""
        return cls(
            entity_id=entity.entity_id,
            entity_kind=entity.kind,
            score=0,
            grade="NR",
        )
