"""Gate policy and verdict models."""

from dataclasses import dataclass, field
from types import MappingProxyType

# Higher is more trusted. Grades missing from the table rank as NR.
GRADE_ORDINALS = MappingProxyType({
    "AAA": 7,
    "AA": 6,
    "A": 5,
    "BBB": 4,
    "BB": 3,
    "B": 2,
    "CCC": 1,
    "NR": 0,
})


@dataclass(frozen=True)
class Policy:
    """Thresholds a record must meet.

    ``min_score`` of 0 disables the score check and an empty ``min_grade``
    disables the grade check. A ``min_grade`` that is not a known grade also
    disables the grade check, unless ``strict_grade`` is set.
    """

    min_score: int = 0
    min_grade: str = ""
    strict_grade: bool = False


@dataclass(frozen=True)
class NormalizedResult:
    """Record fields carried on the verdict for reporting."""

    score: int | float
    grade: str
    tier: str | None = None


@dataclass(frozen=True)
class Verdict:
    """Outcome of one gate evaluation."""

    passed: bool
    normalized: NormalizedResult
    reasons: tuple[str, ...] = field(default_factory=tuple)
