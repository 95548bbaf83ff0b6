"""
Gate evaluation.

Compares a normalized reputation record against a two-dimensional policy
(score floor, grade floor) and produces a verdict with one reason per failed
dimension. Both checks always run, score first.
"""

from reputation_gate.exceptions import ConfigurationError
from reputation_gate.types.gate import GRADE_ORDINALS, NormalizedResult, Policy, Verdict
from reputation_gate.types.reputation import EntityRef, ReputationRecord


def format_number(value: int | float) -> str:
    """Render a score the way the rating service's JSON spells it (72.0 -> "72")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_known_grade(grade: str | None) -> bool:
    return bool(grade) and grade in GRADE_ORDINALS


def grade_ordinal(grade: str | None) -> int:
    """Rank of a grade; unknown or missing grades rank as NR (0)."""
    if not grade:
        return 0
    return GRADE_ORDINALS.get(grade, 0)


def _normalize(record: ReputationRecord) -> NormalizedResult:
    return NormalizedResult(score=record.score, grade=record.grade, tier=record.tier)


def evaluate(record: ReputationRecord, policy: Policy) -> Verdict:
    """
    Evaluate a record against a policy.

    Args:
        record: Normalized reputation record
        policy: Score and grade thresholds

    Returns:
        Verdict with pass/fail, ordered reasons and normalized fields

    Raises:
        ConfigurationError: If ``policy.strict_grade`` is set and
            ``policy.min_grade`` is not a known grade
    """
    passed = True
    reasons: list[str] = []

    if policy.min_score > 0 and record.score < policy.min_score:
        passed = False
        reasons.append(
            f"Score {format_number(record.score)} is below minimum "
            f"{format_number(policy.min_score)}"
        )

    if policy.min_grade:
        if is_known_grade(policy.min_grade):
            required = grade_ordinal(policy.min_grade)
            actual = grade_ordinal(record.grade)
            if actual < required:
                passed = False
                reasons.append(
                    f"Grade {record.grade} is below minimum {policy.min_grade}"
                )
        elif policy.strict_grade:
            raise ConfigurationError(
                f"Unknown min-grade {policy.min_grade!r}; expected one of "
                f"{', '.join(GRADE_ORDINALS)}"
            )
        # An unrecognized min-grade disables the grade check.

    return Verdict(passed=passed, normalized=_normalize(record), reasons=tuple(reasons))


def not_found_verdict(entity: EntityRef) -> Verdict:
    """Failing verdict for an entity the rating service has no record for."""
    record = ReputationRecord.not_rated(entity)
    return Verdict(
        passed=False,
        normalized=_normalize(record),
        reasons=(f"{entity.label} has no reputation score",),
    )


def validate_policy(policy: Policy) -> None:
    """
    Check a policy before any lookup is made.

    Raises:
        ConfigurationError: On a negative ``min_score``, or an unknown
            ``min_grade`` under ``strict_grade``
    """
    if policy.min_score < 0:
        raise ConfigurationError(
            f"min-score must be a non-negative integer, got {policy.min_score}"
        )
    if policy.strict_grade and policy.min_grade and not is_known_grade(policy.min_grade):
        raise ConfigurationError(
            f"Unknown min-grade {policy.min_grade!r}; expected one of "
            f"{', '.join(GRADE_ORDINALS)}"
        )
