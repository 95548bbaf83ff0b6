#!/usr/bin/env python3
"""
Reputation gate example.

Looks up an agent or team and evaluates a policy against it, the same way
the CI entry point does, then prints the rendered pull-request report.

Run with:
    REPUTATION_GATE_AGENT_ID=agent-123 python examples/gate_check.py
    REPUTATION_GATE_TEAM_ID=team-7 MIN_GRADE=A python examples/gate_check.py
"""

import os
import sys

from reputation_gate import (
    AnnotationReport,
    ConfigurationError,
    NotFoundError,
    Policy,
    ReputationClient,
    TransportError,
    evaluate,
    not_found_verdict,
    render_report,
    resolve_entity,
)


def main() -> None:
    """Run one gate check and print the result."""
    print("=== Reputation Gate Example ===\n")

    # Step 1: Resolve which entity to check
    print("1. Resolving entity...")
    try:
        entity = resolve_entity(
            agent_id=os.environ.get("REPUTATION_GATE_AGENT_ID"),
            team_id=os.environ.get("REPUTATION_GATE_TEAM_ID"),
        )
    except ConfigurationError as e:
        print(f"   {e}")
        sys.exit(2)
    print(f"   {entity.label}")

    policy = Policy(
        min_score=int(os.environ.get("MIN_SCORE", "0")),
        min_grade=os.environ.get("MIN_GRADE", ""),
    )

    # Step 2: Fetch the reputation record
    print("\n2. Fetching reputation...")
    with ReputationClient.from_env() as client:
        try:
            record = client.lookup(entity)
        except NotFoundError:
            verdict = not_found_verdict(entity)
        except TransportError as e:
            print(f"\nError: [{e.code}] {e.message}")
            sys.exit(2)
        else:
            print(f"   Score: {record.score}  Grade: {record.grade}  Tier: {record.tier or '-'}")

            # Step 3: Evaluate the policy
            print("\n3. Evaluating policy...")
            verdict = evaluate(record, policy)

    print(f"   Passed: {verdict.passed}")
    for reason in verdict.reasons:
        print(f"   - {reason}")

    # Step 4: Render the report that would be posted on a pull request
    print("\n4. Pull-request report:\n")
    report = AnnotationReport.from_verdict(entity, verdict, client.base_url)
    print(render_report(report))

    sys.exit(0 if verdict.passed else 1)


if __name__ == "__main__":
    main()
