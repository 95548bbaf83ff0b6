"""
CI entry point.

Runs one gate evaluation end to end: resolve the entity, fetch its
reputation, evaluate the policy, emit outputs, and optionally comment on the
pull request. Exit status is 0 when the gate passes, 1 when it fails
(including entities with no reputation record) and 2 on configuration or
transport errors.
"""

import argparse
import logging
import os
import sys
import uuid
from collections.abc import Mapping
from typing import TextIO

from reputation_gate.annotation import AnnotationReport, PullRequestAnnotator, annotate_best_effort
from reputation_gate.client import ReputationClient
from reputation_gate.config import GateConfig, GitHubContext, get_input
from reputation_gate.exceptions import (
    ConfigurationError,
    NotFoundError,
    ReputationGateError,
    TransportError,
)
from reputation_gate.gate import evaluate, format_number, not_found_verdict, validate_policy
from reputation_gate.logging import configure_logging, get_logger, log_verdict
from reputation_gate.resolver import resolve_entity
from reputation_gate.types.gate import Verdict
from reputation_gate.types.reputation import EntityRef

logger = get_logger("action")

EXIT_PASSED = 0
EXIT_GATE_FAILED = 1
EXIT_ERROR = 2


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionOutput:
    """Writes step outputs and workflow commands for GitHub Actions."""

    def __init__(self, stream: TextIO | None = None, output_path: str | None = None) -> None:
        """
        Args:
            stream: Where log lines and workflow commands go (default: stdout)
            output_path: The ``GITHUB_OUTPUT`` file; when unset outputs are
                written to ``stream`` as ``name=value`` lines
        """
        self.stream = stream if stream is not None else sys.stdout
        self.output_path = output_path
        self.outputs: dict[str, str] = {}
        self.failure: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ActionOutput":
        env = os.environ if environ is None else environ
        return cls(output_path=env.get("GITHUB_OUTPUT") or None)

    def _write(self, line: str) -> None:
        self.stream.write(line + "\n")
        self.stream.flush()

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value
        if not self.output_path:
            self._write(f"{name}={value}")
            return
        with open(self.output_path, "a", encoding="utf-8") as fh:
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                fh.write(f"{name}={value}\n")

    def info(self, message: str) -> None:
        self._write(message)

    def warning(self, message: str) -> None:
        self._write(f"::warning::{escape_data(message)}")

    def set_failed(self, message: str) -> None:
        self.failure = message
        self._write(f"::error::{escape_data(message)}")


def build_outputs(entity: EntityRef, verdict: Verdict) -> dict[str, str]:
    """Step outputs for a verdict. All values are strings."""
    normalized = verdict.normalized
    return {
        "score": format_number(normalized.score),
        "grade": normalized.grade,
        "tier": normalized.tier or "",
        "passed": "true" if verdict.passed else "false",
        "entity-type": entity.kind.value,
    }


def _emit(output: ActionOutput, entity: EntityRef, verdict: Verdict) -> None:
    for name, value in build_outputs(entity, verdict).items():
        output.set_output(name, value)


def _annotate(
    config: GateConfig,
    context: GitHubContext,
    entity: EntityRef,
    verdict: Verdict,
    output: ActionOutput,
    annotator: PullRequestAnnotator | None,
) -> None:
    if context.pull_request_number is None:
        logger.info("Not a pull request event; skipping comment")
        return
    if annotator is None:
        if not context.token or not context.repository:
            logger.info("GITHUB_TOKEN or GITHUB_REPOSITORY not set; skipping comment")
            return
        annotator = PullRequestAnnotator(
            token=context.token,
            repository=context.repository,
            api_url=context.api_url,
        )
    report = AnnotationReport.from_verdict(entity, verdict, config.api_url)
    annotate_best_effort(annotator, context.pull_request_number, report, warn=output.warning)


def run(
    config: GateConfig,
    client: ReputationClient | None = None,
    context: GitHubContext | None = None,
    output: ActionOutput | None = None,
    annotator: PullRequestAnnotator | None = None,
) -> int:
    """
    Run the gate once.

    Args:
        config: Gate inputs
        client: Rating service client (default: one built from ``config``)
        context: Workflow context for annotation (default: from environment)
        output: Output sink (default: from environment)
        annotator: Annotator override (default: built from ``context``)

    Returns:
        EXIT_PASSED, EXIT_GATE_FAILED or EXIT_ERROR
    """
    output = output if output is not None else ActionOutput.from_env()

    try:
        entity = resolve_entity(config.agent_id, config.team_id)
        policy = config.policy
        validate_policy(policy)
    except ConfigurationError as e:
        output.set_failed(e.message)
        return EXIT_ERROR

    output.info(f"Checking reputation for {entity.kind.value}: {entity.entity_id}")

    owns_client = client is None
    if client is None:
        client = ReputationClient(base_url=config.api_url, timeout=config.timeout)
    try:
        record = client.lookup(entity)
    except NotFoundError:
        verdict = not_found_verdict(entity)
        log_verdict(entity, verdict)
        _emit(output, entity, verdict)
        output.set_failed(verdict.reasons[0])
        return EXIT_GATE_FAILED
    except TransportError as e:
        output.set_failed(e.message)
        return EXIT_ERROR
    finally:
        if owns_client:
            client.close()

    verdict = evaluate(record, policy)
    log_verdict(entity, verdict)
    _emit(output, entity, verdict)

    if config.comment:
        if context is None:
            context = GitHubContext.from_env()
        _annotate(config, context, entity, verdict, output, annotator)

    if verdict.passed:
        output.info(
            f"Reputation check passed: score={format_number(record.score)}, "
            f"grade={record.grade}"
        )
        return EXIT_PASSED

    output.set_failed(f"Reputation check failed: {'; '.join(verdict.reasons)}")
    return EXIT_GATE_FAILED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reputation-gate",
        description=(
            "Fail a CI check when an agent's or team's reputation is below "
            "a score or grade floor. Flags default to the matching "
            "INPUT_* environment variables."
        ),
    )
    entity = parser.add_argument_group("entity (exactly one)")
    entity.add_argument("--agent-id", help="agent to check")
    entity.add_argument("--team-id", help="team to check")
    parser.add_argument("--min-score", help="minimum score; 0 disables the check")
    parser.add_argument(
        "--min-grade",
        help="minimum grade (AAA, AA, A, BBB, BB, B, CCC, NR); "
        "an unknown grade disables the check unless --strict-grade",
    )
    parser.add_argument("--api-url", help="rating service base URL")
    parser.add_argument(
        "--comment",
        action="store_const",
        const="true",
        help="post a report comment on the pull request",
    )
    parser.add_argument(
        "--strict-grade",
        action="store_const",
        const="true",
        help="treat an unknown --min-grade as a configuration error",
    )
    parser.add_argument("--timeout", help="rating service timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Console entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    def read(name: str) -> str:
        value = getattr(args, name.replace("-", "_"))
        return value if value is not None else get_input(os.environ, name)

    output = ActionOutput.from_env()
    try:
        config = GateConfig.from_inputs(read)
        return run(config, output=output)
    except ReputationGateError as e:
        output.set_failed(e.message)
        return EXIT_ERROR
    except Exception as e:
        logger.exception("Unexpected error during gate run")
        output.set_failed(str(e) or type(e).__name__)
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
