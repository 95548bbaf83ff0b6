"""
Pull-request annotation.

Renders a verdict as a Markdown report and posts it as a pull-request
comment. Posting is best-effort: a failure here is logged and never changes
the verdict.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from reputation_gate.exceptions import AnnotationError, ReputationGateError
from reputation_gate.gate import format_number
from reputation_gate.logging import get_logger, log_http_request, log_http_response
from reputation_gate.types.gate import Verdict
from reputation_gate.types.reputation import EntityKind, EntityRef

logger = get_logger("annotation")

REPORT_BASE_URL = "https://www.mnemom.ai/reputation"


@dataclass
class AnnotationReport:
    """Everything needed to render the pull-request summary."""

    entity_label: str
    score: int | float
    grade: str
    tier: str | None
    passed: bool
    reasons: list[str] = field(default_factory=list)
    badge_url: str | None = None
    report_url: str | None = None

    @classmethod
    def from_verdict(
        cls, entity: EntityRef, verdict: Verdict, api_url: str
    ) -> "AnnotationReport":
        badge_url = None
        report_url = None
        # Badges and public reports exist for agents only.
        if entity.kind is EntityKind.AGENT:
            badge_url = (
                f"{api_url.rstrip('/')}/v1/reputation/{entity.quoted_id}"
                "/badge.svg?variant=score_grade"
            )
            report_url = f"{REPORT_BASE_URL}/{entity.quoted_id}"

        normalized = verdict.normalized
        return cls(
            entity_label=entity.label,
            score=normalized.score,
            grade=normalized.grade,
            tier=normalized.tier,
            passed=verdict.passed,
            reasons=list(verdict.reasons),
            badge_url=badge_url,
            report_url=report_url,
        )


def render_report(report: AnnotationReport) -> str:
    """Render a report as the Markdown body of a pull-request comment."""
    lines = ["## Mnemom Trust Score", "", f"**{report.entity_label}**", ""]

    if report.badge_url:
        lines += [f"![Trust Score]({report.badge_url})", ""]

    lines += [
        "| Metric | Value |",
        "|--------|-------|",
        f"| Score | {format_number(report.score)} |",
        f"| Grade | {report.grade} |",
    ]
    if report.tier:
        lines.append(f"| Tier | {report.tier} |")
    lines.append(f"| Status | {'✅ Passed' if report.passed else '❌ Failed'} |")
    if report.reasons:
        lines.append(f"| Reason | {', '.join(report.reasons)} |")

    if report.report_url:
        lines += ["", f"[View Full Report]({report.report_url})"]

    return "\n".join(lines)


class PullRequestAnnotator:
    """Posts reports as comments through the GitHub REST API."""

    DEFAULT_API_URL = "https://api.github.com"

    def __init__(
        self,
        token: str,
        repository: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 10.0,
    ) -> None:
        """
        Args:
            token: GitHub token with permission to comment on issues
            repository: ``owner/repo``
            api_url: GitHub API base URL (GHES installs differ)
            timeout: Request timeout in seconds
        """
        self.token = token
        self.repository = repository
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def post(self, pr_number: int, report: AnnotationReport) -> dict[str, Any]:
        """
        Post ``report`` as a comment on pull request ``pr_number``.

        Returns:
            The created comment as returned by GitHub

        Raises:
            AnnotationError: On any HTTP or network failure
        """
        owner, _, repo = self.repository.partition("/")
        if not owner or not repo:
            raise AnnotationError(f"Invalid repository {self.repository!r}; expected owner/repo")

        path = f"/repos/{quote(owner)}/{quote(repo)}/issues/{pr_number}/comments"
        body = {"body": render_report(report)}
        headers = self._headers()

        log_http_request("POST", f"{self.api_url}{path}", headers=headers)
        try:
            with httpx.Client(base_url=self.api_url, timeout=self.timeout) as client:
                response = client.post(path, json=body, headers=headers)
        except httpx.HTTPError as e:
            raise AnnotationError(f"Failed to reach {self.api_url}: {e}") from e
        log_http_response(response.status_code, f"{self.api_url}{path}")

        if response.status_code >= 400:
            raise AnnotationError(
                f"GitHub API returned {response.status_code} for pull request #{pr_number}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError:
            return {}


def annotate_best_effort(
    annotator: PullRequestAnnotator,
    pr_number: int,
    report: AnnotationReport,
    warn: Callable[[str], None] | None = None,
) -> bool:
    """
    Post a report, downgrading any failure to a warning.

    Args:
        annotator: Annotator to post with
        pr_number: Pull request number
        report: Report to post
        warn: Optional extra sink for the warning message (e.g. the CI log)

    Returns:
        True if the comment was posted
    """
    try:
        annotator.post(pr_number, report)
    except Exception as e:
        detail = e.message if isinstance(e, ReputationGateError) else str(e)
        message = f"Failed to post PR comment: {detail}"
        logger.warning(message)
        if warn is not None:
            warn(message)
        return False
    logger.info("Posted reputation report to pull request #%s", pr_number)
    return True
