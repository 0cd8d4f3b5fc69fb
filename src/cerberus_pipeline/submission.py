"""FocusPoint submission template.

Validates a user-submitted lead and renders it as the plan.md document
the FocusPoint parsers read back.
"""

from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import urlparse

from pydantic import BaseModel, Field, ValidationError, field_validator

from .logging import get_context_logger
from .parsing.heuristics import generate_slug

logger = get_context_logger(__name__, document_type="focuspoint")

MAX_LINKS = 20
MAX_ATTACHMENTS = 5

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


class SubmissionError(ValueError):
    """Raised when a lead submission is invalid or cannot be stored."""


class PlanSubmission(BaseModel):
    """A lead as submitted by a user."""

    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=20, max_length=10000)
    links: list[str] = Field(default_factory=list, max_length=MAX_LINKS)
    attachment_filenames: list[str] = Field(default_factory=list, max_length=MAX_ATTACHMENTS)

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("links")
    @classmethod
    def validate_links(cls, v: list[str]) -> list[str]:
        """Require absolute HTTP(S) URLs."""
        links = []
        for link in v:
            link = link.strip()
            parsed = urlparse(link)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError(f"Invalid URL: {link}")
            links.append(link)
        return links

    @field_validator("attachment_filenames")
    @classmethod
    def validate_filenames(cls, v: list[str]) -> list[str]:
        for name in v:
            if not name or len(name) > 255 or "/" in name or "\\" in name:
                raise ValueError(f"Invalid attachment filename: {name!r}")
        return v

    @classmethod
    def create(cls, **values) -> "PlanSubmission":
        """Validate raw submission values.

        Raises:
            SubmissionError: With every validation problem in the message
        """
        try:
            return cls(**values)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            )
            raise SubmissionError(f"Invalid submission: {problems}") from e


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError("value must be non-negative")
    digits = []
    while True:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
        if value == 0:
            break
    return "".join(reversed(digits))


def format_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 timestamp with milliseconds and a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_submission_slug(title: str, now: datetime | None = None) -> str:
    """Slug of a new lead: the title slug plus a base-36 millisecond timestamp."""
    now = now or datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    return f"{generate_slug(title)}-{to_base36(millis)}"


def generate_plan_markdown(
    submission: PlanSubmission, created_at: datetime | None = None
) -> str:
    """Render a submission as plan.md.

    Args:
        submission: Validated submission
        created_at: Creation time (default: now)

    Returns:
        The plan markdown
    """
    created = format_timestamp(created_at or datetime.now(timezone.utc))

    lines = [
        f"# {submission.title}",
        "",
        "**Status:** New",
        f"**Created:** {created}",
        "**Submitted By:** Anonymous",
        "",
        "## Description",
        submission.description,
        "",
    ]

    if submission.links:
        lines.append("## Links & Sources")
        lines.extend(f"- {link}" for link in submission.links)
        lines.append("")

    if submission.attachment_filenames:
        lines.append("## Attachments")
        lines.extend(f"- {filename}" for filename in submission.attachment_filenames)
        lines.append("")

    lines.append("## Search Directives")
    lines.append(f"- Investigate: {submission.title}")
    if submission.links:
        lines.append(f"- Monitor sources: {', '.join(submission.links)}")
    lines.append("")

    return "\n".join(lines)


def write_submission(
    root: Path | str, submission: PlanSubmission, now: datetime | None = None
) -> Path:
    """Store a submission as focuspoints/<slug>/plan.md under a content root.

    Args:
        root: Content root directory
        submission: Validated submission
        now: Submission time, used for the slug and the Created line

    Returns:
        Path of the written plan.md

    Raises:
        SubmissionError: If a lead with the same slug already exists
    """
    now = now or datetime.now(timezone.utc)
    slug = generate_submission_slug(submission.title, now)
    lead_dir = Path(root) / "focuspoints" / slug

    try:
        lead_dir.mkdir(parents=True, exist_ok=False)
    except FileExistsError as e:
        raise SubmissionError(f"FocusPoint already exists: {slug}") from e

    plan_path = lead_dir / "plan.md"
    plan_path.write_text(generate_plan_markdown(submission, now), encoding="utf-8")

    logger.info(
        f"Created focuspoint {slug}",
        extra={"slug": slug, "links": len(submission.links)},
    )
    return plan_path
