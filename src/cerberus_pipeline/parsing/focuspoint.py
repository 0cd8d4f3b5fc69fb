"""FocusPoint (lead) parsers.

A lead directory holds a mandatory ``plan.md`` written by the submission
endpoint and up to four optional documents produced by the research bot:

- ``findings.md``: H2/H3 per finding, paragraphs as summary, lists as sources
- ``timeline.md``: ``YYYY-MM-DD: event (source)`` list items
- ``entities.md``: ``**Name** — role`` list items
- ``sources.md``: one source per list item

assemble_focuspoint() combines them into a single FocusPointRecord.
"""

import re
from collections.abc import Iterable
from enum import Enum

from ..logging import get_context_logger
from ..models.base import FocusPointStatus
from ..models.focuspoints import (
    Attachment,
    EntityRef,
    Finding,
    FocusPointRecord,
    TimelineEntry,
)
from .entity import BOLD_NAME_PATTERN
from .heuristics import extract_meta_value, infer_focuspoint_status, strip_emphasis
from .text import block_text, heading_level, is_list, is_paragraph, list_item_texts, parse_markdown

logger = get_context_logger(__name__, document_type="focuspoint")

DEFAULT_SUBMITTER = "Anonymous"

FINDING_DATE_PATTERN = re.compile(r"\s*\((\d{4}-\d{2}-\d{2})\)\s*$")
TIMELINE_ITEM_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2}):\s*(.+)$", re.DOTALL)
TRAILING_SOURCE_PATTERN = re.compile(r"^(.+?)\s*\(([^)]+)\)\s*$", re.DOTALL)


class PlanSection(str, Enum):
    """Sections of a plan document."""

    PREAMBLE = "preamble"
    DESCRIPTION = "description"
    LINKS = "links"
    ATTACHMENTS = "attachments"
    SEARCH_DIRECTIVES = "search_directives"
    OTHER = "other"


def classify_plan_section(heading: str) -> PlanSection:
    """Classify an H2 heading of a plan document."""
    lower = heading.strip().lower()
    if "links" in lower or "sources" in lower:
        return PlanSection.LINKS
    if "attachments" in lower:
        return PlanSection.ATTACHMENTS
    if "search directives" in lower:
        return PlanSection.SEARCH_DIRECTIVES
    if "description" in lower:
        return PlanSection.DESCRIPTION
    return PlanSection.OTHER


def _list_texts(markdown: str, keep_strong: bool = False) -> list[str]:
    """Text of every item of every top-level list."""
    texts: list[str] = []
    for node in parse_markdown(markdown).children:
        if is_list(node):
            texts.extend(list_item_texts(node, keep_strong=keep_strong))
    return texts


def parse_plan_markdown(markdown: str, slug: str) -> FocusPointRecord:
    """Parse a plan.md into a FocusPointRecord without bot data.

    Args:
        markdown: Plan markdown, usually produced by generate_plan_markdown()
        slug: Lead slug (directory name)

    Returns:
        The record with title, metadata, description, links, attachment
        names and search directives filled in
    """
    record = FocusPointRecord(slug=slug)
    section = PlanSection.PREAMBLE
    collected: dict[PlanSection, list[str]] = {
        PlanSection.DESCRIPTION: [],
        PlanSection.LINKS: [],
        PlanSection.ATTACHMENTS: [],
        PlanSection.SEARCH_DIRECTIVES: [],
    }

    for node in parse_markdown(markdown).children:
        level = heading_level(node)
        if level == 1:
            record.title = block_text(node)
        elif level == 2:
            section = classify_plan_section(block_text(node))
        elif is_paragraph(node):
            text = block_text(node)
            if not text:
                continue
            if section == PlanSection.PREAMBLE:
                status = extract_meta_value(text, "Status")
                if status:
                    record.status = infer_focuspoint_status(status)
                created = extract_meta_value(text, "Created")
                if created:
                    record.created_at = created
                submitted_by = extract_meta_value(text, "Submitted By")
                if submitted_by:
                    record.submitted_by = submitted_by
            elif section == PlanSection.DESCRIPTION:
                collected[PlanSection.DESCRIPTION].append(text)
        elif is_list(node) and section in collected:
            collected[section].extend(list_item_texts(node))

    record.description = collected[PlanSection.DESCRIPTION]
    record.links = collected[PlanSection.LINKS]
    record.attachments = [
        Attachment(filename=name) for name in collected[PlanSection.ATTACHMENTS]
    ]
    record.search_directives = collected[PlanSection.SEARCH_DIRECTIVES]
    return record


def parse_findings_markdown(markdown: str) -> list[Finding]:
    """Parse findings.md; every H2 or H3 heading starts a finding.

    A trailing ``(YYYY-MM-DD)`` in the heading becomes the finding date.
    Content before the first heading is ignored.
    """
    findings: list[Finding] = []
    current: Finding | None = None

    for node in parse_markdown(markdown).children:
        if heading_level(node) in (2, 3):
            heading = block_text(node)
            date_match = FINDING_DATE_PATTERN.search(heading)
            current = Finding(
                title=FINDING_DATE_PATTERN.sub("", heading).strip() if date_match else heading,
                date=date_match.group(1) if date_match else None,
            )
            findings.append(current)
            continue

        if current is None:
            continue

        if is_paragraph(node):
            text = block_text(node)
            if not text:
                continue
            relevance = extract_meta_value(text, "Relevance")
            if relevance:
                current.relevance = relevance
            else:
                current.summary.append(text)
        elif is_list(node):
            current.sources.extend(list_item_texts(node))

    return findings


def parse_timeline_markdown(markdown: str) -> list[TimelineEntry]:
    """Parse timeline.md list items of the form ``YYYY-MM-DD: event (source)``.

    Items without a leading date are dropped.
    """
    entries: list[TimelineEntry] = []
    for text in _list_texts(markdown):
        match = TIMELINE_ITEM_PATTERN.match(text)
        if not match:
            logger.debug(f"Dropped timeline line: {text!r}")
            continue
        event = match.group(2)
        source_match = TRAILING_SOURCE_PATTERN.match(event)
        entries.append(
            TimelineEntry(
                date=match.group(1),
                event=source_match.group(1).strip() if source_match else event.strip(),
                source=source_match.group(2).strip() if source_match else None,
            )
        )
    return entries


def parse_entities_markdown(markdown: str) -> list[EntityRef]:
    """Parse entities.md items as ``**Name** — role`` or a bare name."""
    refs: list[EntityRef] = []
    for text in _list_texts(markdown, keep_strong=True):
        match = BOLD_NAME_PATTERN.match(text)
        if match:
            refs.append(
                EntityRef(
                    display_name=match.group(1).strip(),
                    role=strip_emphasis(match.group(2)).strip(),
                )
            )
            continue
        name = strip_emphasis(text).strip()
        if name:
            refs.append(EntityRef(display_name=name))
    return refs


def parse_sources_markdown(markdown: str) -> list[str]:
    """Parse sources.md; each list item is one source."""
    return _list_texts(markdown)


def _present(document: str | None) -> bool:
    return document is not None and bool(document.strip())


def assemble_focuspoint(
    slug: str,
    plan: str | None,
    findings: str | None = None,
    timeline: str | None = None,
    entities: str | None = None,
    sources: str | None = None,
    attachments: Iterable[Attachment] | None = None,
) -> FocusPointRecord | None:
    """Build a lead record from its plan and optional bot documents.

    Any follow-up document that is present sets ``has_bot_data``; a lead
    still marked new is then upgraded to findings-available when it has
    at least one finding, otherwise to investigating.

    Args:
        slug: Lead slug
        plan: plan.md content; the lead is skipped without it
        findings: findings.md content, if present
        timeline: timeline.md content, if present
        entities: entities.md content, if present
        sources: sources.md content, if present
        attachments: Files found in the lead's attachments directory;
            replaces the names listed in the plan when given

    Returns:
        The assembled record, or None when there is no plan
    """
    if not _present(plan):
        return None

    record = parse_plan_markdown(plan, slug)

    if _present(findings):
        record.findings = parse_findings_markdown(findings)
        record.has_bot_data = True
    if _present(timeline):
        record.timeline = parse_timeline_markdown(timeline)
        record.has_bot_data = True
    if _present(entities):
        record.linked_entities = parse_entities_markdown(entities)
        record.has_bot_data = True
    if _present(sources):
        record.sources = parse_sources_markdown(sources)
        record.has_bot_data = True

    if attachments is not None:
        record.attachments = list(attachments)

    if record.has_bot_data and record.status == FocusPointStatus.NEW:
        record.status = (
            FocusPointStatus.FINDINGS_AVAILABLE
            if record.findings
            else FocusPointStatus.INVESTIGATING
        )

    return record
