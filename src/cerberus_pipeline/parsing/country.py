"""Country dossier parser.

Walks the top-level blocks of a country's corruption dossier:

    # Country
    **Last updated:** 2024-05-01        <- preamble metadata / context
    ## Major Scandals                   <- case-bearing section
    ### Bribery Affair (2020-2023)      <- one Case
    **Status:** Convicted. ...
    ## Sources                          <- flat source list

H2 headings switch the section kind; H3 headings inside case-bearing
sections open a new case that collects the following paragraphs and
list items until the next H2 or H3.
"""

import re
from enum import Enum

from markdown_it.tree import SyntaxTreeNode

from ..logging import get_context_logger
from ..models.base import CaseStatus
from ..models.cases import Case, CountryRecord
from .heuristics import (
    extract_date_range,
    extract_meta_value,
    generate_slug,
    infer_case_status,
    strip_emphasis,
)
from .text import block_text, heading_level, is_list, is_paragraph, list_item_texts, parse_markdown

logger = get_context_logger(__name__, document_type="country")


class CountrySection(str, Enum):
    """Kinds of H2 sections in a dossier."""

    PREAMBLE = "preamble"
    CASES = "cases"
    SOURCES = "sources"
    KEY_ENTITIES = "key_entities"
    CONTEXT = "context"
    EXCLUDED = "excluded"


# H2 headings (lowercased) that never hold cases
EXCLUDED_SECTIONS = frozenset(
    {
        "sources",
        "key entities",
        "key statistics",
        "context",
        "structural concerns",
        "monitoring notes",
        "general status",
        "current status",
        "transparency international ranking",
        "ti ranking",
        "known concerns",
        "key strengths",
        "historical context",
        "documentation sources",
        "key figures",
        "key institutions",
        "political landscape",
        "positive developments",
        "media landscape",
        "monitoring priority",
        "risk areas",
        "structural risk factors",
    }
)

SOURCES_KEYWORDS = ("source",)
KEY_ENTITIES_KEYWORDS = ("key entit", "key figure")
CONTEXT_KEYWORDS = ("context", "structural")

TI_RANKING_PATTERN = re.compile(r"Transparency International.*?rank.*?(\d+)", re.IGNORECASE)


def classify_country_section(heading: str) -> CountrySection:
    """Classify an H2 heading of a dossier.

    Args:
        heading: Heading text (any case)

    Returns:
        The section kind; headings matching nothing are case-bearing
    """
    lower = heading.strip().lower()
    if any(keyword in lower for keyword in SOURCES_KEYWORDS):
        return CountrySection.SOURCES
    if any(keyword in lower for keyword in KEY_ENTITIES_KEYWORDS):
        return CountrySection.KEY_ENTITIES
    if any(keyword in lower for keyword in CONTEXT_KEYWORDS):
        return CountrySection.CONTEXT
    if lower in EXCLUDED_SECTIONS:
        return CountrySection.EXCLUDED
    return CountrySection.CASES


class CountryCaseParser:
    """Single-use state machine over one dossier's syntax tree."""

    def __init__(self, slug: str, name: str, iso_a2: str):
        self.record = CountryRecord(slug=slug, name=name, iso_a2=iso_a2)
        self.section = CountrySection.PREAMBLE
        self.section_heading = ""
        self.current_case: Case | None = None
        self.context_parts: list[str] = []

    def parse(self, markdown: str) -> CountryRecord:
        tree = parse_markdown(markdown)
        for node in tree.children:
            self._visit(node)
        self._flush_case()

        record = self.record
        record.context = " ".join(self.context_parts) if self.context_parts else None
        if record.ti_ranking is None:
            match = TI_RANKING_PATTERN.search(markdown or "")
            if match:
                record.ti_ranking = match.group(0)
        return record

    def _visit(self, node: SyntaxTreeNode) -> None:
        level = heading_level(node)
        if level == 2:
            self._enter_section(block_text(node))
        elif level == 3:
            self._open_case(block_text(node))
        elif is_paragraph(node):
            self._paragraph(block_text(node))
        elif is_list(node):
            self._list(list_item_texts(node))

    def _enter_section(self, heading: str) -> None:
        self._flush_case()
        self.section_heading = heading
        self.section = classify_country_section(heading)
        if self.section == CountrySection.CASES and heading not in self.record.sections:
            self.record.sections.append(heading)

    def _open_case(self, heading: str) -> None:
        self._flush_case()
        if self.section != CountrySection.CASES:
            return
        self.current_case = Case(
            id=generate_slug(heading),
            title=strip_emphasis(heading).strip(),
            date_range=extract_date_range(heading),
            section=self.section_heading,
        )

    def _flush_case(self) -> None:
        if self.current_case is not None:
            self.record.cases.append(self.current_case)
            self.current_case = None

    def _paragraph(self, text: str) -> None:
        if not text:
            return

        if self.section == CountrySection.PREAMBLE:
            self._preamble(text)
        elif self.current_case is not None:
            self._case_paragraph(self.current_case, text)
        elif self.section == CountrySection.CONTEXT:
            self.context_parts.append(text)

    def _preamble(self, text: str) -> None:
        record = self.record
        updated = extract_meta_value(text, "Last updated")
        if updated:
            record.last_updated = updated
        filed_by = extract_meta_value(text, "Filed by")
        if filed_by:
            record.filed_by = filed_by

        ranking = TI_RANKING_PATTERN.search(text)
        if ranking:
            record.ti_ranking = ranking.group(0)

        if not updated and not filed_by:
            self.context_parts.append(text)

    def _case_paragraph(self, case: Case, text: str) -> None:
        status_value = extract_meta_value(text, "Status")
        if status_value:
            case.status = infer_case_status(status_value)
            if case.status == CaseStatus.UNKNOWN:
                case.description.append(text)

        date_value = extract_meta_value(text, "Date")
        if date_value and not case.date_range:
            case.date_range = date_value

        if not status_value and not date_value:
            case.description.append(text)

        if case.status == CaseStatus.UNKNOWN:
            case.status = infer_case_status(text)

    def _list(self, items: list[str]) -> None:
        if self.current_case is not None:
            for text in items:
                self.current_case.description.append(text)
                if self.current_case.status == CaseStatus.UNKNOWN:
                    self.current_case.status = infer_case_status(text)
        elif self.section == CountrySection.SOURCES:
            self.record.sources.extend(items)
        elif self.section == CountrySection.KEY_ENTITIES:
            self.record.key_entities.extend(items)


def parse_country_markdown(
    markdown: str, slug: str, name: str, iso_a2: str
) -> CountryRecord:
    """Parse a country dossier into a CountryRecord.

    Args:
        markdown: Dossier markdown
        slug: Country slug, e.g. "austria"
        name: Display name
        iso_a2: Two-letter country code

    Returns:
        The parsed record; malformed structure degrades to empty fields
    """
    record = CountryCaseParser(slug, name, iso_a2).parse(markdown)
    logger.debug(
        f"Parsed dossier {slug}: {len(record.cases)} cases",
        extra={"slug": slug, "cases": len(record.cases)},
    )
    return record
