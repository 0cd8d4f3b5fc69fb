"""Legislation tracker parser.

H2 headings are categories, H3 headings are individual entries. An entry
starts in metadata mode and consumes leading paragraphs that carry
``Status``, ``Date``, ``Sectors``, ``Impact`` or ``Linked entities``
markers. The first paragraph without a marker ends metadata mode for
good; it and everything after it is description, even text that looks
like a marker. List items starting with ``Source:`` are sources.
"""

import re

from markdown_it.tree import SyntaxTreeNode

from ..logging import get_context_logger
from ..models.legislation import CountryLegislation, LegislationEntry, LinkedEntityRef
from .heuristics import (
    extract_meta_value,
    generate_slug,
    infer_impact,
    infer_legislation_status,
    split_list,
    strip_emphasis,
)
from .text import block_text, heading_level, is_list, is_paragraph, list_item_texts, parse_markdown

logger = get_context_logger(__name__, document_type="legislation")

SOURCE_PREFIX = re.compile(r"^source:\s*", re.IGNORECASE)


def parse_sectors(text: str) -> list[str]:
    """Split a ``Sectors`` value on commas and semicolons."""
    return split_list(text)


def parse_linked_entities(text: str) -> list[LinkedEntityRef]:
    """Split a ``Linked entities`` value into unresolved references."""
    return [
        LinkedEntityRef(display_name=name)
        for name in (strip_emphasis(item).strip() for item in split_list(text))
        if name
    ]


def generate_entry_id(country_slug: str, title: str) -> str:
    return f"{country_slug}/{generate_slug(title)}"


def _apply_metadata(entry: LegislationEntry, text: str) -> bool:
    """Apply every metadata marker found in text; False if there were none."""
    found = False

    status = extract_meta_value(text, "Status")
    if status:
        entry.status = infer_legislation_status(status)
        found = True

    date = extract_meta_value(text, "Date")
    if date:
        entry.date = date
        found = True

    sectors = extract_meta_value(text, "Sectors")
    if sectors:
        entry.sectors = parse_sectors(sectors)
        found = True

    impact = extract_meta_value(text, "Impact")
    if impact:
        entry.impact = infer_impact(impact)
        found = True

    linked = extract_meta_value(text, "Linked entities")
    if linked:
        entry.linked_entities = parse_linked_entities(linked)
        found = True

    return found


class LegislationParser:
    """Single-use state machine over one legislative-changes file."""

    def __init__(self, country_slug: str, country_name: str, iso_a2: str):
        self.record = CountryLegislation(
            country_slug=country_slug, country_name=country_name, iso_a2=iso_a2
        )
        self.seen_first_h2 = False
        self.category = ""
        self.current_entry: LegislationEntry | None = None
        self.in_metadata = False

    def parse(self, markdown: str) -> CountryLegislation:
        tree = parse_markdown(markdown)
        for node in tree.children:
            self._visit(node)
        self._flush_entry()
        return self.record

    def _visit(self, node: SyntaxTreeNode) -> None:
        level = heading_level(node)
        if level == 2:
            self._enter_category(block_text(node))
        elif level == 3:
            self._open_entry(block_text(node))
        elif is_paragraph(node):
            text = block_text(node)
            if not text:
                return
            if not self.seen_first_h2:
                self._preamble(text)
            elif self.current_entry is not None:
                self._entry_paragraph(self.current_entry, text)
        elif is_list(node) and self.current_entry is not None:
            for text in list_item_texts(node):
                if text.lower().startswith("source:"):
                    self.current_entry.sources.append(SOURCE_PREFIX.sub("", text).strip())
                else:
                    self.current_entry.description.append(text)

    def _preamble(self, text: str) -> None:
        updated = extract_meta_value(text, "Last updated")
        if updated:
            self.record.last_updated = updated
        filed_by = extract_meta_value(text, "Filed by")
        if filed_by:
            self.record.filed_by = filed_by

    def _enter_category(self, heading: str) -> None:
        self.seen_first_h2 = True
        self._flush_entry()
        self.category = heading
        if heading and heading not in self.record.categories:
            self.record.categories.append(heading)
        self.in_metadata = False

    def _open_entry(self, heading: str) -> None:
        self._flush_entry()
        self.current_entry = LegislationEntry(
            id=generate_entry_id(self.record.country_slug, heading),
            title=heading,
            category=self.category,
        )
        self.in_metadata = True

    def _entry_paragraph(self, entry: LegislationEntry, text: str) -> None:
        if self.in_metadata:
            if _apply_metadata(entry, text):
                return
            self.in_metadata = False
        entry.description.append(text)

    def _flush_entry(self) -> None:
        if self.current_entry is not None:
            self.record.entries.append(self.current_entry)
            self.current_entry = None


def parse_legislation_markdown(
    markdown: str, country_slug: str, country_name: str, iso_a2: str
) -> CountryLegislation:
    """Parse a country's legislative-changes markdown.

    Args:
        markdown: Tracker markdown
        country_slug: Country slug, used as the entry id prefix
        country_name: Display name
        iso_a2: Two-letter country code

    Returns:
        Categories in first-seen order and entries with unresolved
        linked entities
    """
    record = LegislationParser(country_slug, country_name, iso_a2).parse(markdown)
    logger.debug(
        f"Parsed legislation {country_slug}: {len(record.entries)} entries",
        extra={"slug": country_slug, "entries": len(record.entries)},
    )
    return record
