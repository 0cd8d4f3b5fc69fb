"""Entity profile parser.

Converts a person, company, foreign-state or organization markdown file
into an EntityProfile. The H1 is the entity name, preamble lines carry
``Status``/``Role``/``Party``/``Born`` metadata, and every H2 heading is
classified into a SectionKind that decides what its paragraphs, lists
and tables contribute.

Connection list items are parsed by an ordered pipeline of grammars:

    **Name** — relationship       bold name, any dash
    Name – relationship           em or en dash
    Name - relationship           spaced hyphen
    See: country/entities/individuals/doe-jane.md   cross-reference

Items matching none of them are dropped.
"""

import re
from collections.abc import Callable
from enum import Enum

from markdown_it.tree import SyntaxTreeNode

from ..logging import get_context_logger
from ..models.base import EntityType
from ..models.entities import CaseReference, Connection, EntityProfile
from .heuristics import derive_initials, extract_meta_value, infer_entity_status, strip_emphasis
from .text import (
    block_text,
    get_text_content,
    heading_level,
    is_list,
    is_paragraph,
    is_table,
    list_item_texts,
    parse_markdown,
    table_rows,
)

logger = get_context_logger(__name__, document_type="entity")


# =============================================================================
# Section classification
# =============================================================================


class SectionKind(str, Enum):
    """Behavioral category of an H2 section in an entity profile."""

    PREAMBLE = "preamble"
    PROFILE_SUMMARY = "profile_summary"
    BASIC_INFO = "basic_info"
    CONNECTIONS = "connections"
    SOURCES = "sources"
    CASES = "cases"
    BIOGRAPHY = "biography"
    UNCLASSIFIED = "unclassified"


PROFILE_SUMMARY_KEYWORDS = ("cerberus summary",)
BASIC_INFO_HEADING = "basic info"

CONNECTION_KEYWORDS = (
    "key associates",
    "connection",
    "key actors",
    "key entities",
    "business connections",
    "cross-references",
    "family & network",
    "international connections",
)

SOURCES_KEYWORDS = ("sources", "key documents")

CASE_KEYWORDS = (
    "cases",
    "criminal",
    "scandal",
    "allegations",
    "controversies",
    "corruption",
    "charges",
    "convictions",
    "downfall",
    "money laundering",
)

BIOGRAPHY_KEYWORDS = (
    "biography",
    "early life",
    "political career",
    "post-politics",
    "family",
)
BIOGRAPHY_HEADINGS = frozenset({"profile", "overview"})

# A label is bold (**Title:** or **Title**:) or starts a line
PROFILE_SUMMARY_LABELS = re.compile(
    r"\*\*(Title|Description|Why tracked)\s*(?::\*\*|\*\*\s*:)"
    r"|^[ \t]*(Title|Description|Why tracked)\s*:",
    re.IGNORECASE | re.MULTILINE,
)
PROFILE_SUMMARY_FIELDS = {
    "title": "profile_title",
    "description": "profile_summary",
    "why tracked": "why_tracked",
}


def classify_entity_section(heading: str) -> SectionKind:
    """Classify an H2 heading of an entity profile.

    When a heading matches several kinds, the earlier kind in this order
    wins: profile summary, basic info, connections, sources, cases,
    biography.

    Args:
        heading: Heading text (any case)

    Returns:
        The section kind
    """
    lower = heading.strip().lower()
    if any(keyword in lower for keyword in PROFILE_SUMMARY_KEYWORDS):
        return SectionKind.PROFILE_SUMMARY
    if lower == BASIC_INFO_HEADING:
        return SectionKind.BASIC_INFO
    if any(keyword in lower for keyword in CONNECTION_KEYWORDS):
        return SectionKind.CONNECTIONS
    if any(keyword in lower for keyword in SOURCES_KEYWORDS):
        return SectionKind.SOURCES
    if any(keyword in lower for keyword in CASE_KEYWORDS):
        return SectionKind.CASES
    if lower in BIOGRAPHY_HEADINGS or any(keyword in lower for keyword in BIOGRAPHY_KEYWORDS):
        return SectionKind.BIOGRAPHY
    return SectionKind.UNCLASSIFIED


# =============================================================================
# Connection grammars
# =============================================================================

BOLD_NAME_PATTERN = re.compile(r"^\*{2}(.+?)\*{2}\s*[—–\-]\s*(.+)$", re.DOTALL)
DASH_PATTERN = re.compile(r"^(.+?)\s*[—–]\s*(.+)$", re.DOTALL)
SPACED_HYPHEN_PATTERN = re.compile(r"^(.+?)\s+-\s+(.+)$", re.DOTALL)

SEE_ALSO_PATTERN = re.compile(r"See:\s*`?([^`]+)`?", re.IGNORECASE)
CROSS_REFERENCE_PATH = re.compile(r"entities/(\w[\w-]*)/(\w[\w-]*)\.md")

# Directory under entities/ -> entity type
ENTITY_DIR_TYPES: dict[str, EntityType] = {
    "individuals": EntityType.INDIVIDUAL,
    "companies": EntityType.COMPANY,
    "foreign-states": EntityType.FOREIGN_STATE,
    "organizations": EntityType.ORGANIZATION,
}

CROSS_REFERENCE_RELATIONSHIP = "cross-referenced"


def _connection(name: str, relationship: str) -> Connection | None:
    name = strip_emphasis(name).strip()
    relationship = strip_emphasis(relationship).strip()
    if not name or not relationship:
        return None
    return Connection(target_name=name, relationship=relationship)


def match_bold_name(text: str) -> Connection | None:
    """``**Name** — relationship`` with an em dash, en dash or hyphen."""
    match = BOLD_NAME_PATTERN.match(text)
    if not match:
        return None
    return _connection(match.group(1), match.group(2))


def match_dash(text: str) -> Connection | None:
    """``Name — relationship`` with an em or en dash."""
    match = DASH_PATTERN.match(text)
    if not match:
        return None
    return _connection(match.group(1), match.group(2))


def match_spaced_hyphen(text: str) -> Connection | None:
    """``Name - relationship``; the spaces keep hyphenated names intact."""
    match = SPACED_HYPHEN_PATTERN.match(text)
    if not match:
        return None
    return _connection(match.group(1), match.group(2))


ConnectionMatcher = Callable[[str], Connection | None]

CONNECTION_MATCHERS: tuple[ConnectionMatcher, ...] = (
    match_bold_name,
    match_dash,
    match_spaced_hyphen,
)


def parse_connection_item(text: str) -> Connection | None:
    """Parse a connection list item with the first grammar that matches.

    Args:
        text: List item text, optionally with ``**`` around a bold name

    Returns:
        An unresolved Connection, or None if no grammar matches
    """
    text = text.strip()
    for matcher in CONNECTION_MATCHERS:
        connection = matcher(text)
        if connection is not None:
            return connection
    return None


def parse_cross_reference(text: str) -> Connection | None:
    """Parse a ``See: <country>/entities/<dir>/<file>.md`` reference.

    The slug is known from the path, so the connection is returned
    already resolved. The display name is rebuilt from the file name:
    "schmid-thomas" becomes "Schmid Thomas".
    """
    see = SEE_ALSO_PATTERN.search(text)
    if not see:
        return None
    match = CROSS_REFERENCE_PATH.search(see.group(1).strip())
    if not match:
        return None

    entity_type = ENTITY_DIR_TYPES.get(match.group(1))
    if entity_type is None:
        return None

    file_stem = match.group(2)
    display_name = " ".join(word[:1].upper() + word[1:] for word in file_stem.split("-"))
    return Connection(
        target_name=display_name,
        target_slug=f"{entity_type.value}/{file_stem}",
        relationship=CROSS_REFERENCE_RELATIONSHIP,
        resolved=True,
    )


# =============================================================================
# Parser
# =============================================================================


class EntityProfileParser:
    """Single-use state machine over one entity profile."""

    def __init__(
        self,
        entity_type: EntityType,
        slug: str,
        country_slug: str,
        country_name: str | None = None,
    ):
        self.profile = EntityProfile(
            slug=slug,
            type=entity_type,
            name="",
            country_slug=country_slug,
            country_name=country_name,
        )
        self.section = SectionKind.PREAMBLE
        self.current_case: CaseReference | None = None

    def parse(self, markdown: str) -> EntityProfile:
        tree = parse_markdown(markdown)
        for node in tree.children:
            self._visit(node)
        self._flush_case()

        self.profile.initials = derive_initials(self.profile.name)
        return self.profile

    def _visit(self, node: SyntaxTreeNode) -> None:
        level = heading_level(node)
        if level == 1:
            self.profile.name = block_text(node)
        elif level == 2:
            self._flush_case()
            self.section = classify_entity_section(block_text(node))
        elif level == 3:
            self._subheading(block_text(node))
        elif is_paragraph(node) and self.section == SectionKind.PROFILE_SUMMARY:
            # Bold labels must stay visible to tell them from prose
            self._read_profile_summary(get_text_content(node, keep_strong=True).strip())
        elif is_paragraph(node):
            text = block_text(node)
            if text:
                self._paragraph(text)
        elif is_list(node):
            self._list(node)
        elif is_table(node) and self.section == SectionKind.CASES:
            self._case_table(node)

    def _flush_case(self) -> None:
        if self.current_case is not None:
            self.profile.cases.append(self.current_case)
            self.current_case = None

    def _subheading(self, text: str) -> None:
        if self.section == SectionKind.CASES:
            self._flush_case()
            self.current_case = CaseReference(title=text)
        elif self.section == SectionKind.BIOGRAPHY:
            self.profile.biography.append(text)

    def _paragraph(self, text: str) -> None:
        section = self.section
        if section in (SectionKind.PREAMBLE, SectionKind.BASIC_INFO):
            self._read_metadata(text)
        elif section == SectionKind.BIOGRAPHY:
            self.profile.biography.append(text)
        elif section == SectionKind.CASES and self.current_case is not None:
            self._append_case_description(text)

    def _list(self, node: SyntaxTreeNode) -> None:
        section = self.section
        if section == SectionKind.CONNECTIONS:
            for text in list_item_texts(node, keep_strong=True):
                self._connection_item(text)
        elif section == SectionKind.BASIC_INFO:
            for text in list_item_texts(node):
                self._read_metadata(text)
        elif section == SectionKind.SOURCES:
            self.profile.sources.extend(list_item_texts(node))
        elif section == SectionKind.CASES and self.current_case is not None:
            for text in list_item_texts(node):
                self._append_case_description(text)
        elif section == SectionKind.BIOGRAPHY:
            self.profile.biography.extend(list_item_texts(node))

    def _read_metadata(self, text: str) -> None:
        profile = self.profile
        status = extract_meta_value(text, "Status")
        if status:
            profile.status = infer_entity_status(status)
        role = extract_meta_value(text, "Role")
        if role:
            profile.role = role
        party = extract_meta_value(text, "Party")
        if party:
            profile.party = party
        born = extract_meta_value(text, "Born")
        if born:
            profile.birth_date = born

    def _read_profile_summary(self, text: str) -> None:
        # Labels may share one paragraph; each value runs to the next label
        labels = list(PROFILE_SUMMARY_LABELS.finditer(text))
        for index, label in enumerate(labels):
            end = labels[index + 1].start() if index + 1 < len(labels) else len(text)
            value = strip_emphasis(text[label.end():end]).strip()
            if not value:
                continue
            field = PROFILE_SUMMARY_FIELDS[(label.group(1) or label.group(2)).lower()]
            setattr(self.profile, field, value)

    def _append_case_description(self, text: str) -> None:
        case = self.current_case
        case.description = f"{case.description} {text}" if case.description else text

    def _case_table(self, node: SyntaxTreeNode) -> None:
        for cells in table_rows(node)[1:]:
            if not cells or not cells[0]:
                continue
            details = [cell for cell in cells[1:3] if cell]
            self.profile.cases.append(
                CaseReference(
                    title=cells[0],
                    description=" — ".join(details) or None,
                )
            )

    def _connection_item(self, text: str) -> None:
        connection = parse_connection_item(text)
        if connection is None:
            connection = parse_cross_reference(strip_emphasis(text))
        if connection is None:
            logger.debug(
                f"Dropped connection line in {self.profile.slug}: {text!r}",
                extra={"slug": self.profile.slug},
            )
            return
        self.profile.connections.append(connection)


def parse_entity_markdown(
    markdown: str,
    entity_type: EntityType | str,
    slug: str,
    country_slug: str,
    country_name: str | None = None,
) -> EntityProfile:
    """Parse an entity markdown file into an EntityProfile.

    Args:
        markdown: Profile markdown
        entity_type: Entity type (individual, company, ...)
        slug: Global slug "<type>/<file-stem>"
        country_slug: Country the file lives under
        country_name: Display name of that country

    Returns:
        The parsed profile with unresolved connections
    """
    profile = EntityProfileParser(
        EntityType(entity_type), slug, country_slug, country_name
    ).parse(markdown)
    logger.debug(
        f"Parsed profile {slug}: {len(profile.connections)} connections",
        extra={"slug": slug, "connections": len(profile.connections)},
    )
    return profile
