"""Markdown document parsers.

One parser per document type, all built on the same text extraction
and field heuristics.
"""

from .country import classify_country_section, parse_country_markdown
from .entity import (
    classify_entity_section,
    parse_connection_item,
    parse_cross_reference,
    parse_entity_markdown,
)
from .focuspoint import (
    assemble_focuspoint,
    parse_entities_markdown,
    parse_findings_markdown,
    parse_plan_markdown,
    parse_sources_markdown,
    parse_timeline_markdown,
)
from .heuristics import (
    derive_initials,
    extract_date_range,
    extract_meta_value,
    generate_slug,
    normalize_name_for_matching,
)
from .legislation import parse_legislation_markdown
from .text import get_text_content, parse_markdown

__all__ = [
    # Text
    "get_text_content",
    "parse_markdown",
    # Heuristics
    "derive_initials",
    "extract_date_range",
    "extract_meta_value",
    "generate_slug",
    "normalize_name_for_matching",
    # Countries
    "classify_country_section",
    "parse_country_markdown",
    # Entities
    "classify_entity_section",
    "parse_connection_item",
    "parse_cross_reference",
    "parse_entity_markdown",
    # Legislation
    "parse_legislation_markdown",
    # FocusPoints
    "assemble_focuspoint",
    "parse_entities_markdown",
    "parse_findings_markdown",
    "parse_plan_markdown",
    "parse_sources_markdown",
    "parse_timeline_markdown",
]
