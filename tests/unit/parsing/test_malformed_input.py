"""Unit tests for deeply nested and malformed markdown.

Every parser must return a record, never raise, whatever the nesting
depth or emphasis balance of its input.

Run with: pytest tests/unit/parsing/test_malformed_input.py -v
"""

import pytest

from cerberus_pipeline.models.base import EntityType
from cerberus_pipeline.parsing.country import parse_country_markdown
from cerberus_pipeline.parsing.entity import parse_entity_markdown
from cerberus_pipeline.parsing.focuspoint import assemble_focuspoint
from cerberus_pipeline.parsing.legislation import parse_legislation_markdown
from cerberus_pipeline.parsing.text import get_text_content, parse_markdown

DEPTH = 5000

NESTED_BLOCKQUOTES = "> " * DEPTH + "quoted\n"
NESTED_LIST_MARKERS = "- " * DEPTH + "listed\n"
INDENTED_LISTS = "".join(f"{'  ' * depth}- level {depth}\n" for depth in range(1000))
UNBALANCED_EMPHASIS = "*" * DEPTH + " stray " + "**" * (DEPTH // 2) + " _" * DEPTH + "\n"

PAYLOADS = [NESTED_BLOCKQUOTES, NESTED_LIST_MARKERS, INDENTED_LISTS, UNBALANCED_EMPHASIS]
PAYLOAD_IDS = ["blockquotes", "list-markers", "indented-lists", "emphasis"]


def with_sections(payload: str) -> str:
    """Place a payload under every kind of heading the parsers track."""
    return (
        "# Subject\n\n"
        f"{payload}\n"
        "## Major Scandals\n\n"
        "### Case One\n\n"
        f"{payload}\n"
        "## Key Associates\n\n"
        f"{payload}\n"
        "## Description\n\n"
        f"{payload}\n"
    )


@pytest.mark.parametrize("payload", PAYLOADS, ids=PAYLOAD_IDS)
class TestMalformedInput:
    """Tests for pathological documents."""

    def test_get_text_content(self, payload):
        text = get_text_content(parse_markdown(payload))

        assert isinstance(text, str)

    def test_get_text_content_keep_strong(self, payload):
        text = get_text_content(parse_markdown(payload), keep_strong=True)

        assert isinstance(text, str)

    def test_country_parser(self, payload):
        record = parse_country_markdown(with_sections(payload), "austria", "Austria", "AT")

        assert record.slug == "austria"
        assert [case.title for case in record.cases] == ["Case One"]

    def test_entity_parser(self, payload):
        profile = parse_entity_markdown(
            with_sections(payload), EntityType.INDIVIDUAL, "individual/subject", "austria"
        )

        assert profile.name == "Subject"
        assert profile.initials == "S"

    def test_legislation_parser(self, payload):
        legislation = parse_legislation_markdown(
            with_sections(payload), "austria", "Austria", "AT"
        )

        assert [entry.title for entry in legislation.entries] == ["Case One"]

    def test_focuspoint_parsers(self, payload):
        """Test the plan and every follow-up document."""
        document = with_sections(payload)

        record = assemble_focuspoint(
            "lead",
            document,
            findings=document,
            timeline=document,
            entities=document,
            sources=document,
        )

        assert record is not None
        assert record.title == "Subject"
        assert record.has_bot_data
