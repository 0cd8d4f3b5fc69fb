"""Unit tests for the FocusPoint parser family.

Tests the plan, findings, timeline, entities and sources parsers and
the assembly of a lead from its documents.

Run with: pytest tests/unit/parsing/test_focuspoint_parser.py -v
"""

import pytest

from cerberus_pipeline.models.base import FocusPointStatus
from cerberus_pipeline.models.focuspoints import Attachment
from cerberus_pipeline.parsing.focuspoint import (
    PlanSection,
    assemble_focuspoint,
    classify_plan_section,
    parse_entities_markdown,
    parse_findings_markdown,
    parse_plan_markdown,
    parse_sources_markdown,
    parse_timeline_markdown,
)

from tests.fixtures.markdown import (
    ENTITIES_DOCUMENT,
    FINDINGS_DOCUMENT,
    PLAN_DOCUMENT,
    SOURCES_DOCUMENT,
    TIMELINE_DOCUMENT,
)


class TestPlanParser:
    """Tests for plan.md parsing."""

    @pytest.mark.parametrize(
        "heading,expected",
        [
            ("Description", PlanSection.DESCRIPTION),
            ("Links & Sources", PlanSection.LINKS),
            ("Sources", PlanSection.LINKS),
            ("Attachments", PlanSection.ATTACHMENTS),
            ("Search Directives", PlanSection.SEARCH_DIRECTIVES),
            ("Notes", PlanSection.OTHER),
        ],
    )
    def test_classify(self, heading, expected):
        assert classify_plan_section(heading) == expected

    def test_plan_fields(self):
        """Test every field of the submission template."""
        record = parse_plan_markdown(PLAN_DOCUMENT, "port-tender-abc123")

        assert record.slug == "port-tender-abc123"
        assert record.title == "Port tender irregularities"
        assert record.status == FocusPointStatus.NEW
        assert record.created_at == "2024-02-20T10:15:00.000Z"
        assert record.submitted_by == "Anonymous"
        assert record.description == [
            "The 2024 port tender was awarded to a company with ministry ties."
        ]
        assert record.links == ["https://example.org/tender", "https://example.org/ministry"]
        assert [a.filename for a in record.attachments] == ["award-notice.pdf"]
        assert record.search_directives == [
            "Investigate: Port tender irregularities",
            "Monitor sources: https://example.org/tender, https://example.org/ministry",
        ]
        assert record.has_bot_data is False

    def test_defaults(self):
        """Test defaults for a plan without metadata."""
        record = parse_plan_markdown("# Bare lead\n", "bare")

        assert record.title == "Bare lead"
        assert record.status == FocusPointStatus.NEW
        assert record.submitted_by == "Anonymous"
        assert record.created_at == ""

    def test_explicit_status(self):
        """Test a status other than new."""
        record = parse_plan_markdown("# Lead\n\n**Status:** Completed\n", "lead")

        assert record.status == FocusPointStatus.COMPLETED


class TestFollowUpParsers:
    """Tests for the bot-generated documents."""

    def test_findings(self):
        """Test dated and undated findings with relevance and sources."""
        findings = parse_findings_markdown(FINDINGS_DOCUMENT)

        assert len(findings) == 2
        first, second = findings
        assert first.title == "Procurement irregularities confirmed"
        assert first.date == "2024-03-05"
        assert first.summary == ["Three contracts exceeded thresholds without tender."]
        assert first.relevance == "High"
        assert first.sources == ["https://example.org/audit-report", "Court of Audit report"]
        assert second.title == "Shell company link"
        assert second.date is None
        assert second.summary == ["The winning bidder shares an address with a ministry adviser."]

    def test_findings_date_must_be_trailing(self):
        """Test that a date inside the heading is left in the title."""
        findings = parse_findings_markdown("## Raid (2024-01-01) on offices\n")

        assert findings[0].title == "Raid (2024-01-01) on offices"
        assert findings[0].date is None

    def test_timeline(self):
        """Test dated items with and without a source."""
        entries = parse_timeline_markdown(TIMELINE_DOCUMENT)

        assert [(e.date, e.event, e.source) for e in entries] == [
            ("2024-03-01", "Filed complaint", "Reuters"),
            ("2024-03-10", "Prosecutor opened file", None),
        ]

    def test_entities(self):
        """Test bold-name items with a role and bare names."""
        refs = parse_entities_markdown(ENTITIES_DOCUMENT)

        assert [(r.display_name, r.role) for r in refs] == [
            ("Thomas Schmid", "key witness"),
            ("Jane Doe", None),
        ]
        assert all(r.entity_slug is None for r in refs)

    def test_sources(self):
        assert parse_sources_markdown(SOURCES_DOCUMENT) == ["https://example.org/a", "Court records"]


class TestAssembleFocusPoint:
    """Tests for combining a plan with its follow-up documents."""

    def test_no_plan_no_record(self):
        """Test that a missing plan skips the lead."""
        assert assemble_focuspoint("x", None, timeline=TIMELINE_DOCUMENT) is None
        assert assemble_focuspoint("x", "   ") is None

    def test_plan_only(self):
        """Test that a lone plan has no bot data and stays new."""
        record = assemble_focuspoint("lead", PLAN_DOCUMENT)

        assert record.has_bot_data is False
        assert record.status == FocusPointStatus.NEW

    def test_timeline_only_scenario(self):
        """Test that one timeline document flips bot data and status."""
        record = assemble_focuspoint(
            "lead", PLAN_DOCUMENT, timeline="- 2024-03-01: Filed complaint (Reuters)\n"
        )

        assert record.has_bot_data is True
        assert record.status == FocusPointStatus.INVESTIGATING
        assert len(record.timeline) == 1
        entry = record.timeline[0]
        assert (entry.date, entry.event, entry.source) == ("2024-03-01", "Filed complaint", "Reuters")

    @pytest.mark.parametrize(
        "document",
        ["findings", "timeline", "entities", "sources"],
    )
    def test_any_document_sets_bot_data(self, document):
        """Test that each follow-up document alone sets bot data."""
        documents = {
            "findings": FINDINGS_DOCUMENT,
            "timeline": TIMELINE_DOCUMENT,
            "entities": ENTITIES_DOCUMENT,
            "sources": SOURCES_DOCUMENT,
        }

        record = assemble_focuspoint("lead", PLAN_DOCUMENT, **{document: documents[document]})

        assert record.has_bot_data is True
        expected = (
            FocusPointStatus.FINDINGS_AVAILABLE
            if document == "findings"
            else FocusPointStatus.INVESTIGATING
        )
        assert record.status == expected

    def test_empty_findings_document_counts_as_present(self):
        """Test that findings without headings upgrade to investigating."""
        record = assemble_focuspoint("lead", PLAN_DOCUMENT, findings="Nothing yet.\n")

        assert record.has_bot_data is True
        assert record.findings == []
        assert record.status == FocusPointStatus.INVESTIGATING

    def test_blank_document_is_absent(self):
        """Test that a whitespace-only document does not count."""
        record = assemble_focuspoint("lead", PLAN_DOCUMENT, sources="  \n")

        assert record.has_bot_data is False

    def test_status_not_downgraded(self):
        """Test that a non-new status is kept."""
        plan = PLAN_DOCUMENT.replace("**Status:** New", "**Status:** Completed")

        record = assemble_focuspoint("lead", plan, findings=FINDINGS_DOCUMENT)

        assert record.status == FocusPointStatus.COMPLETED

    def test_attachment_listing_replaces_plan_names(self):
        """Test that listed attachment files win over plan names."""
        files = [Attachment(filename="scan.png", path="focuspoints/lead/attachments/scan.png", size_bytes=10)]

        record = assemble_focuspoint("lead", PLAN_DOCUMENT, attachments=files)

        assert [a.filename for a in record.attachments] == ["scan.png"]
        assert record.attachments[0].size_bytes == 10
