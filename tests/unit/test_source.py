"""Unit tests for the local content source.

Run with: pytest tests/unit/test_source.py -v
"""

import pytest

from cerberus_pipeline.models.base import EntityType
from cerberus_pipeline.source import (
    LocalContentSource,
    clean_document,
    entity_type_for_dir,
)


class TestCleanDocument:
    """Tests for document cleaning."""

    def test_strips_emoji_and_whitespace(self):
        assert clean_document("\n  \U0001F6A8 Breaking news \U0001F4B0\n") == "Breaking news"

    def test_keeps_other_symbols(self):
        """Test that characters outside the emoji block survive."""
        assert clean_document("Österreich € ↔ ✓") == "Österreich € ↔ ✓"


class TestEntityTypeForDir:
    """Tests for entity directory mapping."""

    @pytest.mark.parametrize(
        "dir_name,expected",
        [
            ("individuals", EntityType.INDIVIDUAL),
            ("companies", EntityType.COMPANY),
            ("foreign-states", EntityType.FOREIGN_STATE),
            ("organizations", EntityType.ORGANIZATION),
            ("misc", EntityType.INDIVIDUAL),
        ],
    )
    def test_mapping(self, dir_name, expected):
        assert entity_type_for_dir(dir_name) == expected


class TestLocalContentSource:
    """Tests for reading a checked-out content tree."""

    def test_missing_root(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LocalContentSource(tmp_path / "missing")

    def test_country_dossier(self, content_root):
        source = LocalContentSource(content_root)

        dossier = source.country_dossier("austria")

        assert dossier is not None
        assert dossier.startswith("#")

    def test_country_without_directory(self, content_root):
        assert LocalContentSource(content_root).country_dossier("malta") is None

    def test_dossier_fallback(self, tmp_path):
        """Test falling back to another markdown file in the country dir."""
        country_dir = tmp_path / "countries" / "malta"
        country_dir.mkdir(parents=True)
        (country_dir / "README.md").write_text("# Readme", encoding="utf-8")
        (country_dir / "legislative-changes.md").write_text("# Laws", encoding="utf-8")
        (country_dir / "overview.md").write_text("# Malta overview", encoding="utf-8")

        assert LocalContentSource(tmp_path).country_dossier("malta") == "# Malta overview"

    def test_dossier_fallback_without_candidates(self, tmp_path):
        country_dir = tmp_path / "countries" / "malta"
        country_dir.mkdir(parents=True)
        (country_dir / "README.md").write_text("# Readme", encoding="utf-8")

        assert LocalContentSource(tmp_path).country_dossier("malta") is None

    def test_entity_documents(self, content_root):
        """Test that README files are skipped and slugs carry the type."""
        documents = list(LocalContentSource(content_root).entity_documents("austria"))

        assert [doc.slug for doc in documents] == [
            "individual/doe-jane",
            "individual/kurz-sebastian",
            "individual/schmid-thomas",
        ]
        assert all(doc.entity_type == EntityType.INDIVIDUAL for doc in documents)

    def test_entity_documents_without_directory(self, content_root):
        assert list(LocalContentSource(content_root).entity_documents("malta")) == []

    def test_legislation_document(self, content_root):
        source = LocalContentSource(content_root)

        assert source.legislation_document("austria")
        assert source.legislation_document("malta") is None

    def test_focuspoint_slugs(self, content_root):
        assert LocalContentSource(content_root).focuspoint_slugs() == [
            "orphan",
            "plain-lead-xyz",
            "port-tender-abc123",
        ]

    def test_focuspoint_document(self, content_root):
        source = LocalContentSource(content_root)

        assert source.focuspoint_document("port-tender-abc123", "plan")
        assert source.focuspoint_document("plain-lead-xyz", "findings") is None

    def test_unknown_focuspoint_document(self, content_root):
        with pytest.raises(ValueError):
            LocalContentSource(content_root).focuspoint_document("orphan", "notes")

    def test_focuspoint_attachments(self, content_root):
        source = LocalContentSource(content_root)

        attachments = source.focuspoint_attachments("port-tender-abc123")

        assert len(attachments) == 1
        assert attachments[0].filename == "award-notice.pdf"
        assert attachments[0].path == "focuspoints/port-tender-abc123/attachments/award-notice.pdf"
        assert attachments[0].size_bytes == len(b"%PDF-1.4 test")

    def test_no_attachments_directory(self, content_root):
        assert LocalContentSource(content_root).focuspoint_attachments("plain-lead-xyz") is None

    def test_undecodable_file_is_skipped(self, tmp_path):
        """Test that unreadable documents are treated as absent."""
        country_dir = tmp_path / "countries" / "malta"
        country_dir.mkdir(parents=True)
        (country_dir / "legislative-changes.md").write_bytes(b"\xff\xfe\x00broken")

        assert LocalContentSource(tmp_path).legislation_document("malta") is None
