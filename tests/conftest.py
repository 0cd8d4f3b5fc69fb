"""Shared pytest fixtures for the Cerberus pipeline tests."""

from pathlib import Path

import pytest

from cerberus_pipeline.config import get_settings
from cerberus_pipeline.models import EntityProfile, EntityType
from cerberus_pipeline.parsing import parse_entity_markdown

from tests.fixtures.markdown import (
    COUNTRY_DOSSIER,
    ENTITIES_DOCUMENT,
    ENTITY_PROFILE,
    FINDINGS_DOCUMENT,
    JANE_DOE_PROFILE,
    LEGISLATION_TRACKER,
    PLAN_DOCUMENT,
    SEBASTIAN_KURZ_PROFILE,
    SOURCES_DOCUMENT,
    TIMELINE_DOCUMENT,
)


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Isolate every test from the environment and cached settings."""
    monkeypatch.delenv("CERBERUS_SKIP_EXISTING", raising=False)
    monkeypatch.delenv("CERBERUS_RESOLVER_COLLISION_POLICY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def entity_collection() -> list[EntityProfile]:
    """Three Austrian profiles that reference each other."""
    return [
        parse_entity_markdown(
            ENTITY_PROFILE, EntityType.INDIVIDUAL, "individual/schmid-thomas", "austria", "Austria"
        ),
        parse_entity_markdown(
            JANE_DOE_PROFILE, EntityType.INDIVIDUAL, "individual/doe-jane", "austria", "Austria"
        ),
        parse_entity_markdown(
            SEBASTIAN_KURZ_PROFILE,
            EntityType.INDIVIDUAL,
            "individual/kurz-sebastian",
            "austria",
            "Austria",
        ),
    ]


@pytest.fixture
def content_root(tmp_path) -> Path:
    """A minimal checked-out content tree."""
    root = tmp_path / "cerberus"
    austria = root / "countries" / "austria"
    individuals = austria / "entities" / "individuals"
    individuals.mkdir(parents=True)

    (austria / "corruption-news.md").write_text(COUNTRY_DOSSIER, encoding="utf-8")
    (austria / "legislative-changes.md").write_text(LEGISLATION_TRACKER, encoding="utf-8")
    (individuals / "schmid-thomas.md").write_text(ENTITY_PROFILE, encoding="utf-8")
    (individuals / "doe-jane.md").write_text(JANE_DOE_PROFILE, encoding="utf-8")
    (individuals / "kurz-sebastian.md").write_text(SEBASTIAN_KURZ_PROFILE, encoding="utf-8")
    (individuals / "README.md").write_text("# Individuals\n", encoding="utf-8")

    lead = root / "focuspoints" / "port-tender-abc123"
    (lead / "attachments").mkdir(parents=True)
    (lead / "plan.md").write_text(PLAN_DOCUMENT, encoding="utf-8")
    (lead / "findings.md").write_text(FINDINGS_DOCUMENT, encoding="utf-8")
    (lead / "timeline.md").write_text(TIMELINE_DOCUMENT, encoding="utf-8")
    (lead / "entities.md").write_text(ENTITIES_DOCUMENT, encoding="utf-8")
    (lead / "sources.md").write_text(SOURCES_DOCUMENT, encoding="utf-8")
    (lead / "attachments" / "award-notice.pdf").write_bytes(b"%PDF-1.4 test")

    plain = root / "focuspoints" / "plain-lead-xyz"
    plain.mkdir(parents=True)
    (plain / "plan.md").write_text(
        PLAN_DOCUMENT.replace("2024-02-20", "2024-01-05").replace(
            "Port tender irregularities", "Plain lead"
        ),
        encoding="utf-8",
    )

    # A lead directory without a plan is skipped
    (root / "focuspoints" / "orphan").mkdir()

    return root
