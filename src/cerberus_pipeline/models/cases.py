"""Country dossier records: cases and per-country summaries."""

from datetime import datetime, timezone

from pydantic import Field, computed_field

from .base import CaseStatus, RecordModel


class Case(RecordModel):
    """A corruption case found under an H3 heading of a dossier."""

    id: str = Field(..., description="Title slug, unique within a country")
    title: str
    status: CaseStatus = CaseStatus.UNKNOWN
    date_range: str | None = None
    description: list[str] = Field(default_factory=list)
    section: str = Field(..., description="H2 heading the case was listed under")


class CountryRecord(RecordModel):
    """Everything parsed from one country dossier."""

    slug: str
    name: str
    iso_a2: str
    last_updated: str | None = None
    filed_by: str | None = None
    context: str | None = None
    cases: list[Case] = Field(default_factory=list)
    sections: list[str] = Field(
        default_factory=list, description="Case-bearing H2 headings, first-seen order"
    )
    sources: list[str] = Field(default_factory=list)
    key_entities: list[str] = Field(default_factory=list)
    ti_ranking: str | None = Field(
        default=None, description="Transparency International ranking mention"
    )

    @computed_field
    @property
    def case_count(self) -> int:
        return len(self.cases)


class DashboardDataset(RecordModel):
    """All country dossiers of one pipeline run."""

    countries: list[CountryRecord] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @computed_field
    @property
    def total_cases(self) -> int:
        return sum(len(country.cases) for country in self.countries)
