"""Legislation tracker records."""

from datetime import datetime, timezone

from pydantic import Field, computed_field

from .base import LegislationImpact, LegislationStatus, RecordModel


class LinkedEntityRef(RecordModel):
    """An entity named by a legislation entry; ``entity_slug`` is set on resolution."""

    display_name: str
    entity_slug: str | None = None


class LegislationEntry(RecordModel):
    """One law or bill, taken from an H3 heading."""

    id: str = Field(..., description='"<country-slug>/<title-slug>"')
    title: str
    status: LegislationStatus = LegislationStatus.PROPOSED
    date: str | None = None
    sectors: list[str] = Field(default_factory=list)
    impact: LegislationImpact = LegislationImpact.MEDIUM
    linked_entities: list[LinkedEntityRef] = Field(default_factory=list)
    description: list[str] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    category: str = ""


class CountryLegislation(RecordModel):
    """Everything parsed from one country's legislative-changes file."""

    country_slug: str
    country_name: str
    iso_a2: str
    last_updated: str | None = None
    filed_by: str | None = None
    categories: list[str] = Field(default_factory=list)
    entries: list[LegislationEntry] = Field(default_factory=list)

    @computed_field
    @property
    def entry_count(self) -> int:
        return len(self.entries)


class LegislationDataset(RecordModel):
    """Legislation of every country with a tracker file."""

    countries: list[CountryLegislation] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @computed_field
    @property
    def total_entries(self) -> int:
        return sum(len(country.entries) for country in self.countries)

    @computed_field
    @property
    def all_sectors(self) -> list[str]:
        """Unique sectors across every entry, sorted."""
        return sorted(
            {
                sector
                for country in self.countries
                for entry in country.entries
                for sector in entry.sectors
            }
        )
