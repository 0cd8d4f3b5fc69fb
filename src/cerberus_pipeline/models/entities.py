"""Entity profile records.

This module defines the records parsed from entity markdown files:
- EntityProfile: a person, company, foreign state or organization
- CaseReference: a case mentioned from the entity's point of view
- Connection: a free-text link to another entity, resolved later
"""

from datetime import datetime, timezone

from pydantic import Field, computed_field

from .base import EntityStatus, EntityType, RecordModel
from .graph import GraphData


class CaseReference(RecordModel):
    """Lightweight mention of a case inside an entity profile."""

    title: str
    country_slug: str | None = None
    description: str | None = None


class Connection(RecordModel):
    """A relationship to another entity as written in the source text.

    ``target_slug`` and ``resolved`` are filled in by the resolver; until
    then the connection only carries the name as authored.
    """

    target_name: str
    target_slug: str = ""
    relationship: str
    resolved: bool = False


class EntityProfile(RecordModel):
    """Structured profile parsed from one entity markdown file."""

    slug: str = Field(..., description='Global identifier "<type>/<file-stem>"')
    type: EntityType
    name: str
    country_slug: str
    country_name: str | None = None
    status: EntityStatus = EntityStatus.UNKNOWN
    role: str | None = None
    party: str | None = None
    birth_date: str | None = None
    biography: list[str] = Field(default_factory=list)
    cases: list[CaseReference] = Field(default_factory=list)
    connections: list[Connection] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    initials: str = "??"
    profile_title: str | None = None
    profile_summary: str | None = None
    why_tracked: str | None = None


class EntityDataset(RecordModel):
    """All entity profiles of one run together with their graph."""

    entities: list[EntityProfile] = Field(default_factory=list)
    graph_data: GraphData = Field(default_factory=GraphData)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @computed_field
    @property
    def total_entities(self) -> int:
        return len(self.entities)
