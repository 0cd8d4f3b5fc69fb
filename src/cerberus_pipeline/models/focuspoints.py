"""FocusPoint (lead) records.

A FocusPoint starts as a user-submitted plan document and is enriched by
up to four bot-generated follow-up documents: findings, timeline, linked
entities and sources.
"""

from datetime import datetime, timezone

from pydantic import Field, computed_field

from .base import FocusPointStatus, FrozenRecordModel, RecordModel


class Attachment(FrozenRecordModel):
    """A file attached to a lead."""

    filename: str
    path: str | None = None
    size_bytes: int | None = None


class Finding(RecordModel):
    """A finding reported by the research bot."""

    title: str
    date: str | None = None
    summary: list[str] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    relevance: str | None = None


class TimelineEntry(FrozenRecordModel):
    """A dated event on a lead's timeline."""

    date: str
    event: str
    source: str | None = None


class EntityRef(RecordModel):
    """An entity linked to a lead, optionally resolved to a profile slug."""

    display_name: str
    entity_slug: str | None = None
    role: str | None = None


class FocusPointRecord(RecordModel):
    """A lead assembled from its plan and follow-up documents."""

    slug: str
    title: str = ""
    status: FocusPointStatus = FocusPointStatus.NEW
    created_at: str = ""
    submitted_by: str = "Anonymous"
    description: list[str] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    search_directives: list[str] = Field(default_factory=list)
    findings: list[Finding] = Field(default_factory=list)
    timeline: list[TimelineEntry] = Field(default_factory=list)
    linked_entities: list[EntityRef] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    has_bot_data: bool = False


class FocusPointDataset(RecordModel):
    """All leads of one run, newest first."""

    focuspoints: list[FocusPointRecord] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @computed_field
    @property
    def total_focuspoints(self) -> int:
        return len(self.focuspoints)
