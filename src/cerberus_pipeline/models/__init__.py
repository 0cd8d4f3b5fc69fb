"""Data models for the Cerberus pipeline.

Exports all record types and enums.
"""

from .base import (
    CaseStatus,
    EntityStatus,
    EntityType,
    FocusPointStatus,
    FrozenRecordModel,
    LegislationImpact,
    LegislationStatus,
    RecordModel,
)
from .cases import Case, CountryRecord, DashboardDataset
from .countries import EU_COUNTRIES, Country
from .entities import CaseReference, Connection, EntityDataset, EntityProfile
from .focuspoints import (
    Attachment,
    EntityRef,
    Finding,
    FocusPointDataset,
    FocusPointRecord,
    TimelineEntry,
)
from .graph import GraphData, GraphEdge, GraphNode
from .legislation import (
    CountryLegislation,
    LegislationDataset,
    LegislationEntry,
    LinkedEntityRef,
)

__all__ = [
    # Enums
    "CaseStatus",
    "EntityStatus",
    "EntityType",
    "FocusPointStatus",
    "LegislationImpact",
    "LegislationStatus",
    # Base
    "FrozenRecordModel",
    "RecordModel",
    # Countries
    "Case",
    "Country",
    "CountryRecord",
    "DashboardDataset",
    "EU_COUNTRIES",
    # Entities
    "CaseReference",
    "Connection",
    "EntityDataset",
    "EntityProfile",
    # Graph
    "GraphData",
    "GraphEdge",
    "GraphNode",
    # Legislation
    "CountryLegislation",
    "LegislationDataset",
    "LegislationEntry",
    "LinkedEntityRef",
    # FocusPoints
    "Attachment",
    "EntityRef",
    "Finding",
    "FocusPointDataset",
    "FocusPointRecord",
    "TimelineEntry",
]
