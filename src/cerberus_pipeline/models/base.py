"""Base models and enums for Cerberus records."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CaseStatus(str, Enum):
    """Status of a corruption case in a country dossier."""

    ONGOING = "ongoing"
    CONVICTED = "convicted"
    INVESTIGATION = "investigation"
    EXPOSED = "exposed"
    RESOLVED = "resolved"
    ACQUITTED = "acquitted"
    UNKNOWN = "unknown"


class EntityType(str, Enum):
    """Kinds of tracked entities."""

    INDIVIDUAL = "individual"
    COMPANY = "company"
    FOREIGN_STATE = "foreign-state"
    ORGANIZATION = "organization"


class EntityStatus(str, Enum):
    """Legal or public status of a tracked entity."""

    CONVICTED = "convicted"
    ON_TRIAL = "on-trial"
    UNDER_INVESTIGATION = "under-investigation"
    SANCTIONED = "sanctioned"
    EXPOSED = "exposed"
    ACQUITTED = "acquitted"
    ACTIVE = "active"
    DISSOLVED = "dissolved"
    UNKNOWN = "unknown"


class LegislationStatus(str, Enum):
    """Stage of a piece of legislation."""

    ENACTED = "enacted"
    PROPOSED = "proposed"
    IN_COMMITTEE = "in-committee"
    VETOED = "vetoed"
    REPEALED = "repealed"
    AMENDED = "amended"
    STALLED = "stalled"


class LegislationImpact(str, Enum):
    """Expected anti-corruption impact of legislation."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FocusPointStatus(str, Enum):
    """Lifecycle of a user-submitted lead."""

    NEW = "new"
    INVESTIGATING = "investigating"
    FINDINGS_AVAILABLE = "findings-available"
    COMPLETED = "completed"
    STALE = "stale"


class RecordModel(BaseModel):
    """Base class for every record the pipeline emits.

    Fields are snake_case in Python and serialize with camelCase aliases,
    which is the shape the JSON persistence layer validates.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
    )


class FrozenRecordModel(RecordModel):
    """Record that is never modified after construction."""

    model_config = ConfigDict(frozen=True)
