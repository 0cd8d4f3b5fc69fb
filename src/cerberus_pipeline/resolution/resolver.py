"""Cross-document entity resolver.

Links free-text entity mentions to canonical entity slugs:
- entity connections (``Connection.target_name``)
- legislation linked entities (``LinkedEntityRef.display_name``)
- FocusPoint linked entities (``EntityRef.display_name``)

Resolution flow:
1. Exact name lookup
2. Normalized name lookup (lowercase letters and single spaces)
3. Miss -> the reference stays unresolved

Only the resolution fields of a reference are ever written, and
references that are already resolved are left alone, so running the
resolver again is safe and can only resolve more.
"""

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel

from ..logging import get_context_logger, log_name_collision, log_resolution_summary
from ..models.entities import EntityProfile
from ..models.focuspoints import FocusPointRecord
from ..models.legislation import CountryLegislation
from ..parsing.heuristics import normalize_name_for_matching

logger = get_context_logger(__name__)


class CollisionPolicy(str, Enum):
    """Which entity keeps a lookup key shared by several entities."""

    LAST = "last"
    FIRST = "first"


class ResolutionStats(BaseModel):
    """Outcome of one resolution pass."""

    scope: str
    total: int = 0
    resolved: int = 0
    newly_resolved: int = 0

    @property
    def unresolved(self) -> int:
        return self.total - self.resolved


class NameIndex:
    """Exact and normalized name -> slug lookup tables.

    Built once per resolution pass from the full entity collection and
    discarded afterwards.
    """

    def __init__(
        self,
        entities: Iterable[EntityProfile],
        policy: CollisionPolicy | str = CollisionPolicy.LAST,
    ):
        self.policy = CollisionPolicy(policy)
        self.exact: dict[str, str] = {}
        self.normalized: dict[str, str] = {}

        for entity in entities:
            self._add(self.exact, entity.name, entity.slug)
            self._add(self.normalized, normalize_name_for_matching(entity.name), entity.slug)

    def _add(self, table: dict[str, str], key: str, slug: str) -> None:
        if not key:
            return
        existing = table.get(key)
        if existing is not None and existing != slug:
            if self.policy == CollisionPolicy.FIRST:
                log_name_collision(key, kept_slug=existing, dropped_slug=slug)
                return
            log_name_collision(key, kept_slug=slug, dropped_slug=existing)
        table[key] = slug

    def lookup(self, name: str) -> str | None:
        """Find the slug for a name, exact match first.

        Args:
            name: Name as written in the source text

        Returns:
            Entity slug, or None on a miss
        """
        if not name:
            return None
        slug = self.exact.get(name)
        if slug:
            return slug
        normalized = normalize_name_for_matching(name)
        if not normalized:
            return None
        return self.normalized.get(normalized)

    def __len__(self) -> int:
        return len(self.exact)


class EntityResolver:
    """Resolves entity mentions against a fixed entity collection."""

    def __init__(
        self,
        entities: Iterable[EntityProfile],
        policy: CollisionPolicy | str = CollisionPolicy.LAST,
    ):
        """Initialize the resolver.

        Args:
            entities: The full entity collection; resolve only after every
                profile has been parsed
            policy: Collision policy for names shared by several entities
        """
        self.entities = list(entities)
        self.index = NameIndex(self.entities, policy)

    def resolve_connections(
        self, entities: Iterable[EntityProfile] | None = None
    ) -> ResolutionStats:
        """Resolve every connection of the given (default: own) entities."""
        stats = ResolutionStats(scope="connections")
        for entity in self.entities if entities is None else entities:
            for connection in entity.connections:
                stats.total += 1
                if connection.resolved:
                    stats.resolved += 1
                    continue
                slug = self.index.lookup(connection.target_name)
                if slug:
                    connection.target_slug = slug
                    connection.resolved = True
                    stats.resolved += 1
                    stats.newly_resolved += 1

        log_resolution_summary(stats.scope, stats.resolved, stats.total)
        return stats

    def resolve_linked_entities(
        self, countries: Iterable[CountryLegislation]
    ) -> ResolutionStats:
        """Resolve the linked entities of every legislation entry."""
        stats = ResolutionStats(scope="legislation linked entities")
        for country in countries:
            for entry in country.entries:
                for ref in entry.linked_entities:
                    self._resolve_ref(ref, stats)

        log_resolution_summary(stats.scope, stats.resolved, stats.total)
        return stats

    def resolve_focuspoint_entities(
        self, focuspoints: Iterable[FocusPointRecord]
    ) -> ResolutionStats:
        """Resolve the linked entities of every lead."""
        stats = ResolutionStats(scope="focuspoint linked entities")
        for focuspoint in focuspoints:
            for ref in focuspoint.linked_entities:
                self._resolve_ref(ref, stats)

        log_resolution_summary(stats.scope, stats.resolved, stats.total)
        return stats

    def _resolve_ref(self, ref, stats: ResolutionStats) -> None:
        stats.total += 1
        if ref.entity_slug:
            stats.resolved += 1
            return
        slug = self.index.lookup(ref.display_name)
        if slug:
            ref.entity_slug = slug
            stats.resolved += 1
            stats.newly_resolved += 1


def resolve_connections(
    entities: list[EntityProfile],
    policy: CollisionPolicy | str = CollisionPolicy.LAST,
) -> ResolutionStats:
    """Resolve all connections of an entity collection in place.

    Args:
        entities: Every parsed entity profile
        policy: Collision policy for shared names

    Returns:
        Resolution statistics
    """
    return EntityResolver(entities, policy).resolve_connections()
