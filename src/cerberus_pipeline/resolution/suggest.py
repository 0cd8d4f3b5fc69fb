"""Fuzzy suggestions for unresolved entity mentions.

Uses RapidFuzz to rank known entity names against a mention that the
resolver could not match exactly. Suggestions are for editors fixing
the source markdown; they never change resolution results.
"""

from collections.abc import Iterable

from pydantic import BaseModel, Field
from rapidfuzz import fuzz, process

from ..models.entities import EntityProfile
from ..parsing.heuristics import normalize_name_for_matching


class Suggestion(BaseModel):
    """A known entity that resembles an unresolved mention."""

    entity_slug: str
    name: str
    score: float = Field(ge=0.0, le=100.0)


class UnresolvedMention(BaseModel):
    """An unresolved connection with its closest known entities."""

    source_slug: str
    target_name: str
    relationship: str
    suggestions: list[Suggestion] = Field(default_factory=list)


class SuggestionIndex:
    """Normalized entity names prepared for repeated fuzzy lookups."""

    def __init__(self, entities: Iterable[EntityProfile]):
        self._names: dict[str, str] = {}
        self._choices: dict[str, str] = {}
        for entity in entities:
            normalized = normalize_name_for_matching(entity.name)
            if normalized:
                self._names[entity.slug] = entity.name
                self._choices[entity.slug] = normalized

    def suggest(self, name: str, min_score: int = 85, limit: int = 3) -> list[Suggestion]:
        """Rank entity names against a mention.

        Args:
            name: Mention as written in the source text
            min_score: Minimum WRatio score (0-100)
            limit: Maximum number of suggestions

        Returns:
            Suggestions sorted by score (descending)
        """
        query = normalize_name_for_matching(name)
        if not query or not self._choices:
            return []

        matches = process.extract(
            query,
            self._choices,
            scorer=fuzz.WRatio,
            limit=limit,
            score_cutoff=min_score,
        )
        return [
            Suggestion(entity_slug=slug, name=self._names[slug], score=score)
            for _, score, slug in matches
        ]


def find_unresolved_mentions(
    entities: list[EntityProfile], min_score: int = 85, limit: int = 3
) -> list[UnresolvedMention]:
    """List every unresolved connection with fuzzy suggestions.

    Args:
        entities: Resolved entity collection
        min_score: Minimum suggestion score
        limit: Maximum suggestions per mention

    Returns:
        One entry per unresolved connection, in entity order
    """
    index = SuggestionIndex(entities)
    mentions = []
    for entity in entities:
        for connection in entity.connections:
            if connection.resolved:
                continue
            mentions.append(
                UnresolvedMention(
                    source_slug=entity.slug,
                    target_name=connection.target_name,
                    relationship=connection.relationship,
                    suggestions=[
                        s
                        for s in index.suggest(connection.target_name, min_score, limit)
                        if s.entity_slug != entity.slug
                    ],
                )
            )
    return mentions
