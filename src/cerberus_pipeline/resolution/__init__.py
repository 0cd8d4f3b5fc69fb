"""Entity resolution module.

Links free-text entity mentions to canonical entity slugs and suggests
candidates for mentions that stay unresolved.
"""

from .resolver import (
    CollisionPolicy,
    EntityResolver,
    NameIndex,
    ResolutionStats,
    resolve_connections,
)
from .suggest import (
    Suggestion,
    SuggestionIndex,
    UnresolvedMention,
    find_unresolved_mentions,
)

__all__ = [
    "CollisionPolicy",
    "EntityResolver",
    "NameIndex",
    "ResolutionStats",
    "resolve_connections",
    "Suggestion",
    "SuggestionIndex",
    "UnresolvedMention",
    "find_unresolved_mentions",
]
