"""Field heuristics shared by all document parsers.

Small pure functions over extracted text:
- metadata lines of the form ``**Key:** value``
- keyword classifiers for case, entity, legislation and lead status
- initials, date ranges, slugs and name normalization

The classifier trigger lists are ordered; the first matching status wins.
"""

import re

from ..models.base import (
    CaseStatus,
    EntityStatus,
    FocusPointStatus,
    LegislationImpact,
    LegislationStatus,
)

# =============================================================================
# Classifier triggers
# =============================================================================

CASE_STATUS_TRIGGERS: tuple[tuple[CaseStatus, tuple[str, ...]], ...] = (
    (CaseStatus.ONGOING, ("ongoing", "active", "pending", "open")),
    (CaseStatus.CONVICTED, ("convicted", "conviction", "sentenced", "guilty")),
    (
        CaseStatus.INVESTIGATION,
        ("investigation", "investigating", "under investigation", "indicted"),
    ),
    (CaseStatus.EXPOSED, ("exposed", "revealed", "uncovered", "leaked")),
    (CaseStatus.RESOLVED, ("resolved", "concluded", "closed", "settled")),
    (CaseStatus.ACQUITTED, ("acquitted", "dismissed", "dropped")),
)

ENTITY_STATUS_TRIGGERS: tuple[tuple[EntityStatus, tuple[str, ...]], ...] = (
    (EntityStatus.CONVICTED, ("convicted",)),
    (EntityStatus.ON_TRIAL, ("on trial", "on-trial")),
    (EntityStatus.UNDER_INVESTIGATION, ("under investigation",)),
    (EntityStatus.SANCTIONED, ("sanctioned",)),
    (EntityStatus.EXPOSED, ("exposed",)),
    (EntityStatus.ACQUITTED, ("acquitted",)),
    (EntityStatus.ACTIVE, ("active",)),
    (EntityStatus.DISSOLVED, ("dissolved",)),
)

LEGISLATION_STATUS_TRIGGERS: tuple[tuple[LegislationStatus, tuple[str, ...]], ...] = (
    (LegislationStatus.ENACTED, ("enacted", "passed", "in force")),
    (LegislationStatus.PROPOSED, ("proposed", "draft", "pending")),
    (LegislationStatus.IN_COMMITTEE, ("committee", "in-committee", "review")),
    (LegislationStatus.VETOED, ("vetoed", "rejected")),
    (LegislationStatus.REPEALED, ("repealed", "revoked")),
    (LegislationStatus.AMENDED, ("amended", "modified")),
    (LegislationStatus.STALLED, ("stalled", "delayed", "suspended")),
)

IMPACT_TRIGGERS: tuple[tuple[LegislationImpact, tuple[str, ...]], ...] = (
    (LegislationImpact.HIGH, ("high", "major", "significant")),
    (LegislationImpact.LOW, ("low", "minor", "minimal")),
)

FOCUSPOINT_STATUS_TRIGGERS: tuple[tuple[FocusPointStatus, tuple[str, ...]], ...] = (
    (FocusPointStatus.COMPLETED, ("completed",)),
    (FocusPointStatus.FINDINGS_AVAILABLE, ("findings",)),
    (FocusPointStatus.INVESTIGATING, ("investigating",)),
    (FocusPointStatus.STALE, ("stale",)),
)

# =============================================================================
# Patterns
# =============================================================================

DATE_RANGE_PATTERNS = (
    re.compile(r"\b\d{4}\s*[-–]\s*\d{4}\b"),
    re.compile(r"\b\d{4}\s*[-–]\s*present\b", re.IGNORECASE),
    re.compile(
        r"\b(?:January|February|March|April|May|June|July|August|September"
        r"|October|November|December)\s+\d{4}\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:19|20)\d{2}\b"),
)

SLUG_MAX_LENGTH = 60

_ASTERISKS = re.compile(r"\*+")
_LIST_SEPARATORS = re.compile(r"[,;]")


def _classify(text: str, triggers, default):
    lower = (text or "").lower().strip()
    for status, keywords in triggers:
        if any(keyword in lower for keyword in keywords):
            return status
    return default


# =============================================================================
# Metadata
# =============================================================================


def strip_emphasis(text: str) -> str:
    """Remove residual ``*`` emphasis markers."""
    return _ASTERISKS.sub("", text)


def extract_meta_value(text: str, key: str) -> str | None:
    """Extract the value of a ``**Key:** value`` line.

    The key may be wrapped in up to two bold markers on either side and
    be followed by an optional colon. Matching is case-insensitive and
    line-based, so a paragraph holding several metadata lines can be
    queried once per key.

    Args:
        text: Extracted paragraph or list item text
        key: Metadata key, e.g. "Status" or "Last updated"

    Returns:
        The trimmed value without ``*`` markers, or None if absent
    """
    if not text:
        return None
    pattern = re.compile(
        r"^[ \t]*\*{0,2}" + re.escape(key) + r"(?![A-Za-z])\*{0,2}:?\*{0,2}[ \t]*(.+)$",
        re.IGNORECASE | re.MULTILINE,
    )
    match = pattern.search(text)
    if not match:
        return None
    value = strip_emphasis(match.group(1)).strip().lstrip(":").strip()
    return value or None


# =============================================================================
# Classifiers
# =============================================================================


def infer_case_status(text: str) -> CaseStatus:
    """Classify free text into a case status."""
    return _classify(text, CASE_STATUS_TRIGGERS, CaseStatus.UNKNOWN)


def infer_entity_status(text: str) -> EntityStatus:
    """Classify a profile ``Status`` value."""
    return _classify(text, ENTITY_STATUS_TRIGGERS, EntityStatus.UNKNOWN)


def infer_legislation_status(text: str) -> LegislationStatus:
    """Classify a legislation ``Status`` value; unmatched text is proposed."""
    return _classify(text, LEGISLATION_STATUS_TRIGGERS, LegislationStatus.PROPOSED)


def infer_impact(text: str) -> LegislationImpact:
    """Classify a legislation ``Impact`` value; unmatched text is medium."""
    return _classify(text, IMPACT_TRIGGERS, LegislationImpact.MEDIUM)


def infer_focuspoint_status(text: str) -> FocusPointStatus:
    """Classify a lead ``Status`` value; unmatched text is new."""
    return _classify(text, FOCUSPOINT_STATUS_TRIGGERS, FocusPointStatus.NEW)


# =============================================================================
# Names, dates and slugs
# =============================================================================


def derive_initials(name: str) -> str:
    """First letter of the first and last word, uppercased.

    Single-word names give one letter; empty names give "??".
    """
    parts = (name or "").split()
    if not parts:
        return "??"
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def extract_date_range(text: str) -> str | None:
    """Find the first date-like span in text.

    Tries a year range, an open-ended "YYYY-present" range, a month and
    year, then a bare year between 1900 and 2099.
    """
    if not text:
        return None
    for pattern in DATE_RANGE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


def generate_slug(title: str) -> str:
    """URL-safe slug: lowercase ``[a-z0-9-]``, single hyphens, max 60 chars."""
    slug = (title or "").lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug.strip())
    slug = re.sub(r"-+", "-", slug)
    return slug[:SLUG_MAX_LENGTH].strip("-")


def normalize_name_for_matching(name: str) -> str:
    """Lowercase letters and single spaces only, for name comparison."""
    normalized = re.sub(r"[^a-z\s]", "", (name or "").lower())
    return re.sub(r"\s+", " ", normalized).strip()


def split_list(text: str) -> list[str]:
    """Split a comma or semicolon separated value into trimmed items."""
    return [item.strip() for item in _LIST_SEPARATORS.split(text or "") if item.strip()]
