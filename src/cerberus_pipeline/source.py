"""Content sources for the Cerberus pipeline.

A content source hands raw markdown to the pipeline. The layout it
exposes is the content repository's:

    countries/<slug>/corruption-news.md
    countries/<slug>/legislative-changes.md
    countries/<slug>/entities/<type-dir>/<file>.md
    focuspoints/<slug>/plan.md (+ findings, timeline, entities, sources)
    focuspoints/<slug>/attachments/*

Every document is returned cleaned: emoji stripped and whitespace trimmed.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .logging import get_context_logger
from .models.base import EntityType
from .models.focuspoints import Attachment
from .parsing.entity import ENTITY_DIR_TYPES

logger = get_context_logger(__name__)

EMOJI_PATTERN = re.compile("[\U0001F600-\U0001F9FF]")

COUNTRY_DOSSIER_FILENAME = "corruption-news.md"
LEGISLATION_FILENAME = "legislative-changes.md"
README_FILENAME = "readme.md"

FOCUSPOINT_DOCUMENTS = ("plan", "findings", "timeline", "entities", "sources")
ATTACHMENTS_DIRNAME = "attachments"


def clean_document(text: str) -> str:
    """Strip emoji and surrounding whitespace from a fetched document."""
    return EMOJI_PATTERN.sub("", text).strip()


def entity_type_for_dir(dir_name: str) -> EntityType:
    """Entity type stored in a directory under entities/; unknown dirs hold individuals."""
    return ENTITY_DIR_TYPES.get(dir_name, EntityType.INDIVIDUAL)


@dataclass
class EntityDocument:
    """One entity markdown file and where it was found."""

    entity_type: EntityType
    file_stem: str
    content: str

    @property
    def slug(self) -> str:
        return f"{self.entity_type.value}/{self.file_stem}"


class ContentSource(ABC):
    """Abstract provider of content-repository documents.

    Missing documents are returned as None (or an empty iteration), never
    raised: an absent dossier or follow-up file is normal.
    """

    @abstractmethod
    def country_dossier(self, country_slug: str) -> str | None:
        """Return the corruption dossier of a country."""
        ...

    @abstractmethod
    def entity_documents(self, country_slug: str) -> Iterator[EntityDocument]:
        """Yield every entity profile filed under a country."""
        ...

    @abstractmethod
    def legislation_document(self, country_slug: str) -> str | None:
        """Return the legislative-changes file of a country."""
        ...

    @abstractmethod
    def focuspoint_slugs(self) -> list[str]:
        """Return the slugs of every submitted lead."""
        ...

    @abstractmethod
    def focuspoint_document(self, slug: str, name: str) -> str | None:
        """Return one of a lead's documents (plan, findings, ...)."""
        ...

    @abstractmethod
    def focuspoint_attachments(self, slug: str) -> list[Attachment] | None:
        """Return a lead's attachment files, or None without an attachments dir."""
        ...


class LocalContentSource(ContentSource):
    """Reads a checked-out copy of the content repository."""

    def __init__(self, root: Path | str):
        """Initialize the source.

        Args:
            root: Directory holding countries/ and focuspoints/

        Raises:
            FileNotFoundError: If root is not a directory
        """
        self.root = Path(root)
        if not self.root.is_dir():
            raise FileNotFoundError(f"Content root not found: {self.root}")

    @property
    def countries_dir(self) -> Path:
        return self.root / "countries"

    @property
    def focuspoints_dir(self) -> Path:
        return self.root / "focuspoints"

    def _read(self, path: Path) -> str | None:
        if not path.is_file():
            return None
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(
                f"Could not read {path}: {e}",
                extra={"path": str(path), "error": str(e)},
            )
            return None
        return clean_document(content)

    def country_dossier(self, country_slug: str) -> str | None:
        country_dir = self.countries_dir / country_slug
        if not country_dir.is_dir():
            return None

        dossier = country_dir / COUNTRY_DOSSIER_FILENAME
        if dossier.is_file():
            return self._read(dossier)

        # Fall back to the first other markdown file in the directory
        for path in sorted(country_dir.glob("*.md")):
            if path.name.lower() in (README_FILENAME, LEGISLATION_FILENAME):
                continue
            logger.info(
                f"{country_slug}: using {path.name} (no {COUNTRY_DOSSIER_FILENAME})",
                extra={"country_slug": country_slug, "filename": path.name},
            )
            return self._read(path)

        return None

    def entity_documents(self, country_slug: str) -> Iterator[EntityDocument]:
        entities_dir = self.countries_dir / country_slug / "entities"
        if not entities_dir.is_dir():
            return

        for type_dir in sorted(p for p in entities_dir.iterdir() if p.is_dir()):
            entity_type = entity_type_for_dir(type_dir.name)
            for path in sorted(type_dir.glob("*.md")):
                if path.name.lower() == README_FILENAME:
                    continue
                content = self._read(path)
                if not content:
                    continue
                yield EntityDocument(
                    entity_type=entity_type, file_stem=path.stem, content=content
                )

    def legislation_document(self, country_slug: str) -> str | None:
        return self._read(self.countries_dir / country_slug / LEGISLATION_FILENAME)

    def focuspoint_slugs(self) -> list[str]:
        if not self.focuspoints_dir.is_dir():
            return []
        return sorted(p.name for p in self.focuspoints_dir.iterdir() if p.is_dir())

    def focuspoint_document(self, slug: str, name: str) -> str | None:
        if name not in FOCUSPOINT_DOCUMENTS:
            raise ValueError(f"Unknown focuspoint document: {name}")
        return self._read(self.focuspoints_dir / slug / f"{name}.md")

    def focuspoint_attachments(self, slug: str) -> list[Attachment] | None:
        attachments_dir = self.focuspoints_dir / slug / ATTACHMENTS_DIRNAME
        if not attachments_dir.is_dir():
            return None
        return [
            Attachment(
                filename=path.name,
                path=path.relative_to(self.root).as_posix(),
                size_bytes=path.stat().st_size,
            )
            for path in sorted(attachments_dir.iterdir())
            if path.is_file()
        ]
