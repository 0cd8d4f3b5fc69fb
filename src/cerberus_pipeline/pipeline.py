"""Dataset build pipeline.

Orchestrates the parsers, the resolver and the graph builder over a
content source and writes the four dashboard datasets.

Flow:
1. Countries: parse every dossier, sort by case count (descending)
2. Entities: parse every profile, resolve connections, build the graph
3. Legislation: parse every tracker, resolve linked entities
4. FocusPoints: assemble every lead, resolve linked entities, newest first

Legislation and FocusPoint resolution run against the entities of the
same run, or the persisted entity dataset when entities were not built.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .config import Settings, get_settings
from .graph import build_graph
from .logging import get_context_logger, log_document_parsed, log_document_skipped
from .models.cases import DashboardDataset
from .models.countries import EU_COUNTRIES
from .models.entities import EntityDataset, EntityProfile
from .models.focuspoints import FocusPointDataset
from .models.legislation import LegislationDataset
from .parsing.country import parse_country_markdown
from .parsing.entity import parse_entity_markdown
from .parsing.focuspoint import assemble_focuspoint
from .parsing.legislation import parse_legislation_markdown
from .resolution import EntityResolver
from .source import ContentSource, LocalContentSource
from .storage import (
    COUNTRY_DATASET_FILENAME,
    ENTITY_DATASET_FILENAME,
    FOCUSPOINT_DATASET_FILENAME,
    LEGISLATION_DATASET_FILENAME,
    load_dataset,
    write_dataset,
)

logger = get_context_logger(__name__)


@dataclass
class PipelineContext:
    """State shared by the build steps of one run."""

    settings: Settings
    source: ContentSource
    countries: DashboardDataset | None = None
    entities: EntityDataset | None = None
    legislation: LegislationDataset | None = None
    focuspoints: FocusPointDataset | None = None
    written: list[Path] = field(default_factory=list)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PipelineContext":
        """Create a context reading the local content tree from settings."""
        settings = settings or get_settings()
        return cls(settings=settings, source=LocalContentSource(settings.content_root))

    @property
    def output_dir(self) -> Path:
        return Path(self.settings.output_dir)

    def output_path(self, filename: str) -> Path:
        return self.output_dir / filename

    def existing(self, filename: str) -> Path | None:
        """Return the output file when it may be reused instead of rebuilt."""
        path = self.output_path(filename)
        if self.settings.skip_existing and path.is_file():
            return path
        return None

    def reference_entities(self) -> list[EntityProfile]:
        """Entities to resolve mentions against.

        Uses this run's entities, else the persisted entity dataset.
        """
        if self.entities is not None:
            return self.entities.entities

        path = self.output_path(ENTITY_DATASET_FILENAME)
        if path.is_file():
            self.entities = load_dataset(path, EntityDataset)
            return self.entities.entities

        logger.info("No entity data available for linked entity resolution")
        return []

    def resolver(self, entities: list[EntityProfile] | None = None) -> EntityResolver:
        if entities is None:
            entities = self.reference_entities()
        return EntityResolver(entities, self.settings.resolver_collision_policy)


# =============================================================================
# Build steps
# =============================================================================


def build_country_dataset(ctx: PipelineContext) -> DashboardDataset:
    """Parse every country dossier."""
    existing = ctx.existing(COUNTRY_DATASET_FILENAME)
    if existing:
        logger.info(f"Reusing {existing}")
        ctx.countries = load_dataset(existing, DashboardDataset)
        return ctx.countries

    countries = []
    for slug, country in EU_COUNTRIES.items():
        markdown = ctx.source.country_dossier(slug)
        if not markdown:
            log_document_skipped("country", slug, "no dossier")
            continue
        record = parse_country_markdown(markdown, slug, country.name, country.iso_a2)
        log_document_parsed("country", slug, record.case_count)
        countries.append(record)

    countries.sort(key=lambda record: record.case_count, reverse=True)
    ctx.countries = DashboardDataset(countries=countries)
    return ctx.countries


def build_entity_dataset(ctx: PipelineContext) -> EntityDataset:
    """Parse every entity profile, resolve connections and build the graph."""
    existing = ctx.existing(ENTITY_DATASET_FILENAME)
    if existing:
        logger.info(f"Reusing {existing}")
        ctx.entities = load_dataset(existing, EntityDataset)
        return ctx.entities

    entities: list[EntityProfile] = []
    for slug, country in EU_COUNTRIES.items():
        count = 0
        for document in ctx.source.entity_documents(slug):
            entities.append(
                parse_entity_markdown(
                    document.content,
                    document.entity_type,
                    document.slug,
                    slug,
                    country.name,
                )
            )
            count += 1
        if count:
            log_document_parsed("entities", slug, count)

    # Resolution needs the complete collection
    ctx.resolver(entities).resolve_connections()
    graph = build_graph(entities)

    ctx.entities = EntityDataset(entities=entities, graph_data=graph)
    return ctx.entities


def build_legislation_dataset(ctx: PipelineContext) -> LegislationDataset:
    """Parse every legislation tracker and resolve its linked entities."""
    existing = ctx.existing(LEGISLATION_DATASET_FILENAME)
    if existing:
        logger.info(f"Reusing {existing}")
        ctx.legislation = load_dataset(existing, LegislationDataset)
        return ctx.legislation

    countries = []
    for slug, country in EU_COUNTRIES.items():
        markdown = ctx.source.legislation_document(slug)
        if not markdown:
            log_document_skipped("legislation", slug, "no legislative-changes file")
            continue
        legislation = parse_legislation_markdown(markdown, slug, country.name, country.iso_a2)
        log_document_parsed("legislation", slug, legislation.entry_count)
        countries.append(legislation)

    ctx.resolver().resolve_linked_entities(countries)

    ctx.legislation = LegislationDataset(countries=countries)
    return ctx.legislation


def build_focuspoint_dataset(ctx: PipelineContext) -> FocusPointDataset:
    """Assemble every lead, newest first, with resolved linked entities."""
    existing = ctx.existing(FOCUSPOINT_DATASET_FILENAME)
    if existing:
        logger.info(f"Reusing {existing}")
        ctx.focuspoints = load_dataset(existing, FocusPointDataset)
        return ctx.focuspoints

    focuspoints = []
    for slug in ctx.source.focuspoint_slugs():
        record = assemble_focuspoint(
            slug,
            ctx.source.focuspoint_document(slug, "plan"),
            findings=ctx.source.focuspoint_document(slug, "findings"),
            timeline=ctx.source.focuspoint_document(slug, "timeline"),
            entities=ctx.source.focuspoint_document(slug, "entities"),
            sources=ctx.source.focuspoint_document(slug, "sources"),
            attachments=ctx.source.focuspoint_attachments(slug),
        )
        if record is None:
            log_document_skipped("focuspoint", slug, "no plan")
            continue
        log_document_parsed("focuspoint", slug, len(record.findings))
        focuspoints.append(record)

    # Leads without a creation date go last
    focuspoints.sort(key=lambda record: record.created_at, reverse=True)

    if focuspoints:
        ctx.resolver().resolve_focuspoint_entities(focuspoints)

    ctx.focuspoints = FocusPointDataset(focuspoints=focuspoints)
    return ctx.focuspoints


# =============================================================================
# Orchestration
# =============================================================================

BUILD_TARGETS = ("countries", "entities", "legislation", "focuspoints")

_BUILDERS = {
    "countries": (build_country_dataset, COUNTRY_DATASET_FILENAME),
    "entities": (build_entity_dataset, ENTITY_DATASET_FILENAME),
    "legislation": (build_legislation_dataset, LEGISLATION_DATASET_FILENAME),
    "focuspoints": (build_focuspoint_dataset, FOCUSPOINT_DATASET_FILENAME),
}


def run_pipeline(
    ctx: PipelineContext, targets: tuple[str, ...] | list[str] = BUILD_TARGETS
) -> list[Path]:
    """Build and write the requested datasets.

    Targets always run in pipeline order so entities exist before the
    steps that resolve against them.

    Args:
        ctx: Pipeline context
        targets: Dataset names out of BUILD_TARGETS

    Returns:
        Paths of the written dataset files

    Raises:
        ValueError: If a target name is unknown
    """
    unknown = set(targets) - set(BUILD_TARGETS)
    if unknown:
        raise ValueError(f"Unknown build targets: {', '.join(sorted(unknown))}")

    written = []
    for target in BUILD_TARGETS:
        if target not in targets:
            continue
        builder, filename = _BUILDERS[target]
        if ctx.existing(filename):
            builder(ctx)
            continue
        dataset = builder(ctx)
        written.append(write_dataset(ctx.output_path(filename), dataset))

    ctx.written.extend(written)
    logger.info(
        f"Pipeline finished: {len(written)} datasets written",
        extra={"targets": list(targets), "output_dir": str(ctx.output_dir)},
    )
    return written
