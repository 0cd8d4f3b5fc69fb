"""Unit tests for the cross-document entity resolver.

Tests exact and normalized lookup, collision policies, idempotence and
resolution of legislation and FocusPoint references.

Run with: pytest tests/unit/resolution/test_resolver.py -v
"""

import logging

from cerberus_pipeline.models.entities import Connection, EntityProfile
from cerberus_pipeline.models.focuspoints import EntityRef, FocusPointRecord
from cerberus_pipeline.models.legislation import (
    CountryLegislation,
    LegislationEntry,
    LinkedEntityRef,
)
from cerberus_pipeline.resolution.resolver import (
    CollisionPolicy,
    EntityResolver,
    NameIndex,
    resolve_connections,
)


def make_entity(slug: str, name: str, *connections: str) -> EntityProfile:
    return EntityProfile(
        slug=slug,
        type="individual",
        name=name,
        country_slug="austria",
        connections=[
            Connection(target_name=target, relationship="associate") for target in connections
        ],
    )


class TestNameIndex:
    """Tests for the lookup tables."""

    def test_exact_before_normalized(self):
        """Test that an exact hit wins over a normalized one."""
        index = NameIndex(
            [
                make_entity("individual/doe-jane", "Jane Doe"),
                make_entity("individual/doe-jane-2", "Jane  Doe"),
            ]
        )

        assert index.lookup("Jane Doe") == "individual/doe-jane"
        assert index.lookup("Jane  Doe") == "individual/doe-jane-2"

    def test_normalized_collision_last_wins(self):
        """Test last-write-wins on a shared normalized key."""
        index = NameIndex(
            [
                make_entity("individual/doe-jane", "Jane Doe"),
                make_entity("individual/doe-jane-2", "Jane  Doe"),
            ]
        )

        assert index.lookup("jane doe") == "individual/doe-jane-2"

    def test_normalized_collision_first_policy(self):
        """Test that the first policy keeps the earlier entity."""
        index = NameIndex(
            [
                make_entity("individual/doe-jane", "Jane Doe"),
                make_entity("individual/doe-jane-2", "Jane  Doe"),
            ],
            policy=CollisionPolicy.FIRST,
        )

        assert index.lookup("jane doe") == "individual/doe-jane"

    def test_collision_is_logged(self, caplog):
        """Test that collisions are reported at warning level."""
        with caplog.at_level(logging.WARNING, logger="cerberus_pipeline.resolution"):
            NameIndex(
                [
                    make_entity("individual/doe-jane", "Jane Doe"),
                    make_entity("individual/doe-jane-2", "Jane  Doe"),
                ]
            )

        assert any("jane doe" in record.getMessage() for record in caplog.records)

    def test_miss_and_empty_names(self):
        """Test misses and names that normalize to nothing."""
        index = NameIndex([make_entity("company/x", "1234")])

        assert index.lookup("Unknown Person") is None
        assert index.lookup("") is None
        assert index.lookup("5678") is None
        assert index.lookup("1234") == "company/x"


class TestResolveConnections:
    """Tests for connection resolution."""

    def test_shared_normalized_name_scenario(self):
        """Test that a normalized mention resolves to the last inserted entity."""
        source = make_entity("individual/roe-john", "John Roe", "jane doe")
        entities = [
            make_entity("individual/doe-jane", "Jane Doe"),
            make_entity("individual/doe-jane-2", "Jane  Doe"),
            source,
        ]

        resolve_connections(entities)

        assert source.connections[0].resolved is True
        assert source.connections[0].target_slug == "individual/doe-jane-2"

    def test_fixture_collection(self, entity_collection):
        """Test resolution across the three fixture profiles."""
        stats = resolve_connections(entity_collection)

        schmid, jane, kurz = entity_collection
        assert [(c.target_name, c.target_slug, c.resolved) for c in schmid.connections] == [
            ("Jane Doe", "individual/doe-jane", True),
            ("Sebastian Kurz", "individual/kurz-sebastian", True),
            ("Hans Peter", "", False),
            ("Kurz Sebastian", "individual/kurz-sebastian", True),
        ]
        assert jane.connections[0].target_slug == "individual/schmid-thomas"
        assert kurz.connections[0].target_slug == "individual/schmid-thomas"

        assert stats.total == 6
        assert stats.resolved == 5
        assert stats.newly_resolved == 4
        assert stats.unresolved == 1

    def test_idempotent(self, entity_collection):
        """Test that a second pass changes nothing."""
        resolve_connections(entity_collection)
        first = [entity.model_dump() for entity in entity_collection]

        stats = resolve_connections(entity_collection)

        assert [entity.model_dump() for entity in entity_collection] == first
        assert stats.newly_resolved == 0

    def test_resolved_connections_untouched(self):
        """Test that pre-resolved connections keep their slug."""
        entity = make_entity("individual/a", "Alpha Person")
        entity.connections.append(
            Connection(
                target_name="Alpha Person",
                target_slug="individual/elsewhere",
                relationship="cross-referenced",
                resolved=True,
            )
        )

        resolve_connections([entity])

        assert entity.connections[0].target_slug == "individual/elsewhere"

    def test_growing_entity_set_resolves_more(self):
        """Test that a re-run against more entities resolves earlier misses."""
        source = make_entity("individual/a", "Alpha Person", "Beta Person")
        resolve_connections([source])
        assert source.connections[0].resolved is False

        resolve_connections([source, make_entity("individual/b", "Beta Person")])

        assert source.connections[0].resolved is True
        assert source.connections[0].target_slug == "individual/b"


class TestResolveReferences:
    """Tests for legislation and FocusPoint references."""

    def test_linked_entities(self, entity_collection):
        """Test legislation linked entity resolution."""
        country = CountryLegislation(
            country_slug="austria",
            country_name="Austria",
            iso_a2="AT",
            entries=[
                LegislationEntry(
                    id="austria/act",
                    title="Act",
                    linked_entities=[
                        LinkedEntityRef(display_name="thomas  schmid"),
                        LinkedEntityRef(display_name="Nobody Known"),
                    ],
                )
            ],
        )

        stats = EntityResolver(entity_collection).resolve_linked_entities([country])

        refs = country.entries[0].linked_entities
        assert refs[0].entity_slug == "individual/schmid-thomas"
        assert refs[1].entity_slug is None
        assert (stats.total, stats.resolved) == (2, 1)

    def test_focuspoint_entities(self, entity_collection):
        """Test FocusPoint linked entity resolution."""
        focuspoint = FocusPointRecord(
            slug="lead",
            linked_entities=[EntityRef(display_name="Jane Doe", role="consultant")],
        )

        EntityResolver(entity_collection).resolve_focuspoint_entities([focuspoint])

        assert focuspoint.linked_entities[0].entity_slug == "individual/doe-jane"
        assert focuspoint.linked_entities[0].role == "consultant"
