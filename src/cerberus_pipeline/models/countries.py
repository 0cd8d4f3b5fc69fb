"""Registry of the countries the content repository covers."""

from typing import NamedTuple


class Country(NamedTuple):
    """A covered country."""

    slug: str
    name: str
    iso_a2: str


# All 27 EU member states. Greece uses the Eurostat code EL rather than GR.
EU_COUNTRIES: dict[str, Country] = {
    c.slug: c
    for c in (
        Country("austria", "Austria", "AT"),
        Country("belgium", "Belgium", "BE"),
        Country("bulgaria", "Bulgaria", "BG"),
        Country("croatia", "Croatia", "HR"),
        Country("cyprus", "Cyprus", "CY"),
        Country("czechia", "Czechia", "CZ"),
        Country("denmark", "Denmark", "DK"),
        Country("estonia", "Estonia", "EE"),
        Country("finland", "Finland", "FI"),
        Country("france", "France", "FR"),
        Country("germany", "Germany", "DE"),
        Country("greece", "Greece", "EL"),
        Country("hungary", "Hungary", "HU"),
        Country("ireland", "Ireland", "IE"),
        Country("italy", "Italy", "IT"),
        Country("latvia", "Latvia", "LV"),
        Country("lithuania", "Lithuania", "LT"),
        Country("luxembourg", "Luxembourg", "LU"),
        Country("malta", "Malta", "MT"),
        Country("netherlands", "Netherlands", "NL"),
        Country("poland", "Poland", "PL"),
        Country("portugal", "Portugal", "PT"),
        Country("romania", "Romania", "RO"),
        Country("slovakia", "Slovakia", "SK"),
        Country("slovenia", "Slovenia", "SI"),
        Country("spain", "Spain", "ES"),
        Country("sweden", "Sweden", "SE"),
    )
}
