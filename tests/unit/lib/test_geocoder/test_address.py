"""Unit tests for address value objects and the address builder."""

import dataclasses

import pytest

from locationiq_geocoder.lib.geocoder.address import (
    Address,
    AddressBuilder,
    AdminLevel,
    Bounds,
    Coordinates,
    LocationIqAddress,
)

_BASE_KEYS = {
    "provided_by",
    "latitude",
    "longitude",
    "bounds",
    "street_number",
    "street_name",
    "postal_code",
    "locality",
    "sub_locality",
    "admin_levels",
    "country",
    "country_code",
    "timezone",
}
_LOCATIONIQ_KEYS = _BASE_KEYS | {
    "attribution",
    "category",
    "display_name",
    "osm_id",
    "osm_type",
    "type",
    "extra_tags",
    "name_details",
}


class TestCoordinates:
    """Tests for coordinate validation."""

    def test_valid(self) -> None:
        coords = Coordinates(33.749, -84.388)
        assert coords.latitude == 33.749

    @pytest.mark.parametrize(("lat", "lon"), [(91.0, 0.0), (-91.0, 0.0), (0.0, 181.0), (0.0, -181.0)])
    def test_out_of_range(self, lat: float, lon: float) -> None:
        with pytest.raises(ValueError, match="must be between"):
            Coordinates(lat, lon)


class TestAddressBuilder:
    """Tests for AddressBuilder."""

    def test_build_defaults(self) -> None:
        address = AddressBuilder("locationiq").build()
        assert type(address) is Address
        assert address.provided_by == "locationiq"
        assert address.coordinates is None
        assert address.bounds is None
        assert address.admin_levels == ()
        assert address.country is None

    def test_build_subclass(self) -> None:
        address = AddressBuilder("locationiq").build(LocationIqAddress)
        assert isinstance(address, LocationIqAddress)
        assert address.attribution is None

    def test_string_coordinates_and_bounds(self) -> None:
        address = (
            AddressBuilder("locationiq")
            .set_coordinates("52.5", "13.4")
            .set_bounds("52.0", "13.0", "53.0", "14.0")
            .build()
        )
        assert address.coordinates == Coordinates(52.5, 13.4)
        assert address.bounds == Bounds(south=52.0, west=13.0, north=53.0, east=14.0)

    def test_partial_bounds_ignored(self) -> None:
        address = AddressBuilder("locationiq").set_bounds(1.0, None, 2.0, 3.0).build()
        assert address.bounds is None

    def test_admin_levels_sorted_by_level(self) -> None:
        address = AddressBuilder("x").add_admin_level(2, "County").add_admin_level(1, "State").build()
        assert address.admin_levels == (AdminLevel(1, "State"), AdminLevel(2, "County"))
        assert address.admin_level(2) == AdminLevel(2, "County")
        assert address.admin_level(3) is None

    def test_country_code_only(self) -> None:
        address = AddressBuilder("x").set_country_code("DE").build()
        assert address.country is not None
        assert address.country.name is None
        assert address.country_code == "DE"

    def test_invalid_admin_level(self) -> None:
        with pytest.raises(ValueError, match="admin level"):
            AddressBuilder("x").add_admin_level(0, "Nowhere")


class TestLocationIqAddressImmutability:
    """Tests for copy-on-write mutators."""

    def setup_method(self) -> None:
        self.address = AddressBuilder("locationiq").set_locality("Berlin").build(LocationIqAddress)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            self.address.locality = "Hamburg"  # type: ignore[misc]

    def test_with_returns_new_instance(self) -> None:
        updated = self.address.with_display_name("Berlin, Deutschland")
        assert updated is not self.address
        assert updated.display_name == "Berlin, Deutschland"
        assert self.address.display_name is None
        assert updated.locality == "Berlin"

    @pytest.mark.parametrize(
        ("method", "attr", "value"),
        [
            ("with_attribution", "attribution", "© LocationIQ"),
            ("with_category", "category", "boundary"),
            ("with_osm_id", "osm_id", 62422),
            ("with_osm_type", "osm_type", "relation"),
            ("with_type", "type", "administrative"),
        ],
    )
    def test_with_mutators(self, method: str, attr: str, value: object) -> None:
        updated = getattr(self.address, method)(value)
        assert getattr(updated, attr) == value
        assert getattr(self.address, attr) is None

    def test_extra_tags_snapshot_is_read_only(self) -> None:
        tags = {"wikidata": "Q64"}
        updated = self.address.with_extra_tags(tags)
        tags["wikidata"] = "changed"

        assert updated.extra_tags == {"wikidata": "Q64"}
        with pytest.raises(TypeError):
            updated.extra_tags["wikidata"] = "x"  # type: ignore[index]

    def test_name_details_cleared(self) -> None:
        updated = self.address.with_name_details({"name": "Berlin"}).with_name_details(None)
        assert updated.name_details is None

    def test_deprecated_class_aliases(self) -> None:
        with pytest.warns(DeprecationWarning):
            updated = self.address.with_class("place")
        assert updated.category == "place"
        with pytest.warns(DeprecationWarning):
            assert updated.class_ == "place"


class TestToDict:
    """Tests for flattening records into a mapping."""

    def test_empty_record_has_every_key(self) -> None:
        data = AddressBuilder("locationiq").build(LocationIqAddress).to_dict()

        assert set(data) == _LOCATIONIQ_KEYS
        assert data["bounds"] == {"south": None, "west": None, "north": None, "east": None}
        assert data["admin_levels"] == {}
        assert data["provided_by"] == "locationiq"
        assert all(data[key] is None for key in _LOCATIONIQ_KEYS - {"bounds", "admin_levels", "provided_by"})

    def test_base_record_keys(self) -> None:
        assert set(AddressBuilder("x").build().to_dict()) == _BASE_KEYS

    def test_populated_record(self) -> None:
        address = (
            AddressBuilder("locationiq")
            .set_coordinates(48.1, 11.5)
            .set_bounds(48.0, 11.4, 48.2, 11.6)
            .add_admin_level(1, "Bayern")
            .set_country("Deutschland")
            .set_country_code("DE")
            .build(LocationIqAddress)
            .with_osm_id(42)
            .with_extra_tags({"capital": "yes"})
        )
        data = address.to_dict()

        assert data["latitude"] == 48.1
        assert data["bounds"] == {"south": 48.0, "west": 11.4, "north": 48.2, "east": 11.6}
        assert data["admin_levels"] == {1: {"name": "Bayern", "code": "", "level": 1}}
        assert data["country"] == "Deutschland"
        assert data["country_code"] == "DE"
        assert data["osm_id"] == 42
        assert data["extra_tags"] == {"capital": "yes"}
        assert type(data["extra_tags"]) is dict
