"""Address value objects produced by geocoder providers.

``Address`` carries the provider-neutral fields (coordinates, bounds, street,
locality, admin levels, country). ``LocationIqAddress`` extends it with the
provenance metadata LocationIQ returns. All records are frozen; the
``with_*`` methods return a new record and never touch the original.
"""

import copy
import warnings
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Self, TypeVar


@dataclass(frozen=True)
class Coordinates:
    """A WGS84 latitude/longitude pair."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (-90 <= self.latitude <= 90):
            msg = f"latitude must be between -90 and 90, got {self.latitude}"
            raise ValueError(msg)
        if not (-180 <= self.longitude <= 180):
            msg = f"longitude must be between -180 and 180, got {self.longitude}"
            raise ValueError(msg)


@dataclass(frozen=True)
class Bounds:
    """Bounding box of a result."""

    south: float
    west: float
    north: float
    east: float

    def to_dict(self) -> dict[str, float]:
        return {"south": self.south, "west": self.west, "north": self.north, "east": self.east}


@dataclass(frozen=True)
class AdminLevel:
    """One rung of an administrative hierarchy (1 = state, 2 = county)."""

    level: int
    name: str
    code: str = ""

    def __post_init__(self) -> None:
        if self.level < 1:
            msg = f"admin level must be >= 1, got {self.level}"
            raise ValueError(msg)


@dataclass(frozen=True)
class Country:
    name: str | None = None
    code: str | None = None


_NO_BOUNDS: dict[str, float | None] = {"south": None, "west": None, "north": None, "east": None}


@dataclass(frozen=True)
class Address:
    """Provider-neutral geocoded address."""

    provided_by: str
    coordinates: Coordinates | None = None
    bounds: Bounds | None = None
    street_number: str | None = None
    street_name: str | None = None
    postal_code: str | None = None
    locality: str | None = None
    sub_locality: str | None = None
    admin_levels: tuple[AdminLevel, ...] = ()
    country: Country | None = None
    timezone: str | None = None

    @property
    def latitude(self) -> float | None:
        return self.coordinates.latitude if self.coordinates else None

    @property
    def longitude(self) -> float | None:
        return self.coordinates.longitude if self.coordinates else None

    @property
    def country_code(self) -> str | None:
        return self.country.code if self.country else None

    def admin_level(self, level: int) -> AdminLevel | None:
        """Return the admin level with the given number, if set."""
        for admin_level in self.admin_levels:
            if admin_level.level == level:
                return admin_level
        return None

    def to_dict(self) -> dict[str, Any]:
        """Flatten the record into a single mapping.

        Every key is present even when its value is unset; missing bounds
        are represented by four ``None`` entries.
        """
        return {
            "provided_by": self.provided_by,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "bounds": self.bounds.to_dict() if self.bounds else dict(_NO_BOUNDS),
            "street_number": self.street_number,
            "street_name": self.street_name,
            "postal_code": self.postal_code,
            "locality": self.locality,
            "sub_locality": self.sub_locality,
            "admin_levels": {
                level.level: {"name": level.name, "code": level.code, "level": level.level}
                for level in self.admin_levels
            },
            "country": self.country.name if self.country else None,
            "country_code": self.country_code,
            "timezone": self.timezone,
        }


def _freeze_mapping(value: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if value is None:
        return None
    return MappingProxyType(copy.deepcopy(dict(value)))


@dataclass(frozen=True)
class LocationIqAddress(Address):
    """Address record enriched with LocationIQ/Nominatim provenance fields."""

    attribution: str | None = None
    category: str | None = None
    display_name: str | None = None
    osm_id: int | None = None
    osm_type: str | None = None
    type: str | None = None
    extra_tags: Mapping[str, Any] | None = field(default=None, compare=False)
    name_details: Mapping[str, Any] | None = field(default=None, compare=False)

    def with_attribution(self, attribution: str | None) -> Self:
        return replace(self, attribution=attribution)

    def with_category(self, category: str | None) -> Self:
        return replace(self, category=category)

    def with_class(self, category: str | None) -> Self:
        """Deprecated alias of :meth:`with_category`."""
        warnings.warn("with_class() is deprecated, use with_category()", DeprecationWarning, stacklevel=2)
        return self.with_category(category)

    @property
    def class_(self) -> str | None:
        """Deprecated alias of :attr:`category`."""
        warnings.warn("class_ is deprecated, use category", DeprecationWarning, stacklevel=2)
        return self.category

    def with_display_name(self, display_name: str | None) -> Self:
        return replace(self, display_name=display_name)

    def with_osm_id(self, osm_id: int | None) -> Self:
        return replace(self, osm_id=osm_id)

    def with_osm_type(self, osm_type: str | None) -> Self:
        return replace(self, osm_type=osm_type)

    def with_type(self, type_: str | None) -> Self:
        return replace(self, type=type_)

    def with_extra_tags(self, extra_tags: Mapping[str, Any] | None) -> Self:
        """Return a copy carrying a read-only snapshot of ``extra_tags``."""
        return replace(self, extra_tags=_freeze_mapping(extra_tags))

    def with_name_details(self, name_details: Mapping[str, Any] | None) -> Self:
        """Return a copy carrying a read-only snapshot of ``name_details``."""
        return replace(self, name_details=_freeze_mapping(name_details))

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "attribution": self.attribution,
                "category": self.category,
                "display_name": self.display_name,
                "osm_id": self.osm_id,
                "osm_type": self.osm_type,
                "type": self.type,
                "extra_tags": dict(self.extra_tags) if self.extra_tags is not None else None,
                "name_details": dict(self.name_details) if self.name_details is not None else None,
            }
        )
        return data


AddressT = TypeVar("AddressT", bound=Address)


class AddressBuilder:
    """Mutable accumulator for address fields, finalized with :meth:`build`.

    Args:
        provider_name: Value stored in the built record's ``provided_by``.
    """

    def __init__(self, provider_name: str) -> None:
        self._provider_name = provider_name
        self._coordinates: Coordinates | None = None
        self._bounds: Bounds | None = None
        self._admin_levels: dict[int, AdminLevel] = {}
        self._street_number: str | None = None
        self._street_name: str | None = None
        self._postal_code: str | None = None
        self._locality: str | None = None
        self._sub_locality: str | None = None
        self._country: str | None = None
        self._country_code: str | None = None
        self._timezone: str | None = None

    def set_coordinates(self, latitude: float | str | None, longitude: float | str | None) -> Self:
        if latitude is None or longitude is None:
            self._coordinates = None
        else:
            self._coordinates = Coordinates(float(latitude), float(longitude))
        return self

    def set_bounds(
        self,
        south: float | str | None,
        west: float | str | None,
        north: float | str | None,
        east: float | str | None,
    ) -> Self:
        """Set the bounding box; any missing side leaves the bounds unset."""
        sides = (south, west, north, east)
        if any(side is None for side in sides):
            self._bounds = None
        else:
            self._bounds = Bounds(*(float(side) for side in sides))  # type: ignore[arg-type]
        return self

    def add_admin_level(self, level: int, name: str, code: str = "") -> Self:
        self._admin_levels[level] = AdminLevel(level, name, code)
        return self

    def set_street_number(self, street_number: str | None) -> Self:
        self._street_number = street_number
        return self

    def set_street_name(self, street_name: str | None) -> Self:
        self._street_name = street_name
        return self

    def set_postal_code(self, postal_code: str | None) -> Self:
        self._postal_code = postal_code
        return self

    def set_locality(self, locality: str | None) -> Self:
        self._locality = locality
        return self

    def set_sub_locality(self, sub_locality: str | None) -> Self:
        self._sub_locality = sub_locality
        return self

    def set_country(self, country: str | None) -> Self:
        self._country = country
        return self

    def set_country_code(self, country_code: str | None) -> Self:
        self._country_code = country_code
        return self

    def set_timezone(self, timezone: str | None) -> Self:
        self._timezone = timezone
        return self

    def build(self, cls: type[AddressT] = Address) -> AddressT:  # type: ignore[assignment]
        """Create an immutable record of type ``cls`` from the collected fields."""
        country = None
        if self._country is not None or self._country_code is not None:
            country = Country(name=self._country, code=self._country_code)

        return cls(
            provided_by=self._provider_name,
            coordinates=self._coordinates,
            bounds=self._bounds,
            street_number=self._street_number,
            street_name=self._street_name,
            postal_code=self._postal_code,
            locality=self._locality,
            sub_locality=self._sub_locality,
            admin_levels=tuple(self._admin_levels[level] for level in sorted(self._admin_levels)),
            country=country,
            timezone=self._timezone,
        )
