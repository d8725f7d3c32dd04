"""Immutable query objects passed to geocoder providers."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Self

from locationiq_geocoder.lib.geocoder.address import Coordinates

DEFAULT_LIMIT = 5


def _with_item(data: Mapping[str, Any], key: str, value: Any) -> Mapping[str, Any]:
    merged = dict(data)
    merged[key] = value
    return MappingProxyType(merged)


@dataclass(frozen=True)
class GeocodeQuery:
    """Forward geocoding request: free-form text to addresses."""

    text: str
    limit: int = DEFAULT_LIMIT
    locale: str | None = None
    data: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), compare=False)

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            msg = "Geocode query text must not be empty"
            raise ValueError(msg)
        if self.limit < 1:
            msg = f"limit must be >= 1, got {self.limit}"
            raise ValueError(msg)

    def with_limit(self, limit: int) -> Self:
        return replace(self, limit=limit)

    def with_locale(self, locale: str | None) -> Self:
        return replace(self, locale=locale)

    def with_data(self, key: str, value: Any) -> Self:
        return replace(self, data=_with_item(self.data, key, value))

    def get_data(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


@dataclass(frozen=True)
class ReverseQuery:
    """Reverse geocoding request: coordinates to addresses.

    Provider-specific hints travel in ``data``; LocationIQ reads ``zoom``.
    """

    coordinates: Coordinates
    limit: int = DEFAULT_LIMIT
    locale: str | None = None
    data: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), compare=False)

    def __post_init__(self) -> None:
        if self.limit < 1:
            msg = f"limit must be >= 1, got {self.limit}"
            raise ValueError(msg)

    @classmethod
    def from_coordinates(cls, latitude: float, longitude: float, locale: str | None = None) -> Self:
        return cls(coordinates=Coordinates(latitude, longitude), locale=locale)

    def with_limit(self, limit: int) -> Self:
        return replace(self, limit=limit)

    def with_locale(self, locale: str | None) -> Self:
        return replace(self, locale=locale)

    def with_data(self, key: str, value: Any) -> Self:
        return replace(self, data=_with_item(self.data, key, value))

    def get_data(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)
