"""Geocoder library — LocationIQ forward and reverse geocoding.

Public API:
    - BaseGeocoder: Abstract provider interface
    - LocationIqGeocoder: LocationIQ provider
    - GeocodeQuery / ReverseQuery: Immutable query objects
    - Address / LocationIqAddress: Immutable result records
    - AddressBuilder: Accumulates fields and builds result records
    - GeocoderError, CredentialsError, InvalidServerResponse, MissingFieldError
    - get_geocoder: Provider factory/registry
    - get_configured_geocoder: Build the provider from application settings
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from locationiq_geocoder.lib.geocoder.address import (
    Address,
    AddressBuilder,
    AdminLevel,
    Bounds,
    Coordinates,
    Country,
    LocationIqAddress,
)
from locationiq_geocoder.lib.geocoder.base import (
    BaseGeocoder,
    CredentialsError,
    GeocoderError,
    InvalidServerResponse,
    MissingFieldError,
)
from locationiq_geocoder.lib.geocoder.locationiq import LocationIqGeocoder
from locationiq_geocoder.lib.geocoder.query import GeocodeQuery, ReverseQuery

if TYPE_CHECKING:
    import httpx

    from locationiq_geocoder.core.config import Settings

# Provider registry — all known providers
_PROVIDERS: dict[str, type[BaseGeocoder]] = {
    "locationiq": LocationIqGeocoder,
}


def get_available_providers() -> list[str]:
    """Return the names of all registered geocoder providers.

    Returns:
        Sorted list of provider name strings.
    """
    return sorted(_PROVIDERS.keys())


def get_geocoder(provider: str = "locationiq", **kwargs: Any) -> BaseGeocoder:
    """Get a geocoder instance by provider name.

    Args:
        provider: Provider name (e.g., "locationiq").
        **kwargs: Arguments forwarded to the provider constructor
            (e.g., ``api_key="..."``).

    Returns:
        An instance of the requested geocoder provider.

    Raises:
        ValueError: If the provider is not registered.
        CredentialsError: If the provider rejects the supplied credentials.
    """
    cls = _PROVIDERS.get(provider)
    if cls is None:
        msg = f"Unknown geocoder provider: {provider!r}. Available: {list(_PROVIDERS.keys())}"
        raise ValueError(msg)
    return cls(**kwargs)


def get_configured_geocoder(settings: Settings, client: httpx.Client | None = None) -> LocationIqGeocoder:
    """Build a LocationIqGeocoder from application settings.

    Args:
        settings: Application settings.
        client: Optional transport to inject instead of per-request clients.

    Raises:
        CredentialsError: If ``LOCATIONIQ_API_KEY`` is not set.
    """
    return LocationIqGeocoder(
        settings.locationiq_api_key,
        extra_tags=settings.locationiq_extra_tags,
        name_details=settings.locationiq_name_details,
        base_url=settings.locationiq_base_url,
        timeout=settings.locationiq_timeout,
        client=client,
    )


__all__ = [
    "Address",
    "AddressBuilder",
    "AdminLevel",
    "BaseGeocoder",
    "Bounds",
    "Coordinates",
    "Country",
    "CredentialsError",
    "GeocodeQuery",
    "GeocoderError",
    "InvalidServerResponse",
    "LocationIqAddress",
    "LocationIqGeocoder",
    "MissingFieldError",
    "ReverseQuery",
    "get_available_providers",
    "get_configured_geocoder",
    "get_geocoder",
]
