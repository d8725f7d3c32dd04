"""Abstract base geocoder interface and the geocoder error hierarchy."""

from abc import ABC, abstractmethod
from typing import Any

from locationiq_geocoder.lib.geocoder.address import Address
from locationiq_geocoder.lib.geocoder.query import GeocodeQuery, ReverseQuery


class GeocoderError(Exception):
    """Base class for all errors raised by geocoder providers."""


class CredentialsError(GeocoderError):
    """Raised when a provider is constructed without usable credentials.

    Args:
        provider_name: Name of the provider that rejected the credentials.
        message: Human-readable error description.
    """

    def __init__(self, provider_name: str, message: str = "No API key provided.") -> None:
        self.provider_name = provider_name
        self.message = message
        super().__init__(f"{provider_name}: {message}")


class InvalidServerResponse(GeocoderError):
    """Raised when a provider returns a body that breaks its response contract.

    Args:
        url: The request URL that produced the invalid response.
        message: Optional detail appended to the error text.
    """

    def __init__(self, url: str, message: str | None = None) -> None:
        self.url = url
        self.message = message
        text = f'The geocoder server returned an invalid response for query "{url}".'
        if message:
            text = f"{text} {message}"
        super().__init__(text)

    @classmethod
    def create(cls, url: str) -> "InvalidServerResponse":
        """Build the error for the given request URL."""
        return cls(url)


class MissingFieldError(GeocoderError):
    """Raised when a matched place lacks a field the address record requires.

    Args:
        field: Dotted path of the missing upstream field (e.g. ``address.country``).
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Required field {field!r} missing from geocoder result")


class BaseGeocoder(ABC):
    """Abstract geocoder interface. All providers must implement this."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this geocoder provider."""

    @property
    def requires_api_key(self) -> bool:
        """Whether this provider requires an API key to function."""
        return False

    @property
    def is_configured(self) -> bool:
        """Whether this provider has all required configuration (e.g., API keys)."""
        return True

    @abstractmethod
    def geocode_query(self, query: GeocodeQuery) -> list[Address]:
        """Resolve free-form address text to address records.

        Args:
            query: Forward geocoding query.

        Returns:
            Matching records in provider order, possibly empty.
        """

    @abstractmethod
    def reverse_query(self, query: ReverseQuery) -> list[Address]:
        """Resolve a coordinate pair to address records.

        Args:
            query: Reverse geocoding query.

        Returns:
            Matching records, possibly empty.
        """

    def geocode(self, text: str, limit: int | None = None, locale: str | None = None) -> list[Address]:
        """Convenience wrapper building a GeocodeQuery from plain arguments."""
        query = GeocodeQuery(text=text, locale=locale)
        if limit is not None:
            query = query.with_limit(limit)
        return self.geocode_query(query)

    def reverse(self, latitude: float, longitude: float, locale: str | None = None, **data: Any) -> list[Address]:
        """Convenience wrapper building a ReverseQuery from plain arguments.

        Extra keyword arguments become provider hints (e.g. ``zoom=10``).
        """
        query = ReverseQuery.from_coordinates(latitude, longitude, locale=locale)
        for key, value in data.items():
            query = query.with_data(key, value)
        return self.reverse_query(query)
