"""LocationIQ geocoder provider.

Uses the LocationIQ Nominatim-compatible API
(https://docs.locationiq.com/reference/search) for forward and reverse
geocoding. Requires an API key.

Forward and reverse lookups deliberately fail differently: a malformed
search response is a server contract violation and raises
:class:`InvalidServerResponse`, while a reverse lookup that cannot be
resolved (malformed body or an ``error`` payload) is an ordinary outcome
and returns an empty list.
"""

import ipaddress
import json
from typing import Any
from urllib.parse import urlencode

import httpx
from loguru import logger
from pydantic import ValidationError

from locationiq_geocoder.lib.geocoder.address import AddressBuilder, LocationIqAddress
from locationiq_geocoder.lib.geocoder.base import (
    BaseGeocoder,
    CredentialsError,
    InvalidServerResponse,
    MissingFieldError,
)
from locationiq_geocoder.lib.geocoder.query import GeocodeQuery, ReverseQuery
from locationiq_geocoder.lib.geocoder.schema import Place, parse_place

DEFAULT_BASE_URL = "https://us1.locationiq.com/v1"
DEFAULT_TIMEOUT = 10.0
DEFAULT_ZOOM = 18
# Statuses meaning the key itself was refused, not that the lookup failed
_CREDENTIAL_STATUSES = (401, 403)

# Position in this list (1-based) is the admin level number
_ADMIN_LEVEL_FIELDS = ("state", "county")
# First non-empty wins
_LOCALITY_FIELDS = ("city", "town", "village", "hamlet")


def _flag(value: bool) -> int:
    return 1 if value else 0


def _is_ip_literal(text: str) -> bool:
    try:
        ipaddress.ip_address(text.strip())
    except ValueError:
        return False
    return True


class LocationIqGeocoder(BaseGeocoder):
    """LocationIQ geocoder provider.

    Args:
        api_key: LocationIQ access token. Must be non-empty.
        extra_tags: Request the ``extratags`` block on forward lookups.
        name_details: Request the ``namedetails`` block on forward lookups.
        base_url: API root, without trailing slash.
        timeout: Request timeout in seconds when no client is injected.
        client: Optional ``httpx.Client`` used as the transport. When omitted
            a short-lived client is opened per request.

    Raises:
        CredentialsError: If ``api_key`` is empty.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        extra_tags: bool = False,
        name_details: bool = False,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise CredentialsError("locationiq")

        self._api_key = api_key
        self._extra_tags = extra_tags
        self._name_details = name_details
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    @property
    def provider_name(self) -> str:
        return "locationiq"

    @property
    def requires_api_key(self) -> bool:
        return True

    def build_geocode_url(self, query: GeocodeQuery) -> str:
        """Build the search endpoint URL for a forward query."""
        params = {
            "key": self._api_key,
            "q": query.text,
            "format": "json",
            "addressdetails": 1,
            "limit": query.limit,
            "extratags": _flag(self._extra_tags),
            "namedetails": _flag(self._name_details),
        }
        return self._with_locale(f"{self._base_url}/search.php?{urlencode(params)}", query.locale)

    def build_reverse_url(self, query: ReverseQuery) -> str:
        """Build the reverse endpoint URL for a reverse query.

        The API key is sent here as well as on searches; LocationIQ
        refuses keyless reverse lookups.
        """
        params = {
            "key": self._api_key,
            "format": "json",
            "lat": query.coordinates.latitude,
            "lon": query.coordinates.longitude,
            "addressdetails": 1,
            "zoom": query.get_data("zoom", DEFAULT_ZOOM),
        }
        return self._with_locale(f"{self._base_url}/reverse?{urlencode(params)}", query.locale)

    @staticmethod
    def _with_locale(url: str, locale: str | None) -> str:
        if locale is None:
            return url
        return f"{url}&{urlencode({'accept-language': locale})}"

    def geocode_query(self, query: GeocodeQuery) -> list[LocationIqAddress]:
        """Geocode free-form text using the LocationIQ search endpoint.

        IP literals are sent upstream unchanged.

        Args:
            query: Forward geocoding query.

        Returns:
            One record per upstream result, in upstream order.

        Raises:
            InvalidServerResponse: If the body is not a JSON array or a result
                has the wrong shape or out-of-range coordinates.
            MissingFieldError: If a result lacks a required field.
            CredentialsError: If the API key is rejected (HTTP 401/403).
            httpx.HTTPError: On transport failures (not translated).
        """
        if _is_ip_literal(query.text):
            logger.debug("LocationIQ forward lookup received an IP literal, passing it through")

        url = self.build_geocode_url(query)
        content = self._execute(url, "search")

        try:
            data = json.loads(content)
        except ValueError as e:
            logger.warning("LocationIQ search returned a non-JSON body")
            raise InvalidServerResponse.create(url) from e

        if not isinstance(data, list):
            logger.warning(f"LocationIQ search returned {type(data).__name__} instead of a list")
            raise InvalidServerResponse.create(url)

        if not data:
            return []

        results: list[LocationIqAddress] = []
        for raw in data:
            try:
                place = parse_place(raw)
            except ValidationError as e:
                logger.warning(f"Failed to parse LocationIQ search result: {e.error_count()} error(s)")
                raise InvalidServerResponse(url, "Malformed result item.") from e
            try:
                results.append(self._place_to_address(place, reverse=False))
            except ValueError as e:
                logger.warning(f"LocationIQ search result out of range: {e}")
                raise InvalidServerResponse(url, "Result coordinates out of range.") from e

        logger.debug(f"LocationIQ search returned {len(results)} result(s)")
        return results

    def reverse_query(self, query: ReverseQuery) -> list[LocationIqAddress]:
        """Reverse geocode coordinates using the LocationIQ reverse endpoint.

        Args:
            query: Reverse geocoding query. ``zoom`` data defaults to 18.

        Returns:
            A single-element list, or an empty list when the coordinates
            could not be resolved.

        Raises:
            MissingFieldError: If the result lacks a required field.
            CredentialsError: If the API key is rejected (HTTP 401/403).
            httpx.HTTPError: On transport failures (not translated).
        """
        url = self.build_reverse_url(query)
        content = self._execute(url, "reverse")

        try:
            data = json.loads(content)
        except ValueError:
            logger.warning("LocationIQ reverse returned a non-JSON body")
            return []

        if not isinstance(data, dict) or not data:
            return []

        if "error" in data:
            logger.warning(f"LocationIQ reverse returned an error: {data['error']}")
            return []

        try:
            place = parse_place(data)
        except ValidationError as e:
            logger.warning(f"Failed to parse LocationIQ reverse result: {e.error_count()} error(s)")
            return []

        try:
            return [self._place_to_address(place, reverse=True)]
        except ValueError as e:
            logger.warning(f"LocationIQ reverse result out of range: {e}")
            return []

    def _execute(self, url: str, endpoint: str) -> str:
        """Send a GET request and return the response body text.

        The body is returned for any status; LocationIQ reports "no match"
        as HTTP 404 with an ``error`` payload, which the callers interpret.

        Raises:
            CredentialsError: If the API key is rejected (HTTP 401/403).
            httpx.HTTPError: On network failures (not translated).
        """
        logger.debug(f"LocationIQ {endpoint} request")
        try:
            if self._client is not None:
                response = self._client.get(url)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.get(url)
        except httpx.HTTPError:
            logger.warning(f"LocationIQ {endpoint} transport error")
            raise

        if response.status_code in _CREDENTIAL_STATUSES:
            logger.warning(f"LocationIQ {endpoint} rejected the API key (HTTP {response.status_code})")
            raise CredentialsError(self.provider_name, f"API key rejected (HTTP {response.status_code})")
        if response.is_error:
            logger.debug(f"LocationIQ {endpoint} returned HTTP {response.status_code}")
        return response.text

    def _place_to_address(self, place: Place, *, reverse: bool) -> LocationIqAddress:
        """Map a validated place into a LocationIqAddress.

        ``type``, ``category``, ``extratags`` and ``namedetails`` are only
        carried over for forward results.

        Raises:
            MissingFieldError: If coordinates or country fields are absent.
        """
        address = place.address
        builder = AddressBuilder(self.provider_name)

        for level, field_name in enumerate(_ADMIN_LEVEL_FIELDS, start=1):
            name = getattr(address, field_name)
            if name is not None:
                builder.add_admin_level(level, name, "")

        postal_code = address.postcode
        if postal_code:
            postal_code = postal_code.split(";")[0]
        builder.set_postal_code(postal_code)

        for field_name in _LOCALITY_FIELDS:
            locality = getattr(address, field_name)
            if locality:
                builder.set_locality(locality)
                break

        builder.set_street_name(address.road if address.road is not None else address.pedestrian)
        builder.set_street_number(address.house_number)
        builder.set_sub_locality(address.suburb)

        builder.set_country(_require(address.country, "address.country"))
        builder.set_country_code(_require(address.country_code, "address.country_code").upper())

        builder.set_coordinates(_require(place.lat, "lat"), _require(place.lon, "lon"))

        if place.boundingbox is not None:
            south, north, west, east = place.boundingbox
            builder.set_bounds(south, west, north, east)

        location = builder.build(LocationIqAddress)
        location = location.with_attribution(place.licence)
        location = location.with_display_name(place.display_name)

        if place.osm_id is not None:
            location = location.with_osm_id(place.osm_id)
        if place.osm_type is not None:
            location = location.with_osm_type(place.osm_type)

        if not reverse:
            location = location.with_type(place.type)
            location = location.with_category(place.category)

            if place.extratags is not None:
                location = location.with_extra_tags(place.extratags)
            if place.namedetails is not None:
                location = location.with_name_details(place.namedetails)

        return location


def _require(value: Any, field: str) -> Any:
    if value is None:
        raise MissingFieldError(field)
    return value
