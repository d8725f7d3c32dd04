"""Shared test fixtures for LocationIQ payloads and a fake HTTP transport."""

import copy
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from locationiq_geocoder.lib.geocoder.locationiq import LocationIqGeocoder

_BERLIN_PLACE: dict[str, Any] = {
    "place_id": "146226711",
    "licence": "https://locationiq.com/attribution",
    "osm_type": "way",
    "osm_id": "28958744",
    "boundingbox": ["52.5160", "52.5170", "13.3770", "13.3780"],
    "lat": "52.5163",
    "lon": "13.3777",
    "display_name": "Brandenburger Tor, Pariser Platz, Mitte, Berlin, 10117, Deutschland",
    "class": "tourism",
    "type": "attraction",
    "importance": 0.72,
    "address": {
        "tourism": "Brandenburger Tor",
        "house_number": "1",
        "road": "Pariser Platz",
        "suburb": "Mitte",
        "city": "Berlin",
        "state": "Berlin",
        "postcode": "10117",
        "country": "Deutschland",
        "country_code": "de",
    },
    "extratags": {"wikidata": "Q82425", "heritage": "4"},
    "namedetails": {"name": "Brandenburger Tor", "name:en": "Brandenburg Gate"},
}


@pytest.fixture
def berlin_place() -> dict[str, Any]:
    """A complete forward search result item."""
    return copy.deepcopy(_BERLIN_PLACE)


class RecordingTransport:
    """Serves a fixed body for every GET and records requested URLs."""

    def __init__(self, body: str | bytes, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        content = self.body.encode() if isinstance(self.body, str) else self.body
        return httpx.Response(self.status_code, content=content, request=request)


@pytest.fixture
def make_geocoder() -> Callable[..., tuple[LocationIqGeocoder, RecordingTransport]]:
    """Build a geocoder wired to a RecordingTransport serving ``payload``.

    ``payload`` may be a raw string (sent as-is) or any JSON-serializable value.
    """

    def _make(payload: Any, status_code: int = 200, **kwargs: Any) -> tuple[LocationIqGeocoder, RecordingTransport]:
        body = payload if isinstance(payload, str) else json.dumps(payload)
        transport = RecordingTransport(body, status_code=status_code)
        client = httpx.Client(transport=httpx.MockTransport(transport))
        geocoder = LocationIqGeocoder("test-key", client=client, **kwargs)
        return geocoder, transport

    return _make
