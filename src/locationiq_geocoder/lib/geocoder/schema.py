"""Pydantic v2 schemas for LocationIQ/Nominatim place payloads.

Every upstream key is optional here; required-field checks live in the
mapping layer so they can raise a typed :class:`MissingFieldError`.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlaceAddress(BaseModel):
    """The ``address`` block of a place (present when ``addressdetails=1``)."""

    model_config = ConfigDict(extra="ignore")

    house_number: str | None = None
    road: str | None = None
    pedestrian: str | None = None
    suburb: str | None = None
    hamlet: str | None = None
    village: str | None = None
    town: str | None = None
    city: str | None = None
    county: str | None = None
    state: str | None = None
    postcode: str | None = None
    country: str | None = None
    country_code: str | None = None


class Place(BaseModel):
    """A single search or reverse result."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    address: PlaceAddress = Field(default_factory=PlaceAddress)
    lat: float | None = None
    lon: float | None = None
    boundingbox: Annotated[list[float], Field(min_length=4, max_length=4)] | None = None
    licence: str | None = None
    display_name: str | None = None
    osm_id: int | None = None
    osm_type: str | None = None
    type: str | None = None
    category: str | None = Field(default=None, alias="class")
    extratags: dict[str, Any] | None = None
    namedetails: dict[str, Any] | None = None

    @field_validator("extratags", "namedetails", mode="before")
    @classmethod
    def empty_list_as_mapping(cls, v: Any) -> Any:
        # empty objects sometimes arrive encoded as []
        if isinstance(v, list) and not v:
            return {}
        return v


def parse_place(raw: dict[str, Any]) -> Place:
    """Validate a decoded JSON object into a :class:`Place`.

    Raises:
        pydantic.ValidationError: If a present field has the wrong shape.
    """
    return Place.model_validate(raw)
