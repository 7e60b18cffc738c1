"""
Airport Gap data models.

Lightweight, transient records parsed from the service's JSON:API
style payloads (``{"data": {"id", "type", "attributes"}}``).  Nothing is
persisted; every value lives only for the duration of one run.

The enums inherit from ``str`` as well as ``Enum`` so that they compare
directly against the plain strings returned by the API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ResourceType(str, Enum):
    """Values of the ``type`` member of a JSON:API resource."""

    AIRPORT = "airport"
    AIRPORT_DISTANCE = "airport_distance"
    FAVORITE = "favorite"


class FavoritesPhase(str, Enum):
    """
    Ordered phases of the favorites scenario.

    Declaration order is execution order: the remote favorites list is
    cleared, a favorite is created, re-creating it is rejected, the note
    of the favorite read back from the list is edited, and the edited
    favorite is read again.
    """

    CLEAR = "clear"
    CREATE = "create"
    DUPLICATE = "duplicate"
    EDIT = "edit"
    VERIFY = "verify"


PAGINATION_LINKS = ("first", "last", "next", "prev")


def _attributes(resource: dict[str, Any]) -> dict[str, Any]:
    attributes = resource.get("attributes")
    return attributes if isinstance(attributes, dict) else {}


@dataclass(frozen=True)
class Airport:
    """
    An airport identified by its short code.

    Attributes:
        id: Airport code (e.g. ``"GKA"``).
        name: Display name, when present.
        city: City served.
        country: Country name.
        iata: IATA code.
        icao: ICAO code.
        latitude: Latitude as returned (the API sends a string).
        longitude: Longitude as returned.
        altitude: Altitude in feet.
        timezone: IANA timezone name.
    """

    id: str
    name: str | None = None
    city: str | None = None
    country: str | None = None
    iata: str | None = None
    icao: str | None = None
    latitude: str | None = None
    longitude: str | None = None
    altitude: int | None = None
    timezone: str | None = None

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> "Airport":
        """Build an airport from one ``data`` resource object."""
        attributes = _attributes(resource)
        return cls(
            id=str(resource["id"]),
            name=attributes.get("name"),
            city=attributes.get("city"),
            country=attributes.get("country"),
            iata=attributes.get("iata"),
            icao=attributes.get("icao"),
            latitude=attributes.get("latitude"),
            longitude=attributes.get("longitude"),
            altitude=attributes.get("altitude"),
            timezone=attributes.get("timezone"),
        )


@dataclass(frozen=True)
class DistanceQuery:
    """An (origin, destination) pair of airport codes."""

    origin: str
    destination: str

    @property
    def expected_id(self) -> str:
        """Composite identifier the service assigns, ``"ORIGIN-DEST"``."""
        return f"{self.origin}-{self.destination}"

    def to_payload(self) -> dict[str, str]:
        return {"from": self.origin, "to": self.destination}


@dataclass(frozen=True)
class Distance:
    """Result of a distance calculation between two airports."""

    id: str
    kilometers: float | None = None
    miles: float | None = None
    nautical_miles: float | None = None

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> "Distance":
        attributes = _attributes(resource)
        return cls(
            id=str(resource["id"]),
            kilometers=attributes.get("kilometers"),
            miles=attributes.get("miles"),
            nautical_miles=attributes.get("nautical_miles"),
        )


@dataclass(frozen=True)
class Favorite:
    """
    A user-saved airport reference.

    Attributes:
        id: Identifier assigned by the service.
        airport_id: Code of the referenced airport, when the payload
            embeds the airport.
        note: Free-text note; ``None`` when absent.  The service stores
            an empty string as ``None``.
    """

    id: str
    airport_id: str | None = None
    note: str | None = None

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> "Favorite":
        """
        Build a favorite from one ``data`` resource object.

        The note normally lives under ``attributes``; a flat ``note``
        member on the resource itself is accepted as well.
        """
        attributes = _attributes(resource)
        airport = attributes.get("airport")
        airport_id = None
        if isinstance(airport, dict):
            airport_id = airport.get("iata") or airport.get("id")
        note = attributes["note"] if "note" in attributes else resource.get("note")
        return cls(id=str(resource["id"]), airport_id=airport_id, note=note)


@dataclass(frozen=True)
class Page:
    """
    One page of the airports collection.

    Attributes:
        airports: Airports on this page, in service order.
        links: Pagination links keyed by relation name.
    """

    airports: tuple[Airport, ...]
    links: dict[str, str | None] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Page":
        data = payload.get("data") or []
        links = payload.get("links") or {}
        return cls(
            airports=tuple(Airport.from_resource(item) for item in data),
            links=dict(links),
        )

    @property
    def ids(self) -> list[str]:
        """Ordered airport codes on this page."""
        return [airport.id for airport in self.airports]

    def __len__(self) -> int:
        return len(self.airports)

    def missing_links(self) -> list[str]:
        """Pagination relations absent from ``links``."""
        return [name for name in PAGINATION_LINKS if name not in self.links]
