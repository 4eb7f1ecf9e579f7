"""UK collection routes and postcode helpers."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionRoute:
    route: str
    date: str
    areas: tuple[str, ...]


COLLECTION_ROUTES: tuple[CollectionRoute, ...] = (
    CollectionRoute(
        "CARDIFF ROUTE",
        "21st of April",
        ("CARDIFF", "GLOUCESTER", "BRISTOL", "SWINDON", "BATH", "SALISBURY"),
    ),
    CollectionRoute(
        "BOURNEMOUTH ROUTE",
        "22nd of April",
        ("SOUTHAMPTON", "OXFORD", "HAMPSHIRE", "READING", "GUILDFORD", "PORTSMOUTH"),
    ),
    CollectionRoute(
        "BIRMINGHAM ROUTE",
        "24th of April",
        ("WOLVERHAMPTON", "COVENTRY", "WARWICK", "DUDLEY", "WALSALL", "RUGBY"),
    ),
    CollectionRoute(
        "LONDON ROUTE",
        "19th of April",
        (
            "CENTRAL LONDON",
            "HEATHROW",
            "EAST LONDON",
            "ROMFORD",
            "ALL AREAS INSIDE M25",
        ),
    ),
    CollectionRoute(
        "LEEDS ROUTE",
        "17th of April",
        ("WAKEFIELD", "HALIFAX", "DONCASTER", "SHEFFIELD", "HUDDERSFIELD", "YORK"),
    ),
    CollectionRoute(
        "NOTTINGHAM ROUTE",
        "18th of April",
        ("LEICESTER", "DERBY", "PETERBOROUGH", "CORBY", "MARKET HARBOROUGH"),
    ),
    CollectionRoute(
        "MANCHESTER ROUTE",
        "26th of April",
        ("LIVERPOOL", "STOKE ON TRENT", "BOLTON", "WARRINGTON", "OLDHAM", "SHREWSBURY"),
    ),
    CollectionRoute(
        "BRIGHTON ROUTE",
        "28th of April",
        ("HIGH WYCOMBE", "SLOUGH", "CRAWLEY", "LANCING", "EASTBOURNE", "CANTERBURY"),
    ),
    CollectionRoute(
        "SOUTHEND ROUTE",
        "29th of April",
        ("NORWICH", "IPSWICH", "COLCHESTER", "BRAINTREE", "CAMBRIDGE", "BASILDON"),
    ),
    CollectionRoute(
        "NORTHAMPTON ROUTE",
        "16th of April",
        ("KETTERING", "BEDFORD", "MILTON KEYNES", "BANBURY", "AYLESBURY", "LUTON"),
    ),
    CollectionRoute(
        "SCOTLAND ROUTE",
        "30th of April",
        ("GLASGOW", "EDINBURGH", "NEWCASTLE", "MIDDLESBROUGH", "PRESTON", "CARLISLE"),
    ),
)

_ROUTES_BY_NAME = {route.route: route for route in COLLECTION_ROUTES}
_UK_POSTCODE = re.compile(r"^[A-Z]{1,2}[0-9]", re.IGNORECASE)


def route_names() -> list[str]:
    return [route.route for route in COLLECTION_ROUTES]


def areas_for_route(route_name: str) -> tuple[str, ...]:
    route = _ROUTES_BY_NAME.get(route_name)
    return route.areas if route else ()


def date_for_route(route_name: str) -> str:
    route = _ROUTES_BY_NAME.get(route_name)
    return route.date if route else "No date available"


def route_for_city(city: str) -> CollectionRoute | None:
    """Return the collection route serving a city, matched case-insensitively."""
    wanted = city.strip().upper()
    if not wanted:
        return None
    for route in COLLECTION_ROUTES:
        if wanted in route.areas:
            return route
    return None


def is_valid_uk_postcode(postcode: str) -> bool:
    """Loose check: one or two letters followed by a digit."""
    return bool(_UK_POSTCODE.match(postcode.strip()))


def format_uk_postcode(postcode: str) -> str:
    return re.sub(r"[^A-Za-z0-9]", "", postcode).upper()


def outward_code(postcode: str) -> str:
    """Return everything before the final three characters."""
    return format_uk_postcode(postcode)[:-3]


def inward_code(postcode: str) -> str:
    return format_uk_postcode(postcode)[-3:]


@dataclass(frozen=True)
class CollectionSchedule:
    """A collection date published by staff for one route."""

    id: str
    route: str
    pickup_date: str
    areas: tuple[str, ...]
    updated_at: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "route": self.route,
            "pickup_date": self.pickup_date,
            "areas": list(self.areas),
            "updated_at": self.updated_at,
        }


class CollectionScheduleRepository(Protocol):
    def list_schedules(self) -> list[CollectionSchedule]:
        """Return schedules, most recently updated first."""


@dataclass
class CollectionScheduleService:
    """Looks up published schedules, falling back to the built-in routes."""

    repository: CollectionScheduleRepository

    def list_schedules(self) -> list[CollectionSchedule]:
        return self.repository.list_schedules()

    def find_route(self, city: str) -> CollectionRoute | None:
        """Return the route serving ``city`` from published schedules first."""
        wanted = city.strip().upper()
        if not wanted:
            return None
        for schedule in self.repository.list_schedules():
            if wanted in (area.upper() for area in schedule.areas):
                return CollectionRoute(
                    schedule.route, schedule.pickup_date, schedule.areas
                )
        logger.debug("No published schedule for city", extra={"city": wanted})
        return route_for_city(wanted)
