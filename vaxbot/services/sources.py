"""
Vaccination data sources, one per supported country.

Each source knows its API endpoint, the query it needs, the population used
for percentages, and how to turn the API's JSON into a VaccinationSnapshot.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

import httpx

from config import CANADA_API_URL, CANADA_POPULATION, UK_API_URL, UK_POPULATION
from vaxbot.errors import ExtractionError
from vaxbot.models import DoseFigures, VaccinationSnapshot
from vaxbot.services.fetcher import fetch

logger = logging.getLogger(__name__)

_MISSING = object()
_INT_STRING = re.compile(r"[+-]?[0-9]+")


class Country(str, Enum):
    UK = "uk"
    CANADA = "canada"


@dataclass(frozen=True)
class CountrySource:
    country: Country
    flag: str
    base_url: str
    params: Tuple[Tuple[str, str], ...]
    population: int
    extract: Callable[[Any, int], VaccinationSnapshot]


# ----- JSON helpers -----

def parse_body(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ExtractionError(f"Response is not valid JSON: {e}") from e


def lookup(tree: Any, path: str, default: Any = _MISSING) -> Any:
    """
    Resolve a dotted path such as "body.0.date" against parsed JSON.
    Numeric segments index into lists. Raises ExtractionError when the
    path does not exist, unless a default is given.
    """
    node = tree
    for segment in path.split("."):
        if isinstance(node, dict) and segment in node:
            node = node[segment]
        elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            if default is not _MISSING:
                return default
            raise ExtractionError(f"Missing field {path!r}")
    return node


def as_int(value: Any, field: str = "value") -> int:
    """Normalize a JSON number or a plain integer string such as "-12" to int."""
    if isinstance(value, bool):
        raise ExtractionError(f"{field} is a boolean, expected a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ExtractionError(f"{field} is not a whole number: {value}")
    if isinstance(value, str):
        text = value.strip()
        if not _INT_STRING.fullmatch(text):
            raise ExtractionError(f"{field} is not an integer string: {value!r}")
        return int(text)
    raise ExtractionError(f"{field} has unexpected type {type(value).__name__}")


def _non_negative(value: int, field: str) -> int:
    if value < 0:
        raise ExtractionError(f"{field} is negative: {value}")
    return value


def _required_count(tree: Any, path: str) -> int:
    return _non_negative(as_int(lookup(tree, path), path), path)


def _optional_int(tree: Any, path: str) -> Optional[int]:
    value = lookup(tree, path, default=None)
    if value is None:
        return None
    return as_int(value, path)


def _required_str(tree: Any, path: str) -> str:
    value = lookup(tree, path)
    if value is None or isinstance(value, (dict, list)):
        raise ExtractionError(f"{path} is not a date string: {value!r}")
    return str(value)


# ----- Extractors -----

UK_FIRST_CUM = "cumPeopleVaccinatedFirstDoseByPublishDate"
UK_FULL_CUM = "cumPeopleVaccinatedSecondDoseByPublishDate"
UK_FIRST_NEW = "newPeopleVaccinatedFirstDoseByPublishDate"
UK_FULL_NEW = "newPeopleVaccinatedSecondDoseByPublishDate"


def extract_uk(tree: Any, population: int = UK_POPULATION) -> VaccinationSnapshot:
    return VaccinationSnapshot(
        country=Country.UK.value,
        first=DoseFigures(
            count=_required_count(tree, f"body.0.{UK_FIRST_CUM}"),
            diff=_optional_int(tree, f"body.0.{UK_FIRST_NEW}"),
            population=population,
        ),
        full=DoseFigures(
            count=_required_count(tree, f"body.0.{UK_FULL_CUM}"),
            diff=_optional_int(tree, f"body.0.{UK_FULL_NEW}"),
            population=population,
        ),
        date=_required_str(tree, "body.0.date"),
    )


def extract_canada(tree: Any, population: int = CANADA_POPULATION) -> VaccinationSnapshot:
    # The API reports total doses given and people fully vaccinated.
    # Everyone else with a dose has had exactly one.
    total_vaccinations = _required_count(tree, "data.0.total_vaccinations")
    total_vaccinated = _required_count(tree, "data.0.total_vaccinated")
    change_vaccinations = _optional_int(tree, "data.0.change_vaccinations")
    change_vaccinated = _optional_int(tree, "data.0.change_vaccinated")

    first_diff = None
    if change_vaccinations is not None and change_vaccinated is not None:
        first_diff = change_vaccinations - change_vaccinated

    return VaccinationSnapshot(
        country=Country.CANADA.value,
        first=DoseFigures(
            count=_non_negative(total_vaccinations - total_vaccinated, "first dose count"),
            diff=first_diff,
            population=population,
        ),
        full=DoseFigures(
            count=total_vaccinated,
            diff=change_vaccinated,
            population=population,
        ),
        date=_required_str(tree, "data.0.latest_date"),
    )


SOURCES: Dict[Country, CountrySource] = {
    Country.UK: CountrySource(
        country=Country.UK,
        flag="🇬🇧",
        base_url=UK_API_URL,
        params=(
            ("areaType", "overview"),
            ("metric", UK_FIRST_CUM),
            ("metric", UK_FULL_CUM),
            ("metric", UK_FIRST_NEW),
            ("metric", UK_FULL_NEW),
        ),
        population=UK_POPULATION,
        extract=extract_uk,
    ),
    Country.CANADA: CountrySource(
        country=Country.CANADA,
        flag="🇨🇦",
        base_url=CANADA_API_URL,
        params=(),
        population=CANADA_POPULATION,
        extract=extract_canada,
    ),
}


async def get_snapshot(
    country: Country,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> VaccinationSnapshot:
    source = SOURCES[country]
    raw = await fetch(source.base_url, source.params, client=client)
    snapshot = source.extract(parse_body(raw), source.population)
    logger.debug(
        "Fetched %s: first=%s full=%s date=%s",
        country.value,
        snapshot.first.count,
        snapshot.full.count,
        snapshot.date,
    )
    return snapshot
