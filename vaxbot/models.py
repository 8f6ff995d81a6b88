from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


def percent_of_population(value: int, population: int) -> float:
    return value * 100.0 / population


@dataclass(frozen=True)
class DoseFigures:
    count: int
    diff: Optional[int]  # day-over-day change, None when the source omits it
    population: int

    @property
    def count_prcnt(self) -> float:
        return percent_of_population(self.count, self.population)

    @property
    def diff_prcnt(self) -> Optional[float]:
        if self.diff is None:
            return None
        return percent_of_population(self.diff, self.population)


@dataclass(frozen=True)
class VaccinationSnapshot:
    country: str
    first: DoseFigures
    full: DoseFigures
    date: str  # as supplied by the source, not parsed

    @property
    def first_dose_count(self) -> int:
        return self.first.count

    @property
    def fully_vaccinated_count(self) -> int:
        return self.full.count

    @property
    def first_dose_delta(self) -> Optional[int]:
        return self.first.diff

    @property
    def fully_vaccinated_delta(self) -> Optional[int]:
        return self.full.diff

    @property
    def report_date(self) -> str:
        return self.date
