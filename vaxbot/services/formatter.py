from __future__ import annotations

from typing import List, Optional

from vaxbot.models import DoseFigures, VaccinationSnapshot
from vaxbot.services.sources import SOURCES, Country


def format_number(value: int) -> str:
    return f"{value:,}"


def format_delta(value: int) -> str:
    return f"{value:+,}"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def _dose_part(label: str, dose: DoseFigures, with_diff_prcnt: bool) -> str:
    parts: List[str] = [f"{label}: {format_number(dose.count)} ({format_percent(dose.count_prcnt)})"]
    if dose.diff is not None:
        parts.append(format_delta(dose.diff))
        diff_prcnt: Optional[float] = dose.diff_prcnt
        if with_diff_prcnt and diff_prcnt is not None:
            parts.append(f"({format_percent(diff_prcnt)})")
    return " ".join(parts)


def format_snapshot_line(snapshot: VaccinationSnapshot, flag: str) -> str:
    """One chat line: flag, first doses, fully vaccinated, report date."""
    first = _dose_part("1st", snapshot.first, with_diff_prcnt=True)
    full = _dose_part("Full", snapshot.full, with_diff_prcnt=False)
    return f"{flag} {first} | {full} | {snapshot.date}"


def format_report(uk: VaccinationSnapshot, canada: VaccinationSnapshot) -> str:
    return "\n".join([
        format_snapshot_line(uk, SOURCES[Country.UK].flag),
        format_snapshot_line(canada, SOURCES[Country.CANADA].flag),
    ])
