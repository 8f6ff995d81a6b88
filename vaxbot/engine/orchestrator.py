from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

import httpx

from vaxbot.models import VaccinationSnapshot
from vaxbot.services.sources import Country, get_snapshot

logger = logging.getLogger(__name__)


async def gather_snapshots(
    client: Optional[httpx.AsyncClient] = None,
) -> Tuple[VaccinationSnapshot, VaccinationSnapshot]:
    """
    Fetch the UK and Canada snapshots concurrently.

    Both fetches always run to completion. If either one failed, the first
    failure (UK before Canada) is raised and no snapshot is returned.
    """
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await gather_snapshots(own_client)

    uk, canada = await asyncio.gather(
        get_snapshot(Country.UK, client=client),
        get_snapshot(Country.CANADA, client=client),
        return_exceptions=True,
    )
    if isinstance(uk, BaseException):
        if isinstance(canada, BaseException):
            logger.error(f"Canada fetch also failed: {canada!r}")
        raise uk
    if isinstance(canada, BaseException):
        raise canada
    return uk, canada
