from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

import httpx

from vaxbot.errors import NetworkError

logger = logging.getLogger(__name__)

QueryParams = Sequence[Tuple[str, str]]


async def fetch(
    base_url: str,
    params: QueryParams = (),
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    GET `base_url` with `params` and return the response body as text.

    Params are sent in order and repeated keys are kept. The status code
    is not checked: an error page comes back like any other body.
    """
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise ValueError(f"Not an absolute http(s) url: {base_url!r}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError(f"Not an absolute http(s) url: {base_url!r}")

    query = list(params)
    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.get(url, params=query)
        else:
            response = await client.get(url, params=query)
    except httpx.HTTPError as e:
        raise NetworkError(f"GET {base_url} failed: {e}") from e

    if not response.is_success:
        logger.warning(f"{base_url} answered {response.status_code}, using body anyway")
    return response.text
