"""Async client for the remote meeting directory service."""

from __future__ import annotations

import logging

import httpx

from src.corpus.errors import FetchUnavailableError
from src.corpus.models import MeetingRecord
from src.corpus.parsers import parse_search_results

logger = logging.getLogger(__name__)

# An empty query string asks the server for every meeting.
DEFAULT_SEARCH_PARAMS: dict[str, str] = {"query": ""}


async def fetch_meetings(
    server_url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> list[MeetingRecord]:
    """Run one unfiltered meeting search and return the whole batch.

    Args:
        server_url: The directory service entry point.
        client: Optional client to reuse (e.g. with a mock transport).
        timeout: Seconds to wait for the response; None waits indefinitely.

    Returns:
        Every meeting the server returned, in server order.

    Raises:
        FetchUnavailableError: On transport errors, error statuses,
            undecodable or unparseable responses, and empty results.
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                r = await own_client.get(server_url, params=DEFAULT_SEARCH_PARAMS)
        else:
            r = await client.get(server_url, params=DEFAULT_SEARCH_PARAMS)
        r.raise_for_status()
        payload = r.json()
    except httpx.HTTPError as e:
        msg = f"Meeting search failed: {e}"
        raise FetchUnavailableError(msg) from e
    except ValueError as e:
        msg = f"Meeting search returned invalid JSON: {e}"
        raise FetchUnavailableError(msg) from e

    try:
        meetings = parse_search_results(payload)
    except (ValueError, TypeError, KeyError) as e:
        msg = f"Meeting search returned unusable data: {e}"
        raise FetchUnavailableError(msg) from e

    if not meetings:
        msg = "Meeting search returned no meetings"
        raise FetchUnavailableError(msg)

    logger.info("Fetched %d meetings from %s", len(meetings), server_url)
    return meetings
