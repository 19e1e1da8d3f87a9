"""Financial Modeling Prep (FMP) economic indicators client.

API docs: https://site.financialmodelingprep.com/developer/docs#economics-indicators
Requires an API key. Records come back newest first.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import httpx
from pydantic import ValidationError

from ..errors import DecodeError, HttpStatusError, NetworkError
from ..models import DataPoint, Indicator, IndicatorSeries

logger = logging.getLogger(__name__)

# httpx logs every request URL at INFO, and the API key travels in the query string.
logging.getLogger("httpx").setLevel(logging.WARNING)

DEFAULT_API_BASE = "https://financialmodelingprep.com"
ECONOMIC_PATH = "/api/v4/economic"

DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)


def get_api_base() -> str:
    """Base URL of the FMP API, overridable for staging or tests."""
    return os.environ.get("FMP_API_BASE", DEFAULT_API_BASE).rstrip("/")


def _parse_records(indicator: Indicator, payload) -> list[DataPoint]:
    """Decode the whole payload or nothing."""
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a JSON array for {indicator.value}, got {type(payload).__name__}")
    try:
        return [DataPoint.model_validate(record) for record in payload]
    except ValidationError as exc:
        raise DecodeError(f"Malformed record in {indicator.value} response: {exc}") from exc


def _to_chronological(indicator: Indicator, newest_first: list[DataPoint]) -> list[DataPoint]:
    observations = list(reversed(newest_first))
    for prev, curr in zip(observations, observations[1:]):
        if curr.date <= prev.date:
            raise DecodeError(
                f"{indicator.value} records are not in reverse-chronological order "
                f"({prev.date.isoformat()} followed by {curr.date.isoformat()})"
            )
    return observations


async def _get(url: str, params: dict, client: Optional[httpx.AsyncClient]) -> httpx.Response:
    if client is not None:
        return await client.get(url, params=params)
    async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as owned:
        return await owned.get(url, params=params)


async def fetch_series(
    indicator: Indicator,
    api_key: str,
    client: Optional[httpx.AsyncClient] = None,
) -> IndicatorSeries:
    """Fetch the full history of one indicator.

    Args:
        indicator: Indicator to fetch; its raw value is sent as ``name``.
        api_key: FMP API key.
        client: Optional shared client. A short-lived one is created otherwise.

    Returns:
        IndicatorSeries with observations in ascending date order.

    Raises:
        NetworkError: the request failed before a response arrived.
        HttpStatusError: the response status was not 200.
        DecodeError: the body was not a complete, well-formed series.
    """
    params = {"name": indicator.value, "apikey": api_key}

    try:
        response = await _get(f"{get_api_base()}{ECONOMIC_PATH}", params, client)
    except httpx.TransportError as exc:
        raise NetworkError(f"Request for {indicator.value} failed: {exc}") from exc

    if response.status_code != 200:
        logger.warning("FMP returned status %d for %s", response.status_code, indicator.value)
        raise HttpStatusError(response.status_code)

    try:
        payload = response.json()
    except ValueError as exc:
        raise DecodeError(f"Response for {indicator.value} is not valid JSON") from exc

    observations = _to_chronological(indicator, _parse_records(indicator, payload))
    logger.info("Fetched %d observations for %s", len(observations), indicator.value)

    return IndicatorSeries(indicator=indicator, observations=observations)
