"""US Economic Indicators MCP Server.

FastMCP server exposing the indicator catalog, windowed series and the
tracking point of an indicator chart.
Run: us-economic-indicators-mcp
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .core.catalog import catalog_by_category
from .core.models import DataPoint, Indicator, LoadState, Period
from .core.view_state import IndicatorViewState, PointerMoved, load_view, reduce, tracking_label

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging for the lifetime of the server."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    yield


mcp = FastMCP(
    "US Economic Indicators",
    instructions="US economic indicators (GDP, CPI, unemployment, housing starts and more) from Financial Modeling Prep, windowed by 1Y/5Y/10Y/All with a chart tracking point.",
    lifespan=lifespan,
)


def _get_fmp_key() -> str:
    key = os.environ.get("FMP_API_KEY", "")
    if not key:
        raise ValueError("FMP_API_KEY environment variable is required. Get a key at https://site.financialmodelingprep.com/developer/docs")
    return key


def _parse_target(raw: str) -> date:
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid target date: {raw!r}. Use ISO format, e.g. '2020-01-20'.") from None
    if parsed.time() == datetime.min.time() and parsed.tzinfo is None:
        return parsed.date()
    return parsed


def _point_to_dict(point: DataPoint | None) -> dict | None:
    if point is None:
        return None
    return {"date": point.date.isoformat(), "value": point.value, "label": tracking_label(point)}


def _view_to_dict(state: IndicatorViewState) -> dict:
    """Convert a view state to chart-friendly JSON."""
    return {
        "indicator": state.indicator.value,
        "title": state.indicator.label,
        "update_cycle": state.indicator.update_cycle,
        "period": state.period.value,
        "load_state": state.load_state.value,
        "total_observations": len(state.series),
        "data": [{"date": o.date.isoformat(), "value": o.value} for o in state.windowed],
        "tracking_point": _point_to_dict(state.tracking_point),
        "summary": _view_summary(state),
    }


def _view_summary(state: IndicatorViewState) -> str:
    if state.load_state is LoadState.ERROR:
        return state.error or "An error occurred."
    if state.load_state is LoadState.EMPTY or state.tracking_point is None:
        return "No data"
    label = tracking_label(state.tracking_point)
    return f"{state.indicator.label}: {label['value']} ({label['date']}), {len(state.windowed)} observations shown ({state.period.label})"


# ─── Tool 1: Catalog ─────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def econ_indicator_catalog() -> dict:
    """List every available indicator grouped by category, with its release cadence."""
    categories = catalog_by_category()
    count = sum(len(c["indicators"]) for c in categories)
    return {
        "title": "US Economic Indicators",
        "categories": categories,
        "summary": f"{count} indicators in {len(categories)} categories",
    }


# ─── Tool 2: Indicator series ────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def econ_indicator(indicator: str, period: str = "All") -> dict:
    """Windowed history of one indicator, with the tracking point on its newest sample.

    Args:
        indicator: Indicator identifier (e.g., 'GDP', 'CPI', 'unemploymentRate').
        period: Display window: '1Y', '5Y', '10Y' or 'All'. Default 'All'.
    """
    ind = Indicator.parse(indicator)
    per = Period.parse(period)
    state = await load_view(ind, _get_fmp_key(), per)
    return _view_to_dict(state)


# ─── Tool 3: Tracking point ──────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def econ_track(indicator: str, target_date: str, period: str = "All") -> dict:
    """Observation nearest to a date, restricted to the selected window.

    Args:
        indicator: Indicator identifier (e.g., 'GDP', 'CPI', 'unemploymentRate').
        target_date: ISO date or datetime under the chart cursor (e.g., '2020-01-20').
        period: Display window: '1Y', '5Y', '10Y' or 'All'. Default 'All'.
    """
    ind = Indicator.parse(indicator)
    per = Period.parse(period)
    target = _parse_target(target_date)

    state = await load_view(ind, _get_fmp_key(), per)
    state = reduce(state, PointerMoved(target=target))

    result = _view_to_dict(state)
    result["target_date"] = target.isoformat()
    return result


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
