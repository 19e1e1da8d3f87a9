"""Indicator view state and its transitions.

One view owns one series, the selected period and the tracking point. The
state is immutable; every event produces a new state through a pure reducer,
so any front-end can drive it without a reactivity framework.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .clients import fmp
from .errors import FetchError
from .models import DataPoint, Indicator, IndicatorSeries, LoadState, Period
from .windowing import apply_window, locate_nearest, select_window

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred while loading data."


class FetchCompleted(BaseModel):
    """The view's fetch finished, with either a series or an error kind."""

    model_config = ConfigDict(frozen=True)

    series: Optional[IndicatorSeries] = None
    error_kind: Optional[str] = None

    @classmethod
    def succeeded(cls, series: IndicatorSeries) -> "FetchCompleted":
        return cls(series=series)

    @classmethod
    def failed(cls, exc: FetchError) -> "FetchCompleted":
        return cls(error_kind=exc.kind)


class PeriodChanged(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: Period


class PointerMoved(BaseModel):
    """Pointer position already mapped onto the chart's date axis."""

    model_config = ConfigDict(frozen=True)

    target: Union[datetime, date]


ViewEvent = Union[FetchCompleted, PeriodChanged, PointerMoved]


class IndicatorViewState(BaseModel):
    """Everything one indicator view needs to render."""

    model_config = ConfigDict(frozen=True)

    indicator: Indicator
    period: Period = Period.ALL
    load_state: LoadState = LoadState.IDLE
    series: list[DataPoint] = Field(default_factory=list)
    windowed: list[DataPoint] = Field(default_factory=list)
    tracking_point: Optional[DataPoint] = None
    error: Optional[str] = None

    def window_for(self, period: Period) -> list[DataPoint]:
        return apply_window(self.series, select_window(self.indicator.update_cycle, period))


def start_loading(state: IndicatorViewState) -> IndicatorViewState:
    return state.model_copy(update={"load_state": LoadState.LOADING, "error": None})


def on_fetch_completed(state: IndicatorViewState, event: FetchCompleted) -> IndicatorViewState:
    """Replace the series, or switch to the error state.

    The tracking point starts on the newest sample of the full series.
    """
    if event.series is None:
        return state.model_copy(update={
            "load_state": LoadState.ERROR,
            "series": [],
            "windowed": [],
            "tracking_point": None,
            "error": GENERIC_ERROR_MESSAGE,
        })

    series = event.series
    loaded = state.model_copy(update={"series": list(series.observations)})
    return loaded.model_copy(update={
        "load_state": LoadState.EMPTY if series.is_empty() else LoadState.LOADED,
        "windowed": loaded.window_for(state.period),
        "tracking_point": series.latest,
        "error": None,
    })


def on_period_changed(state: IndicatorViewState, event: PeriodChanged) -> IndicatorViewState:
    """Re-window the series; tracking resets to the newest sample in view."""
    windowed = state.window_for(event.period)
    return state.model_copy(update={
        "period": event.period,
        "windowed": windowed,
        "tracking_point": windowed[-1] if windowed else None,
    })


def on_pointer_moved(state: IndicatorViewState, event: PointerMoved) -> IndicatorViewState:
    # Only points inside the active window are selectable.
    if not state.windowed:
        return state
    return state.model_copy(update={"tracking_point": locate_nearest(state.windowed, event.target)})


def reduce(state: IndicatorViewState, event: ViewEvent) -> IndicatorViewState:
    if isinstance(event, FetchCompleted):
        return on_fetch_completed(state, event)
    if isinstance(event, PeriodChanged):
        return on_period_changed(state, event)
    if isinstance(event, PointerMoved):
        return on_pointer_moved(state, event)
    raise TypeError(f"Unsupported view event: {type(event).__name__}")


async def load_view(
    indicator: Indicator,
    api_key: str,
    period: Period = Period.ALL,
    client: Optional[httpx.AsyncClient] = None,
) -> IndicatorViewState:
    """Run the single fetch of a view and apply the requested period.

    Fetch failures end in the error state; nothing is retried.
    """
    state = start_loading(IndicatorViewState(indicator=indicator))
    try:
        series = await fmp.fetch_series(indicator, api_key, client=client)
    except FetchError as exc:
        logger.warning("Fetch of %s failed (%s): %s", indicator.value, exc.kind, exc)
        return reduce(state, FetchCompleted.failed(exc))

    state = reduce(state, FetchCompleted.succeeded(series))
    if period is not state.period:
        state = reduce(state, PeriodChanged(period=period))
    return state


def tracking_label(point: DataPoint) -> dict:
    """Caption shown above the tracking cursor."""
    return {
        "date": point.date.strftime("%Y/%m"),
        "value": f"{point.value:.2f}",
    }
