from __future__ import annotations

import asyncio
from datetime import date

import pytest

from us_economic_indicators.core import view_state
from us_economic_indicators.core.errors import HttpStatusError, NetworkError
from us_economic_indicators.core.models import DataPoint, Indicator, IndicatorSeries, LoadState, Period
from us_economic_indicators.core.view_state import (
    GENERIC_ERROR_MESSAGE,
    FetchCompleted,
    IndicatorViewState,
    PeriodChanged,
    PointerMoved,
    load_view,
    reduce,
    start_loading,
    tracking_label,
)


def _monthly(count: int, start_year: int = 2000) -> list[DataPoint]:
    return [
        DataPoint(date=date(start_year + i // 12, 1 + i % 12, 1), value=float(i))
        for i in range(count)
    ]


def _loaded(count: int, indicator: Indicator = Indicator.CPI) -> IndicatorViewState:
    series = IndicatorSeries(indicator=indicator, observations=_monthly(count))
    state = start_loading(IndicatorViewState(indicator=indicator))
    return reduce(state, FetchCompleted.succeeded(series))


def test_initial_state_is_idle_with_all_period() -> None:
    state = IndicatorViewState(indicator=Indicator.CPI)

    assert state.load_state is LoadState.IDLE
    assert state.period is Period.ALL
    assert state.tracking_point is None


def test_fetch_completed_tracks_newest_sample() -> None:
    state = _loaded(30)

    assert state.load_state is LoadState.LOADED
    assert len(state.series) == 30
    assert state.windowed == state.series
    assert state.tracking_point == state.series[-1]
    assert state.error is None


def test_fetch_completed_with_empty_series_is_no_data_not_error() -> None:
    state = _loaded(0)

    assert state.load_state is LoadState.EMPTY
    assert state.tracking_point is None
    assert state.error is None


def test_fetch_failed_is_error_state() -> None:
    state = start_loading(IndicatorViewState(indicator=Indicator.CPI))

    state = reduce(state, FetchCompleted.failed(HttpStatusError(503)))

    assert state.load_state is LoadState.ERROR
    assert state.error == GENERIC_ERROR_MESSAGE
    assert state.series == []
    assert state.tracking_point is None


def test_period_change_resets_tracking_to_newest_in_window() -> None:
    state = reduce(_loaded(200), PointerMoved(target=date(2001, 1, 1)))
    assert state.tracking_point.date == date(2001, 1, 1)

    state = reduce(state, PeriodChanged(period=Period.ONE_YEAR))

    assert state.period is Period.ONE_YEAR
    assert state.windowed == state.series[-12:]
    assert state.tracking_point == state.series[-1]


def test_quarterly_five_year_window_has_twenty_samples() -> None:
    state = reduce(_loaded(100, Indicator.REAL_GDP), PeriodChanged(period=Period.FIVE_YEARS))

    assert len(state.windowed) == 20


def test_pointer_cannot_leave_active_window() -> None:
    state = reduce(_loaded(120), PeriodChanged(period=Period.ONE_YEAR))

    state = reduce(state, PointerMoved(target=date(2000, 1, 1)))

    assert state.tracking_point == state.windowed[0]
    assert state.tracking_point != state.series[0]


def test_pointer_moved_without_data_is_a_no_op() -> None:
    state = _loaded(0)

    assert reduce(state, PointerMoved(target=date(2020, 1, 1))) == state


def test_reducers_do_not_mutate_previous_state() -> None:
    before = _loaded(24)

    after = reduce(before, PeriodChanged(period=Period.ONE_YEAR))

    assert before.period is Period.ALL
    assert len(before.windowed) == 24
    assert len(after.windowed) == 12


def test_reduce_rejects_unknown_event() -> None:
    with pytest.raises(TypeError, match="Unsupported view event"):
        reduce(_loaded(3), object())


def test_tracking_label_format() -> None:
    label = tracking_label(DataPoint(date=date(2023, 4, 1), value=3.14159))

    assert label == {"date": "2023/04", "value": "3.14"}


def test_load_view_applies_requested_period(monkeypatch) -> None:
    calls: list[Indicator] = []

    async def fake_fetch_series(indicator, api_key, client=None):
        calls.append(indicator)
        assert api_key == "test-key"
        return IndicatorSeries(indicator=indicator, observations=_monthly(150))

    monkeypatch.setattr(view_state.fmp, "fetch_series", fake_fetch_series)

    state = asyncio.run(load_view(Indicator.CPI, "test-key", Period.TEN_YEARS))

    assert calls == [Indicator.CPI]
    assert state.load_state is LoadState.LOADED
    assert len(state.windowed) == 120
    assert state.tracking_point == state.series[-1]


def test_load_view_turns_fetch_failure_into_error_state(monkeypatch) -> None:
    async def fake_fetch_series(indicator, api_key, client=None):
        del indicator, api_key, client
        raise NetworkError("connection reset")

    monkeypatch.setattr(view_state.fmp, "fetch_series", fake_fetch_series)

    state = asyncio.run(load_view(Indicator.GDP, "test-key"))

    assert state.load_state is LoadState.ERROR
    assert state.error == GENERIC_ERROR_MESSAGE
    assert state.windowed == []
