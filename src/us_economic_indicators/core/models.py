"""Pydantic data models — the shared business objects.

The fetcher, the windowing functions, the view-state reducers and the MCP
server all pass these models between each other. The static indicator
catalog lives here too, so every indicator carries its label and cadence.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

DATE_FORMAT = "%Y-%m-%d"
_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

MONTHS_PER_YEAR = 12
QUARTERLY = 3
MONTHLY = 1


class Category(str, Enum):
    """Indicator grouping used by the catalog listing."""

    BUSINESS_FINANCE = "business_finance"
    CONSUMPTION = "consumption"
    EMPLOYMENT = "employment"
    INDUSTRY = "industry"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    Category.BUSINESS_FINANCE: "Business & Finance",
    Category.CONSUMPTION: "Consumption",
    Category.EMPLOYMENT: "Employment",
    Category.INDUSTRY: "Industry",
}


class Indicator(str, Enum):
    """Economic indicators served by the FMP economic endpoint.

    Values are the raw identifiers the API expects in its ``name`` parameter.
    """

    GDP = "GDP"
    REAL_GDP = "realGDP"
    REAL_GDP_PER_CAPITA = "realGDPPerCapita"
    FEDERAL_FUNDS = "federalFunds"
    CPI = "CPI"
    RETAIL_SALES = "retailSales"
    CONSUMER_SENTIMENT = "consumerSentiment"
    DURABLE_GOODS = "durableGoods"
    UNEMPLOYMENT_RATE = "unemploymentRate"
    TOTAL_NONFARM_PAYROLL = "totalNonfarmPayroll"
    INDUSTRIAL_PRODUCTION_TOTAL_INDEX = "industrialProductionTotalIndex"
    NEW_PRIVATELY_OWNED_HOUSING_UNITS_STARTED_TOTAL_UNITS = "newPrivatelyOwnedHousingUnitsStartedTotalUnits"
    TOTAL_VEHICLE_SALES = "totalVehicleSales"

    @property
    def label(self) -> str:
        return INDICATOR_CATALOG[self]["label"]

    @property
    def update_cycle(self) -> int:
        """Months between successive data releases."""
        return INDICATOR_CATALOG[self]["update_cycle"]

    @property
    def category(self) -> Category:
        return INDICATOR_CATALOG[self]["category"]

    @classmethod
    def parse(cls, raw: str) -> "Indicator":
        """Look up an indicator by its raw identifier, ignoring case."""
        for indicator in cls:
            if indicator.value.lower() == raw.strip().lower():
                return indicator
        available = ", ".join(i.value for i in cls)
        raise ValueError(f"Unknown indicator: {raw!r}. Available: {available}")


# Loaded once at import time and never mutated. Order within a category is display order.
INDICATOR_CATALOG: dict[Indicator, dict] = {
    # Business & finance
    Indicator.GDP: {"label": "Gross Domestic Product (GDP)", "update_cycle": QUARTERLY, "category": Category.BUSINESS_FINANCE},
    Indicator.REAL_GDP: {"label": "Real GDP", "update_cycle": QUARTERLY, "category": Category.BUSINESS_FINANCE},
    Indicator.REAL_GDP_PER_CAPITA: {"label": "Real GDP per Capita", "update_cycle": QUARTERLY, "category": Category.BUSINESS_FINANCE},
    Indicator.FEDERAL_FUNDS: {"label": "Federal Funds Rate", "update_cycle": MONTHLY, "category": Category.BUSINESS_FINANCE},
    # Consumption
    Indicator.CPI: {"label": "Consumer Price Index (CPI)", "update_cycle": MONTHLY, "category": Category.CONSUMPTION},
    Indicator.RETAIL_SALES: {"label": "Retail Sales", "update_cycle": MONTHLY, "category": Category.CONSUMPTION},
    Indicator.CONSUMER_SENTIMENT: {"label": "Consumer Sentiment", "update_cycle": MONTHLY, "category": Category.CONSUMPTION},
    # Employment
    Indicator.UNEMPLOYMENT_RATE: {"label": "Unemployment Rate", "update_cycle": MONTHLY, "category": Category.EMPLOYMENT},
    Indicator.TOTAL_NONFARM_PAYROLL: {"label": "Total Nonfarm Payroll", "update_cycle": MONTHLY, "category": Category.EMPLOYMENT},
    # Industry
    Indicator.DURABLE_GOODS: {"label": "Durable Goods Orders", "update_cycle": MONTHLY, "category": Category.INDUSTRY},
    Indicator.INDUSTRIAL_PRODUCTION_TOTAL_INDEX: {"label": "Industrial Production Index", "update_cycle": MONTHLY, "category": Category.INDUSTRY},
    Indicator.NEW_PRIVATELY_OWNED_HOUSING_UNITS_STARTED_TOTAL_UNITS: {"label": "Housing Starts", "update_cycle": MONTHLY, "category": Category.INDUSTRY},
    Indicator.TOTAL_VEHICLE_SALES: {"label": "Total Vehicle Sales", "update_cycle": MONTHLY, "category": Category.INDUSTRY},
}


class Period(str, Enum):
    """Display window requested by the user."""

    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"
    TEN_YEARS = "10Y"
    ALL = "All"

    @property
    def label(self) -> str:
        return _PERIOD_LABELS[self]

    def window_size(self, update_cycle: int) -> Optional[int]:
        """Number of trailing samples to display, or None for the whole series.

        Args:
            update_cycle: Months between releases (1 = monthly, 3 = quarterly).
        """
        if not 1 <= update_cycle <= MONTHS_PER_YEAR:
            raise ValueError(f"update_cycle must be between 1 and {MONTHS_PER_YEAR} months, got {update_cycle}")
        if self is Period.ALL:
            return None
        samples_per_year = MONTHS_PER_YEAR // update_cycle
        return samples_per_year * _YEARS_IN_PERIOD[self]

    @classmethod
    def parse(cls, raw: str) -> "Period":
        for period in cls:
            if period.value.lower() == raw.strip().lower():
                return period
        available = ", ".join(p.value for p in cls)
        raise ValueError(f"Invalid period: {raw!r}. Use one of: {available}")


_PERIOD_LABELS = {
    Period.ONE_YEAR: "1 year",
    Period.FIVE_YEARS: "5 years",
    Period.TEN_YEARS: "10 years",
    Period.ALL: "All time",
}

_YEARS_IN_PERIOD = {
    Period.ONE_YEAR: 1,
    Period.FIVE_YEARS: 5,
    Period.TEN_YEARS: 10,
}


class LoadState(str, Enum):
    """Display state of one indicator view."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"
    ERROR = "error"


class DataPoint(BaseModel):
    """A single observation decoded from one API record."""

    model_config = ConfigDict(frozen=True)

    date: date
    value: float

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v):
        if isinstance(v, date):
            return v
        if not isinstance(v, str):
            raise ValueError("date must be a 'yyyy-MM-dd' string")
        # strptime alone accepts unpadded fields such as '2023-4-1'.
        if not _DATE_PATTERN.match(v):
            raise ValueError(f"Invalid date format: {v!r}")
        try:
            return datetime.strptime(v, DATE_FORMAT).date()
        except ValueError:
            raise ValueError(f"Invalid date format: {v!r}") from None

    @field_validator("value", mode="before")
    @classmethod
    def _require_number(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("value must be a number")
        return v


class IndicatorSeries(BaseModel):
    """All observations of one indicator from a single fetch, oldest first."""

    indicator: Indicator
    observations: list[DataPoint]

    @property
    def latest(self) -> Optional[DataPoint]:
        if not self.observations:
            return None
        return self.observations[-1]

    def is_empty(self) -> bool:
        return not self.observations
