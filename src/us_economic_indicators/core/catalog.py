"""Indicator catalog listings, grouped the way the indicator list shows them."""

from __future__ import annotations

from .models import INDICATOR_CATALOG, Category, Indicator


def indicators_in(category: Category) -> list[Indicator]:
    """Indicators listed under a category, in display order."""
    return [ind for ind in INDICATOR_CATALOG if ind.category == category]


def catalog_by_category() -> list[dict]:
    """Chart-friendly listing of the whole catalog grouped by category."""
    listing = []
    for category in Category:
        listing.append({
            "category": category.value,
            "title": category.label,
            "indicators": [
                {
                    "indicator": ind.value,
                    "label": ind.label,
                    "update_cycle": ind.update_cycle,
                }
                for ind in indicators_in(category)
            ],
        })
    return listing
