"""
Catalog views: search, category filter and counts over loaded records.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .models import DEFAULT_CATEGORIES, Record

ALL_CATEGORIES = "All"


def filter_records(
    records: Iterable[Record],
    search: str = "",
    category: Optional[str] = None,
) -> list[Record]:
    """Records whose name or description contains ``search`` (case-insensitive)
    and whose category matches. ``None`` or ``"All"`` matches every category.
    """
    needle = search.lower()
    matched = []
    for r in records:
        if needle and needle not in r.name.lower() and needle not in r.description.lower():
            continue
        if category not in (None, ALL_CATEGORIES) and r.category != category:
            continue
        matched.append(r)
    return matched


def categories(records: Iterable[Record]) -> list[str]:
    """``"All"`` followed by each category seen, in first-seen order."""
    seen = dict.fromkeys(r.category for r in records)
    return [ALL_CATEGORIES, *seen]


def catalog_stats(records: Iterable[Record]) -> dict:
    """Total plus per-category counts; default categories always appear."""
    counts = dict.fromkeys(DEFAULT_CATEGORIES, 0)
    total = 0
    for r in records:
        total += 1
        counts[r.category] = counts.get(r.category, 0) + 1
    return {"total": total, "categories": counts}
