"""Design catalogue filtering as a single pure transform over the filter state."""
from __future__ import annotations

from typing import Iterable, List

from teamwear.data.models import Design, DesignFilters


def filter_designs(designs: Iterable[Design], filters: DesignFilters) -> List[Design]:
    """Return the designs matching every active filter, in input order."""
    search = (filters.search or "").strip().lower()
    if isinstance(filters.sport, str):
        sports = {filters.sport} if filters.sport.strip() else set()
    else:
        sports = set(filters.sport or [])

    result = []
    for design in designs:
        if filters.active_only and not design.active:
            continue
        if filters.featured_only and not design.featured:
            continue
        if sports and not sports.intersection(design.sports):
            continue
        if search and search not in design.name.lower() and search not in design.slug.lower():
            continue
        result.append(design)
    return result
