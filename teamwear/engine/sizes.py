"""Canonical garment size ordering.

Single source of truth for size order across pricing, roster and breakdown
views. Labels keep their case; only the legacy XXXL/2XXL spellings are
rewritten to their canonical label. Lookups are case-insensitive.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from teamwear.config import get_config

# Complete size range, smallest first
ALL_SIZES: Tuple[str, ...] = ("XXS", "XS", "S", "M", "L", "XL", "XXL", "2XL", "3XL")

# Legacy notations mapped onto their canonical label
SIZE_ALIASES = {
    "XXXL": "3XL",
    "2XXL": "2XL",
}

_INDEX = {size: i for i, size in enumerate(ALL_SIZES)}


def normalize_size(size: str) -> str:
    """Map legacy notation to the canonical label ("XXXL" -> "3XL")."""
    return SIZE_ALIASES.get(size.upper(), size)


def size_order_index(size: Optional[str]) -> int:
    """Position of `size` in the canonical table, or -1 when it is not in it."""
    if not size:
        return -1
    return _INDEX.get(normalize_size(size.strip()).upper(), -1)


def is_canonical_size(size: Optional[str]) -> bool:
    return size_order_index(size) != -1


def size_label(size: Optional[str]) -> str:
    """Case-preserved size label with legacy aliases merged ("xxxl" -> "3XL").

    Blank or missing sizes become the sentinel.
    """
    if size is None:
        return get_config().missing_size_label
    label = str(size).strip()
    if not label:
        return get_config().missing_size_label
    return normalize_size(label)


def size_sort_key(size: str) -> tuple:
    """Sort key: canonical sizes by index, then unknown sizes alphabetically."""
    index = size_order_index(size)
    if index != -1:
        return (0, index, "", size)
    return (1, 0, size.casefold(), size)


def compare_sizes(a: str, b: str) -> int:
    """Three-way comparison consistent with size_sort_key."""
    ka, kb = size_sort_key(a), size_sort_key(b)
    return (ka > kb) - (ka < kb)


def sort_sizes(sizes: Iterable[str]) -> List[str]:
    return sorted(sizes, key=size_sort_key)
