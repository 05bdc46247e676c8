"""CSV export of tabular selections (designs, size breakdowns)."""
from __future__ import annotations

from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from teamwear.data.models import Design, ProductSizeBreakdown

CSV_MIME_TYPE = "text/csv"

DESIGN_HEADERS = ["ID", "Name", "Slug", "Active", "Featured", "Sports", "Mockups"]
DESIGN_NUMERIC_COLUMNS = ["Mockups"]

BREAKDOWN_HEADERS = ["Product", "Size", "Quantity", "Jersey Numbers", "Players", "Player IDs", "Paid"]
BREAKDOWN_NUMERIC_COLUMNS = ["Quantity"]


def format_field(value: Any, numeric: bool = False) -> str:
    """Stringify one field: Yes/No for booleans, ';'-joined sequences, 0 for missing numbers."""
    if value is None:
        return "0" if numeric else ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (list, tuple)):
        return ";".join(format_field(v) for v in value)
    return str(value)


def to_csv(
    headers: Sequence[str],
    rows: Iterable[Sequence[Any] | Mapping[str, Any]],
    numeric_columns: Iterable[str] = (),
) -> str:
    """Render a header row plus one line per row as CSV text.

    Fields containing commas, quotes or newlines are quoted (RFC 4180).
    Empty fields are always written as nothing, also in single-column
    tables. Lines are joined with '\\n' and the text has no trailing newline.
    """
    headers = list(headers)
    numeric = set(numeric_columns)
    formatted: List[List[str]] = []
    for row in rows:
        values = [row.get(h) for h in headers] if isinstance(row, Mapping) else list(row)
        if len(values) != len(headers):
            raise ValueError(f"Row has {len(values)} fields, expected {len(headers)}: {values!r}")
        formatted.append([format_field(v, h in numeric) for h, v in zip(headers, values)])

    if len(headers) == 1:
        # The csv writer quotes a lone empty field
        lines = [_render([], headers)]
        lines += ["" if value == "" else _render([[value]], headers, header=False) for [value] in formatted]
        return "\n".join(lines)
    return _render(formatted, headers)


def _render(rows: List[List[str]], headers: List[str], header: bool = True) -> str:
    df = pd.DataFrame(rows, columns=headers, dtype=str)
    text = df.to_csv(index=False, header=header, lineterminator="\n")
    return text[:-1] if text.endswith("\n") else text


def export_filename(entity: str, on: Optional[date] = None) -> str:
    """`<entity>-<ISO date>.csv`"""
    return f"{entity}-{(on or date.today()).isoformat()}.csv"


def design_rows(designs: Iterable[Design]) -> List[list]:
    return [
        [d.design_id, d.name, d.slug, d.active, d.featured, d.sports, d.mockup_count]
        for d in designs
    ]


def breakdown_rows(breakdowns: Iterable[ProductSizeBreakdown]) -> List[list]:
    rows = []
    for product in breakdowns:
        for entry in product.sizes:
            rows.append([
                product.product_name,
                entry.size,
                entry.quantity,
                entry.jersey_numbers,
                entry.player_names,
                entry.player_ids,
                entry.payment_statuses,
            ])
    return rows


def export_designs(designs: Iterable[Design]) -> str:
    return to_csv(DESIGN_HEADERS, design_rows(designs), DESIGN_NUMERIC_COLUMNS)


def export_breakdowns(breakdowns: Iterable[ProductSizeBreakdown]) -> str:
    return to_csv(BREAKDOWN_HEADERS, breakdown_rows(breakdowns), BREAKDOWN_NUMERIC_COLUMNS)
