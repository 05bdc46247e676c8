from datetime import date

import pytest

from teamwear.data.models import Design, ProductSizeBreakdown, SizeEntry
from teamwear.engine.export import (
    export_breakdowns,
    export_designs,
    export_filename,
    format_field,
    to_csv,
)


def test_design_export():
    designs = [
        Design(design_id="d1", name="Aurora", slug="aurora", active=True, featured=False, sports=[]),
        Design(design_id="d2", name="Marea", slug="marea", active=False, featured=True,
               sports=["futbol", "rugby"], mockup_count=3),
    ]
    assert export_designs(designs) == (
        "ID,Name,Slug,Active,Featured,Sports,Mockups\n"
        "d1,Aurora,aurora,Yes,No,,0\n"
        "d2,Marea,marea,No,Yes,futbol;rugby,3"
    )


def test_quotes_fields_with_delimiters():
    text = to_csv(["A", "B"], [["x, y", 'say "hi"'], ["line\nbreak", "plain"]])
    assert text == 'A,B\n"x, y","say ""hi"""\n"line\nbreak",plain'


def test_mapping_rows():
    assert to_csv(["A", "B"], [{"B": 2, "A": 1}]) == "A,B\n1,2"


def test_row_length_mismatch():
    with pytest.raises(ValueError):
        to_csv(["A", "B"], [[1]])


def test_header_only():
    assert to_csv(["A", "B"], []) == "A,B"


def test_single_column_empty_field_is_blank():
    assert to_csv(["Sports"], [[[]]]) == "Sports\n"
    assert to_csv(["Sports"], [[["futbol"]], [None], [["a", "b"]]]) == "Sports\nfutbol\n\na;b"
    assert to_csv(["Note"], [["x, y"]]) == 'Note\n"x, y"'


def test_format_field():
    assert format_field(None) == ""
    assert format_field(None, numeric=True) == "0"
    assert format_field(True) == "Yes"
    assert format_field([True, False]) == "Yes;No"
    assert format_field(0) == "0"


def test_breakdown_export():
    breakdown = ProductSizeBreakdown(
        product_id=1, product_name="Camiseta",
        sizes=[
            SizeEntry(size="M", quantity=2, jersey_numbers=["9"], player_names=["Ana"],
                      player_ids=["u1", "u2"], payment_statuses=[True, False]),
            SizeEntry(size="N/A", quantity=1, player_ids=[""], payment_statuses=[False]),
        ],
        total_quantity=3, unit_price_cents=1000, total_price_cents=3000,
    )
    assert export_breakdowns([breakdown]) == (
        "Product,Size,Quantity,Jersey Numbers,Players,Player IDs,Paid\n"
        "Camiseta,M,2,9,Ana,u1;u2,Yes;No\n"
        "Camiseta,N/A,1,,,,No"
    )


def test_export_filename():
    assert export_filename("designs", date(2024, 3, 5)) == "designs-2024-03-05.csv"
