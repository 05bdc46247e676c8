import pytest

from teamwear.config import set_config_for_test
from teamwear.data.models import (
    DesignRequestRosterRow,
    JerseyDisplayConfig,
    OrderLineItem,
    PaymentContribution,
    PlayerInfoSubmission,
    RosterMember,
)
from teamwear.engine.roster import (
    DesignRequestRosterSource,
    OrderRosterSource,
    is_paid,
    jersey_sort_value,
    normalize,
    parse_source,
    sort_roster,
)


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    for var in ["MISSING_SIZE_LABEL", "NO_NAME_PLACEHOLDER"]:
        monkeypatch.delenv(var, raising=False)
    set_config_for_test()


def item(item_id, player_id=None, **kwargs):
    return OrderLineItem(item_id=item_id, order_id="o1", product_id=1, product_name="Camiseta",
                         player_id=player_id, **kwargs)


def contribution(user_id, status):
    return PaymentContribution(contribution_id=f"c-{user_id}-{status}", order_id="o1", user_id=user_id, status=status)


def test_paid_requires_completed_or_approved():
    contributions = [contribution("u1", "pending"), contribution("u2", "approved"), contribution("u3", "completed")]
    assert not is_paid("u1", contributions)
    assert is_paid("u2", contributions)
    assert is_paid("u3", contributions)
    assert not is_paid("u4", contributions)
    assert not is_paid(None, contributions)


def test_any_paid_contribution_counts():
    assert is_paid("u1", [contribution("u1", "rejected"), contribution("u1", "completed")])


def test_order_item_wins_over_submission():
    source = OrderRosterSource(
        items=[item("i1", "u1", jersey_number="10", customization={"size": "L"})],
        submissions=[PlayerInfoSubmission(user_id="u1", player_name="Sofía", jersey_number="7", size="M")],
    )
    [member] = normalize(source)
    assert member.jersey_number == "10"
    assert member.size == "L"
    # gaps are filled from the submission
    assert member.player_name == "Sofía"
    assert member.display_name == "Sofía"


def test_order_defaults_for_missing_data():
    source = OrderRosterSource(items=[item("i1"), item("i2", "u9", quantity=3)])
    first, second = normalize(source)
    assert first.size == "N/A"
    assert first.paid is False
    assert first.quantity == 1
    assert first.player_id is None
    assert second.quantity == 3
    assert second.product_id == 1


def test_first_submission_per_player_is_used():
    source = OrderRosterSource(
        items=[item("i1", "u1")],
        submissions=[
            PlayerInfoSubmission(user_id="u1", size="S"),
            PlayerInfoSubmission(user_id="u1", size="XL"),
        ],
    )
    assert normalize(source)[0].size == "S"


def test_order_payment_status():
    source = OrderRosterSource(
        items=[item("i1", "u1"), item("i2", "u2")],
        contributions=[contribution("u1", "completed"), contribution("u2", "pending")],
    )
    assert [m.paid for m in normalize(source)] == [True, False]


def test_design_request_rows():
    source = DesignRequestRosterSource(members=[
        DesignRequestRosterRow(member_id="m1", user_id="u1", player_name="Ana", jersey_number=4, size="m"),
        DesignRequestRosterRow(member_id="m2", player_name="Luis", payment_paid=True),
    ], contributions=[contribution("u1", "approved")])
    first, second = normalize(source)
    assert first.player_id == "u1"
    assert first.jersey_number == "4"
    assert first.size == "m"
    assert first.paid is True
    assert first.product_id is None
    assert second.player_id == "m2"
    assert second.size == "N/A"
    assert second.paid is True


def test_explicit_paid_flag_wins():
    source = DesignRequestRosterSource(
        members=[DesignRequestRosterRow(member_id="m1", user_id="u1", payment_paid=False)],
        contributions=[contribution("u1", "completed")],
    )
    assert normalize(source)[0].paid is False


def test_legacy_roster_columns():
    row = DesignRequestRosterRow.model_validate(
        {"id": "m1", "full_name": "Ana", "number": "09", "size_label": "XL", "paid": "true"}
    )
    assert row.member_id == "m1"
    assert row.player_name == "Ana"
    assert row.jersey_number == "09"
    assert row.size == "XL"
    assert row.payment_paid is True


def test_jersey_display_styles():
    source = DesignRequestRosterSource(members=[DesignRequestRosterRow(member_id="m1", player_name="Ana")])

    team = normalize(source, JerseyDisplayConfig(style="team_name", team_name=" LOS PUMAS "))[0]
    assert team.display_name == "LOS PUMAS"
    assert team.player_name == "Ana"

    blank = normalize(source, JerseyDisplayConfig(style="none"))[0]
    assert blank.display_name == "-"


def test_team_name_style_requires_name():
    with pytest.raises(ValueError):
        JerseyDisplayConfig(style="team_name")


def test_parse_source_by_kind():
    source = parse_source({"kind": "design_request", "members": [{"member_id": "m1", "size": "S"}]})
    assert isinstance(source, DesignRequestRosterSource)
    source = parse_source({"kind": "order", "items": []})
    assert isinstance(source, OrderRosterSource)


def test_jersey_sort_value():
    assert jersey_sort_value("07") == 7
    assert jersey_sort_value(None) == 0
    assert jersey_sort_value("A1") == 0


def test_sort_roster_is_stable():
    members = [
        RosterMember(player_id="a", size="M", jersey_number="10"),
        RosterMember(player_id="b", size="M"),
        RosterMember(player_id="c", size="M", jersey_number="x"),
        RosterMember(player_id="d", size="M", jersey_number="2"),
        RosterMember(player_id="e", size="M", jersey_number="0"),
    ]
    assert [m.player_id for m in sort_roster(members)] == ["b", "c", "e", "d", "a"]
