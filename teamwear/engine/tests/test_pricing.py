import pytest

from teamwear.config import set_config_for_test
from teamwear.data.models import FabricOption, PricingTier, Product
from teamwear.engine.pricing import (
    PricingCalculator,
    band_tiers,
    resolve_fabric,
    round_half_up,
    validate_tiers,
)
from teamwear.errors import FabricNotFoundError, InvalidQuantityError, PricingConfigurationError


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    for var in ["CURRENCY", "BASELINE_FABRIC_NAME"]:
        monkeypatch.delenv(var, raising=False)
    set_config_for_test()


PRODUCT = Product(product_id=1, name="Camiseta", base_price_cents=1000)

# Example tiers: [(1,9,$10),(10,49,$8),(50,null,$6)] in cents
TIERS = [
    PricingTier(min_quantity=1, max_quantity=9, price_per_unit_cents=1000),
    PricingTier(min_quantity=10, max_quantity=49, price_per_unit_cents=800),
    PricingTier(min_quantity=50, max_quantity=None, price_per_unit_cents=600),
]

FABRICS = [
    FabricOption(fabric_id="deserve", name="Deserve", price_modifier_cents=0),
    FabricOption(fabric_id="dryfit", name="Dry-Fit", price_modifier_cents=200),
]


@pytest.fixture
def calculator():
    return PricingCalculator(FABRICS, {1: TIERS})


def test_tier_boundary_discontinuity(calculator):
    at_nine = calculator.calculate(PRODUCT, 9)
    assert at_nine.unit_price_cents == 1000
    assert at_nine.total_price_cents == 9000

    at_ten = calculator.calculate(PRODUCT, 10)
    assert at_ten.unit_price_cents == 800
    assert at_ten.total_price_cents == 8000
    assert at_ten.tier.min_quantity == 10
    assert at_ten.tier.max_quantity == 49


def test_fabric_modifier_added_per_unit(calculator):
    quote = calculator.calculate(PRODUCT, 5, "dryfit")
    assert quote.unit_price_cents == 1000 + 200
    assert quote.total_price_cents == 1200 * 5
    assert quote.fabric_modifier_cents == 200


def test_default_fabric_is_baseline(calculator):
    quote = calculator.calculate(PRODUCT, 1)
    assert quote.fabric_id == "deserve"
    assert quote.fabric_modifier_cents == 0
    assert quote.currency == "CLP"


def test_retail_and_savings(calculator):
    quote = calculator.calculate(PRODUCT, 50, "dryfit")
    assert quote.retail_price_cents == (1000 + 200) * 50
    assert quote.total_price_cents == (600 + 200) * 50
    assert quote.savings_cents == quote.retail_price_cents - quote.total_price_cents
    assert calculator.calculate(PRODUCT, 3).savings_cents == 0


def test_unit_price_never_increases(calculator):
    prices = [calculator.calculate(PRODUCT, q).unit_price_cents for q in range(1, 120)]
    assert all(b <= a for a, b in zip(prices, prices[1:]))


def test_total_monotonic_within_tier(calculator):
    for tier in TIERS:
        upper = tier.max_quantity or tier.min_quantity + 30
        totals = [calculator.calculate(PRODUCT, q).total_price_cents for q in range(tier.min_quantity, upper + 1)]
        assert totals == sorted(totals)


def test_deterministic(calculator):
    assert calculator.calculate(PRODUCT, 17, "dryfit") == calculator.calculate(PRODUCT, 17, "dryfit")


def test_invalid_quantity(calculator):
    with pytest.raises(InvalidQuantityError):
        calculator.calculate(PRODUCT, 0)


def test_unknown_fabric(calculator):
    with pytest.raises(FabricNotFoundError):
        calculator.calculate(PRODUCT, 1, "silk")


def test_missing_baseline_fabric():
    with pytest.raises(FabricNotFoundError, match="Baseline"):
        resolve_fabric([FABRICS[1]], None)


def test_baseline_fabric_name_from_config():
    set_config_for_test(baseline_fabric_name="Dry-Fit")
    assert resolve_fabric(FABRICS, None).fabric_id == "dryfit"


@pytest.mark.parametrize("tiers, message", [
    ([], "empty"),
    ([PricingTier(min_quantity=2, max_quantity=None, price_per_unit_cents=100)], "start at quantity 1"),
    ([PricingTier(min_quantity=1, max_quantity=9, price_per_unit_cents=100),
      PricingTier(min_quantity=12, max_quantity=None, price_per_unit_cents=90)], "Gap"),
    ([PricingTier(min_quantity=1, max_quantity=9, price_per_unit_cents=100),
      PricingTier(min_quantity=9, max_quantity=None, price_per_unit_cents=90)], "overlap"),
    ([PricingTier(min_quantity=1, max_quantity=9, price_per_unit_cents=100)], "open-ended"),
    ([PricingTier(min_quantity=1, max_quantity=None, price_per_unit_cents=100),
      PricingTier(min_quantity=10, max_quantity=None, price_per_unit_cents=90)], "not the last tier"),
    ([PricingTier(min_quantity=1, max_quantity=9, price_per_unit_cents=100),
      PricingTier(min_quantity=10, max_quantity=None, price_per_unit_cents=110)], "increases"),
])
def test_malformed_tier_tables(tiers, message):
    with pytest.raises(PricingConfigurationError, match=message):
        validate_tiers(tiers)


def test_malformed_table_is_fatal_for_calculation():
    broken = [PricingTier(min_quantity=1, max_quantity=9, price_per_unit_cents=1000)]
    calculator = PricingCalculator(FABRICS, {1: broken})
    with pytest.raises(PricingConfigurationError):
        calculator.calculate(PRODUCT, 20)


def test_validate_orders_tiers():
    assert validate_tiers(list(reversed(TIERS))) == tuple(TIERS)


def test_discount_band_fallback():
    calculator = PricingCalculator(FABRICS)
    product = Product(product_id=9, name="Short", base_price_cents=10000)
    assert calculator.calculate(product, 4).unit_price_cents == 10000
    assert calculator.calculate(product, 5).unit_price_cents == 7500
    assert calculator.calculate(product, 10).unit_price_cents == 5000
    assert calculator.calculate(product, 25).unit_price_cents == 4750
    assert calculator.calculate(product, 50).unit_price_cents == 4500
    quote = calculator.calculate(product, 100)
    assert quote.unit_price_cents == 4250
    assert quote.tier.max_quantity is None


def test_band_tiers_round_half_up():
    # 25% off 10001 = 7500.75; 52.5% off 10001 = 4750.475
    tiers = band_tiers(10001)
    assert tiers[1].price_per_unit_cents == 7501
    assert tiers[3].price_per_unit_cents == 4750
    assert validate_tiers(tiers) == tiers


def test_round_half_up():
    assert round_half_up("2.5") == 3
    assert round_half_up("3.5") == 4
    assert round_half_up("2.49") == 2
