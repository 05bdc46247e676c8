import asyncio
import time

import pytest

from teamwear.config import set_config_for_test
from teamwear.data.backends.csv_backend import CsvDataAccess
from teamwear.data.models import PricingQuery
from teamwear.errors import BundleNotFoundError, ProductNotFoundError
from teamwear.services.pricing import PricingService, PricingSession, QuoteState


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    for var in ["DATA_DIR", "CURRENCY", "BASELINE_FABRIC_NAME", "FETCH_TIMEOUT_SECONDS"]:
        monkeypatch.delenv(var, raising=False)
    set_config_for_test()


@pytest.fixture
def data_access(tmp_path):
    files = {
        "products.csv": (
            "product_id,name,base_price_cents,product_type_slug\n"
            "1,Camiseta,1000,jersey\n"
            "2,Short,2000,shorts\n"
        ),
        "fabrics.csv": (
            "fabric_id,name,price_modifier_cents,sort_order\n"
            "deserve,Deserve,0,0\n"
            "dryfit,Dry-Fit,200,1\n"
        ),
        "pricing_tiers.csv": (
            "product_id,min_quantity,max_quantity,price_per_unit_cents\n"
            "1,1,9,1000\n"
            "1,10,49,800\n"
            "1,50,,600\n"
        ),
        "bundles.csv": (
            "bundle_id,code,name,components,discount_pct\n"
            "1,B1,Kit,1:jersey;1:shorts,10\n"
        ),
    }
    for name, text in files.items():
        (tmp_path / name).write_text(text, encoding="utf-8")
    return CsvDataAccess(tmp_path)


class DelayedService(PricingService):
    """Answers after a per-quantity delay so requests can overlap."""

    def __init__(self, data_access, delays):
        super().__init__(data_access)
        self.delays = delays

    async def fetch_quote(self, query, timeout=None):
        await asyncio.sleep(self.delays.get(query.quantity, 0))
        return self.quote(query)


def test_quote_with_tiers_and_fabric(data_access):
    quote = PricingService(data_access).quote(PricingQuery(product_id=1, quantity=10, fabric_id="dryfit"))
    assert quote.unit_price_cents == 1000
    assert quote.total_price_cents == 10000
    assert quote.retail_price_cents == 12000
    assert quote.savings_cents == 2000
    assert quote.tier.min_quantity == 10


def test_quote_with_discount_bands(data_access):
    quote = PricingService(data_access).quote(PricingQuery(product_id=2, quantity=5))
    assert quote.fabric_id == "deserve"
    assert quote.unit_price_cents == 1500


def test_quote_with_bundle(data_access):
    quote = PricingService(data_access).quote(PricingQuery(product_id=1, quantity=3, bundle_code="B1"))
    assert quote.subtotal_cents == 3000
    assert quote.total_price_cents == 2700
    assert quote.bundle_discount_cents == 300


def test_unknown_product_and_bundle(data_access):
    service = PricingService(data_access)
    with pytest.raises(ProductNotFoundError):
        service.quote(PricingQuery(product_id=42, quantity=1))
    with pytest.raises(BundleNotFoundError):
        service.quote(PricingQuery(product_id=1, quantity=1, bundle_code="B9"))


def test_query_rejects_zero_quantity():
    with pytest.raises(ValueError):
        PricingQuery(product_id=1, quantity=0)


def test_fetch_quote(data_access):
    quote = asyncio.run(PricingService(data_access).fetch_quote(PricingQuery(product_id=1, quantity=50)))
    assert quote.unit_price_cents == 600


def test_fetch_quote_timeout(data_access):
    class SlowCsv(CsvDataAccess):
        def get_product(self, product_id):
            time.sleep(0.3)
            return super().get_product(product_id)

    slow = SlowCsv(data_access.data_dir)
    set_config_for_test(fetch_timeout_seconds=0.05)
    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(PricingService(slow).fetch_quote(PricingQuery(product_id=1, quantity=1)))


def test_session_last_write_wins(data_access):
    session = PricingSession(DelayedService(data_access, {1: 0.2}))

    async def scenario():
        slow = asyncio.ensure_future(session.request(PricingQuery(product_id=1, quantity=1)))
        await asyncio.sleep(0)
        await session.request(PricingQuery(product_id=1, quantity=20))
        await slow

    asyncio.run(scenario())
    assert session.state.query.quantity == 20
    assert session.state.quote.quantity == 20
    assert session.state.generation == 2
    assert session.state.error is None


def test_session_keeps_last_good_quote(data_access):
    session = PricingSession(PricingService(data_access))
    assert session.state == QuoteState()

    good = asyncio.run(session.request(PricingQuery(product_id=1, quantity=5)))
    failed = asyncio.run(session.request(PricingQuery(product_id=99, quantity=5)))

    assert failed.quote == good.quote
    assert failed.query.product_id == 99
    assert "Product not found" in failed.error
    # states are replaced, never mutated
    assert good.error is None

    recovered = asyncio.run(session.request(PricingQuery(product_id=2, quantity=1)))
    assert recovered.error is None
    assert recovered.quote.product_id == 2
