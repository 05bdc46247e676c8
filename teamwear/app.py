import asyncio

import pandas as pd
import streamlit as st

# Configuration
from teamwear.config import get_config

# DataAccess factory (CSV backend by default)
from teamwear.data.util import get_data_access
from teamwear.data.models import DesignFilters, PricingQuery
from teamwear.data.preferences import VIEW_MODES, InMemoryPreferenceStore, get_view_mode, set_view_mode
from teamwear.engine.bundles import BundleSelection, applies_to, is_eligible
from teamwear.engine.export import CSV_MIME_TYPE, export_breakdowns, export_designs, export_filename
from teamwear.engine.filters import filter_designs
from teamwear.errors import TeamwearError
from teamwear.services.breakdowns import BreakdownLoader
from teamwear.services.pricing import PricingService

st.set_page_config(page_title="Team apparel: pricing and sizes", layout="wide")

config = get_config()
da = get_data_access()
prefs = InMemoryPreferenceStore(st.session_state)


def money(cents: int) -> str:
    return f"${cents:,} {config.currency}"


# -----------------------------------------------------------------------------
# Sidebar: view preference
# -----------------------------------------------------------------------------
st.sidebar.header("View")
current_mode = get_view_mode(prefs)
mode = st.sidebar.radio("Layout", VIEW_MODES, index=VIEW_MODES.index(current_mode), horizontal=True)
if mode != current_mode:
    set_view_mode(prefs, mode)

pricing_tab, sizes_tab, designs_tab = st.tabs(["Pricing", "Size breakdowns", "Designs"])

# -----------------------------------------------------------------------------
# Pricing
# -----------------------------------------------------------------------------
with pricing_tab:
    products = da.list_products()
    fabrics = da.list_fabrics()
    bundles = da.list_bundles()

    c1, c2, c3 = st.columns(3)
    product = c1.selectbox("Product", products, format_func=lambda p: p.name)
    quantity = c2.number_input("Quantity", min_value=1, value=1, step=1)
    fabric = c3.selectbox("Fabric", fabrics, format_func=lambda f: f"{f.name} (+{money(f.price_modifier_cents)})")

    selection = st.session_state.get("bundle_selection", BundleSelection())
    selection = selection.for_product(bundles, product.product_type_slug)
    st.session_state["bundle_selection"] = selection
    type_slugs = [p.product_type_slug for p in products if p.product_type_slug]
    for bundle in bundles:
        label = f"{bundle.name} (-{bundle.discount_pct:g}%)"
        usable = applies_to(bundle, product.product_type_slug) and is_eligible(bundle, type_slugs)
        if st.button(label, key=f"bundle-{bundle.code}", disabled=not usable,
                     type="primary" if selection.active_code == bundle.code else "secondary"):
            selection = selection.toggle(bundle.code)
            st.session_state["bundle_selection"] = selection

    try:
        quote = PricingService(da).quote(PricingQuery(
            product_id=product.product_id,
            quantity=int(quantity),
            fabric_id=fabric.fabric_id,
            bundle_code=selection.active_code,
        ))
    except TeamwearError as e:
        st.error(str(e))
    else:
        m1, m2, m3, m4 = st.columns(4)
        m1.metric("Unit price", money(quote.unit_price_cents))
        m2.metric("Total", money(quote.total_price_cents))
        m3.metric("Retail", money(quote.retail_price_cents))
        m4.metric("Savings", money(quote.savings_cents))
        upper = quote.tier.max_quantity if quote.tier.max_quantity is not None else "+"
        st.caption(f"Tier {quote.tier.min_quantity}-{upper} at {money(quote.tier.price_per_unit_cents)} per unit")

# -----------------------------------------------------------------------------
# Size breakdowns (order or design request)
# -----------------------------------------------------------------------------
with sizes_tab:
    if "breakdown_loader" not in st.session_state:
        st.session_state["breakdown_loader"] = BreakdownLoader(da)
    loader = st.session_state["breakdown_loader"]

    source = st.radio("Source", ["Order", "Design request"], horizontal=True)
    key = st.text_input("Order id" if source == "Order" else "Design request id")
    if st.button("Load") and key:
        if source == "Order":
            asyncio.run(loader.refresh_order(key))
        elif key.isdigit():
            asyncio.run(loader.refresh_design_request(int(key)))
        else:
            st.warning("Design request ids are numeric")

    state = loader.state
    if state.error:
        st.error(state.error)

    for breakdown in state.breakdowns:
        st.markdown(f"### {breakdown.product_name}")
        st.caption(f"{breakdown.total_quantity} units · {money(breakdown.total_price_cents)}")
        df = pd.DataFrame([
            {"Size": e.size, "Quantity": e.quantity, "Players": ", ".join(e.player_names),
             "Numbers": ", ".join(e.jersey_numbers), "Paid": sum(e.payment_statuses)}
            for e in breakdown.sizes
        ])
        if mode == "grid":
            cols = st.columns(max(1, len(breakdown.sizes)))
            for col, entry in zip(cols, breakdown.sizes):
                col.metric(entry.size, entry.quantity)
        else:
            st.dataframe(df, use_container_width=True)

    if state.breakdowns:
        st.download_button(
            "Export CSV",
            data=export_breakdowns(state.breakdowns),
            file_name=export_filename("size-breakdown"),
            mime=CSV_MIME_TYPE,
        )

# -----------------------------------------------------------------------------
# Design catalogue
# -----------------------------------------------------------------------------
with designs_tab:
    designs = da.list_designs()
    all_sports = sorted({s for d in designs for s in d.sports})
    f1, f2, f3, f4 = st.columns(4)
    filters = DesignFilters(
        search=f1.text_input("Search") or None,
        sport=f2.multiselect("Sport", all_sports),
        active_only=f3.checkbox("Active only"),
        featured_only=f4.checkbox("Featured only"),
    )
    visible = filter_designs(designs, filters)
    st.dataframe(pd.DataFrame([d.model_dump() for d in visible]), use_container_width=True)
    st.download_button(
        "Export CSV",
        data=export_designs(visible),
        file_name=export_filename("designs"),
        mime=CSV_MIME_TYPE,
        key="export-designs",
    )
