import streamlit as st
import streamlit.components.v1 as components

from trade_form import render_trade_form, reset_widgets
from tools.catalog import build_catalog, catalog_index, map_search_url
from tools.formatting import fmt_count, fmt_money, fmt_money_or_dash
from tools.holdings import holding_from_property
from tools.marketplace import pick_property
from tools.projection import (
    investment_slider,
    management_fee_label,
    project,
    yield_note,
    yield_summary,
)
from tools.settings import settings
from tools.trade_modal import TradeModal

st.set_page_config(page_title="Property Details • Tokenized Property Marketplace", layout="wide")


@st.cache_resource
def get_catalog():
    return build_catalog()


catalog = get_catalog()
prop = pick_property(
    st.query_params.get("id"),
    st.session_state.get("selected_property"),
    catalog,
    fallback=catalog_index(catalog),
)
if prop is None:
    st.error("Listing not found.")
    st.stop()

detail = prop.detail
cfg = settings()

# Header
st.caption(f"{'🟣' if prop.status == 'Fully Tokenized' else '🟢'} {prop.status}")
st.title(prop.name)
st.write(f"📍 {prop.location}")

m = st.columns(5)
m[0].metric("Beds", prop.beds if prop.beds is not None else "-")
m[1].metric("Baths", prop.baths if prop.baths is not None else "-")
m[2].metric("Size", f"{prop.sqft:,} sqft" if prop.sqft else "-")
m[3].metric("Token Price", fmt_money(prop.token_price))
m[4].metric("Property Value", fmt_money(prop.property_value))

st.progress(min(100, max(0, prop.tokenization)) / 100, text=f"{prop.tokenization}% Tokenized")
st.caption(f"{fmt_count(prop.total_tokens)} tokens")

# Overview + map
left, right = st.columns([1, 1])
with left:
    st.subheader("Overview")
    st.write(f"- **Address**: {detail.address}")
    st.write(f"- **Property type**: {detail.property_type}")
    st.write(f"- **Year built**: {detail.year_built or '-'}")
    st.write(f"- **Developer**: {detail.developer or '-'}")
    st.write(f"- **Ownership**: {detail.ownership or '-'}")
    st.write(f"- **Tenancy**: {detail.tenancy_status or '-'}")
with right:
    if detail.map_embed_url:
        components.iframe(detail.map_embed_url, height=320)
    st.link_button("Open map", map_search_url(detail.address or prop.location or prop.name))

# Tenant + liquidity
t, q = st.columns(2)
with t:
    st.subheader("Tenant Profile")
    tenant = detail.tenant
    st.write(f"- **Tenant type**: {tenant.type or '-'}")
    st.write(f"- **Monthly rent**: {fmt_money_or_dash(tenant.monthly_rent)}")
    st.write(f"- **Lease remaining**: {tenant.lease_remaining or '-'}")
    st.write(f"- **Credit score**: {tenant.credit_score or '-'}")
    st.write(f"- **Payment consistency**: {tenant.payment_consistency or '-'}")
    st.write(f"- **Vacancy risk**: {tenant.vacancy_risk.level}")
    st.caption(prop.vacancy_summary)
with q:
    st.subheader("Liquidity")
    st.write(f"- **Secondary demand**: {detail.liquidity.secondary_demand or '-'}")
    st.write(f"- **Average spread**: {detail.liquidity.average_spread or '-'}")
    st.write(f"- **Time to sell**: {detail.liquidity.sale_time or '-'}")
    st.write(f"- **Token holders**: {fmt_count(prop.estimated_holders)} active")

# Financials
st.subheader("Financials (monthly)")
fin, metrics = detail.financials, detail.metrics
rows = [
    ("Rental Income", fmt_money_or_dash(fin.monthly_rent)),
    ("Maintenance Fees", fmt_money_or_dash(fin.maintenance_fees)),
    ("Insurance & Taxes", fmt_money_or_dash(fin.insurance_taxes)),
    (management_fee_label(fin), fmt_money_or_dash(metrics.management_fee)),
    ("Reserve Fund", fmt_money_or_dash(fin.reserve_fund)),
    ("Other Expenses", fmt_money_or_dash(fin.other_expenses)),
]
for label, value in rows:
    a, b = st.columns([3, 1])
    a.write(label)
    b.write(value)
st.success(f"{fmt_money(metrics.net_monthly_income)} Net Monthly Income")
st.caption(f"Net distributable per token: {fmt_money(metrics.net_income_per_token, 2)}")
st.info(yield_summary(metrics.yield_percent))

# Yield calculator
st.subheader("Yield Calculator")
calc = cfg["investment_calculator"]
bounds = investment_slider(
    prop.token_price,
    prop.property_value,
    min_investment=calc["min_investment"],
    max_multiplier=calc["max_multiplier"],
    default_tokens=calc["default_tokens"],
)
if bounds.max > bounds.min:
    investment = st.slider(
        "Investment amount (RM)",
        min_value=float(bounds.min),
        max_value=float(bounds.max),
        value=float(bounds.value),
        step=float(bounds.step),
    )
else:
    investment = bounds.min
proj = project(fin, prop.total_tokens, investment, prop.token_price, prop.property_value)
y1, y2, y3 = st.columns(3)
y1.metric("Investment", fmt_money(proj.adjusted_investment))
y2.metric("Tokens", fmt_count(proj.tokens_purchased))
y3.metric("Est. monthly income", fmt_money(proj.estimated_monthly_income, 2))
st.caption(yield_note(proj))


# Buy dialog
def get_buy_modal() -> TradeModal:
    holding = holding_from_property(prop, cfg["trade"]["buy_max_tokens"])
    modal = st.session_state.get("buy_modal")
    if modal is None or modal.holding.id != holding.id:
        modal = TradeModal("buy", holding, default_cap=cfg["trade"]["auto_invest_default_cap"])
        st.session_state["buy_modal"] = modal
    return modal


@st.dialog("Buy tokens")
def buy_dialog(modal: TradeModal):
    st.caption(f"{prop.name} • {modal.view().unit_price_text} per token")
    view = render_trade_form(modal, "buy", percent_slider=False)
    s1, s2 = st.columns(2)
    s1.metric("Total cost", view.total_text)
    s2.metric("Tokens", view.units_summary)
    a, b = st.columns(2)
    if a.button("Confirm purchase", type="primary"):
        modal.submit()
        st.toast("Purchases are disabled in this demo; nothing was executed.")
        st.rerun()
    if b.button("Cancel"):
        modal.close()
        st.rerun()


if st.button("Buy tokens", type="primary"):
    modal = get_buy_modal()
    modal.open()
    reset_widgets(modal, "buy")
    buy_dialog(modal)
