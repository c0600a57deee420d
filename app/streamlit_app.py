import pandas as pd
import streamlit as st
from openai import OpenAIError

from ai.chat import EmptyReplyError, ask_token_ai
from ai.client import LookupConfigError
from tools.catalog import build_catalog
from tools.formatting import fmt_money
from tools.marketplace import facts_text, filter_properties, paginate, results_text
from tools.settings import settings, setup_logging

st.set_page_config(page_title="Tokenized Property Marketplace", layout="wide")
st.title("🏙️ Tokenized Property Marketplace")
st.caption("Fractional ownership of income-producing Malaysian property. Demo only: no real trades are executed.")


@st.cache_resource
def get_catalog():
    setup_logging()
    return build_catalog()


catalog = get_catalog()
per_page = settings()["marketplace"]["per_page"]

PRICE_RANGES = {
    "": "Any price",
    "0-1000000": "Under RM1M",
    "1000000-2000000": "RM1M – RM2M",
    "2000000-3000000": "RM2M – RM3M",
    "3000000-10000000": "Above RM3M",
}
TOKENIZATION = {"": "Any status", "available": "Available", "in-progress": "In progress", "completed": "Fully tokenized"}

c1, c2, c3, c4 = st.columns([3, 1, 1, 1])
with c1:
    search = st.text_input("Search by name, value or token price", "")
with c2:
    category = st.selectbox("Type", ["", "residential", "commercial"], format_func=lambda v: v.title() or "All types")
with c3:
    price_range = st.selectbox("Price", list(PRICE_RANGES), format_func=PRICE_RANGES.get)
with c4:
    tokenization = st.selectbox("Tokenization", list(TOKENIZATION), format_func=TOKENIZATION.get)

filtered = filter_properties(catalog, search, category, price_range, tokenization)

# New filters start from page 1
signature = (search, category, price_range, tokenization)
if st.session_state.get("market_filters") != signature:
    st.session_state["market_filters"] = signature
    st.session_state["market_page"] = 1

page = paginate(filtered, st.session_state.get("market_page", 1), per_page)
st.write(f"**{results_text(page.total_items)}**")

if not page.items:
    st.info("No properties match your filters right now. Try adjusting your search terms.")


def open_detail(prop):
    st.session_state["selected_property"] = prop
    st.switch_page("pages/property_detail.py")


for row_start in range(0, len(page.items), 4):
    cols = st.columns(4)
    for col, prop in zip(cols, page.items[row_start:row_start + 4]):
        with col, st.container(border=True):
            st.markdown(f"**{prop.name}**")
            st.caption(f"📍 {prop.location} • {prop.status}")
            st.write(facts_text(prop))
            st.progress(min(100, max(0, prop.tokenization)) / 100, text=f"{prop.tokenization}% Tokenized")
            m1, m2 = st.columns(2)
            m1.metric("Token Price", fmt_money(prop.token_price))
            m2.metric("Property Value", fmt_money(prop.property_value))
            if st.button("View investment details →", key=f"view_{prop.id}"):
                open_detail(prop)

p1, p2, p3 = st.columns([1, 2, 1])
with p1:
    if st.button("← Previous", disabled=not page.has_prev):
        st.session_state["market_page"] = page.page - 1
        st.rerun()
with p2:
    st.caption(f"Page {page.page} of {page.total_pages}")
with p3:
    if st.button("Next →", disabled=not page.has_next):
        st.session_state["market_page"] = page.page + 1
        st.rerun()

with st.expander("Listing table"):
    df = pd.DataFrame(
        [
            {
                "id": p.id,
                "name": p.name,
                "category": p.category,
                "location": p.location,
                "value_rm": p.property_value,
                "token_price_rm": p.token_price,
                "total_tokens": p.total_tokens,
                "tokenized_pct": p.tokenization,
                "net_yield_pct": p.detail.metrics.yield_percent,
            }
            for p in filtered
        ]
    )
    if not df.empty:
        st.dataframe(df, use_container_width=True, hide_index=True)

st.divider()
question = st.text_input("Ask TokenAI about property tokenization")
if question:
    try:
        ans = ask_token_ai(question)
    except LookupConfigError as e:
        st.warning(f"TokenAI is unavailable: {e}")
    except (EmptyReplyError, OpenAIError) as e:
        st.error(f"TokenAI request failed: {e}")
    else:
        st.markdown(ans["message"])

st.write("")
st.caption("Figures are illustrative. Token prices, yields and tenancy data are demo values.")
