import pandas as pd
import streamlit as st
from openai import OpenAIError

from ai.client import LookupConfigError
from ai.property_lookup import PropertyDataError, lookup_property
from tools.formatting import fmt_count, fmt_money, fmt_money_or_dash

st.set_page_config(page_title="Property Lookup • Tokenized Property Marketplace", layout="wide")
st.title("🔎 Property Lookup")
st.caption("AI-estimated property details for a Malaysian address. Figures are indicative only.")

with st.form("lookup"):
    address = st.text_input("Address", placeholder="e.g. 1 Jalan Ampang")
    c1, c2 = st.columns(2)
    city = c1.text_input("City", "Kuala Lumpur")
    state = c2.text_input("State", "Wilayah Persekutuan")
    submitted = st.form_submit_button("Look up", type="primary")

if submitted:
    if not address.strip():
        st.warning("Please enter an address.")
    else:
        with st.spinner("Fetching property data…"):
            try:
                st.session_state["lookup_result"] = lookup_property(address.strip(), city, state)
            except LookupConfigError as e:
                st.error(f"Lookup is not configured: {e}")
            except (PropertyDataError, OpenAIError) as e:
                st.error(f"Failed to fetch property data: {e}")

result = st.session_state.get("lookup_result")
if not result:
    st.stop()

data = result["propertyData"]
m = st.columns(4)
m[0].metric("Estimated value", fmt_money(data["estimatedValue"]))
m[1].metric("Size", f"{fmt_count(data['squareFootage'])} sqft")
m[2].metric("Bedrooms", data["bedrooms"])
m[3].metric("Bathrooms", data["bathrooms"])

left, right = st.columns(2)
with left:
    st.subheader("Property")
    st.write(f"- **Type**: {data['propertyType']}")
    st.write(f"- **Year built**: {data['yearBuilt'] or '-'}")
    st.write(f"- **Lot size**: {data['lotSize']}")
    st.write(f"- **Last sale**: {fmt_money_or_dash(data['lastSalePrice'])} ({data['lastSaleDate']})")
with right:
    hood = data["neighborhood"]
    st.subheader(f"Neighbourhood • {hood['rating']}/10")
    st.write(hood["description"])
    if hood["amenities"]:
        st.write(", ".join(str(a) for a in hood["amenities"]))

trends = data["marketTrends"]
t = st.columns(3)
t[0].metric("Yearly appreciation", trends["yearlyAppreciation"])
t[1].metric("Median price", fmt_money(trends["medianPrice"]))
t[2].metric("Days on market", trends["daysOnMarket"])

if "marketHistory" in data:
    st.subheader("Market history")
    hist = data["marketHistory"]
    st.line_chart(pd.DataFrame({"Value (RM)": hist["values"]}, index=hist["years"]))
if "investmentProjection" in data:
    st.subheader("Investment projection")
    proj = data["investmentProjection"]
    st.line_chart(pd.DataFrame({"Return": proj["returns"]}, index=proj["years"]))

st.page_link("pages/wallet.py", label="Start Tokenization Process", icon="🚀")
