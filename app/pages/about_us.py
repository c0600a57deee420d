import streamlit as st

st.set_page_config(page_title="About • Tokenized Property Marketplace", layout="wide")

st.title("📄 About This Project")
st.caption("Demo marketplace for fractional, tokenized ownership of Malaysian property")

st.markdown("""
## Project Scope
This app shows how a tokenized property marketplace could look to an investor:
- Browse **listings** with search, type, price and tokenization filters
- Open a listing for **tenant, liquidity and monthly financials**, plus a yield calculator
- Size a **buy** or **sell** by amount, by units or by share of a holding
- Look up an address with an **AI estimate** of value, size and neighbourhood
- Connect a **wallet** read-only to view ETH balance and property tokens

---

## How the Numbers Work
- **Token price** is 1/10,000 of the property value (never below RM100); total tokens = value ÷ token price.
- **Management fee** = monthly rent × fee rate, rounded to the ringgit.
- **Net monthly income** = rent − maintenance − insurance & taxes − management fee − reserve − other (never below zero).
- **Net income per token** = net monthly income ÷ total tokens, to the sen.
- **Net yield** = net monthly income × 12 ÷ property value, to one decimal place.
- The yield calculator buys **whole tokens only**: RM1,050 at RM100 a token buys 10 tokens for RM1,000.
- In the trade dialogs, amount, units and percentage always agree: units are kept to two decimals
  and the percentage is the rounded share of the holding.

---

## What This App Is Not
- It does **not** execute trades, sign transactions or move funds.
- Listings, tenants and yields are **demo values**, not offers.
- AI lookups are estimates and are **not** valuations.
""")
