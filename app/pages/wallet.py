import pandas as pd
import streamlit as st

from tools.settings import settings
from tools.wallet import (
    JsonRpcProvider,
    WalletError,
    WalletSession,
    fetch_eth_price_myr,
)

st.set_page_config(page_title="Wallet • Tokenized Property Marketplace", layout="wide")
st.title("👛 Wallet")
st.caption("Read-only view of a connected Ethereum account. Nothing is signed or sent.")


@st.cache_data(ttl=300)
def eth_price() -> float:
    return fetch_eth_price_myr()


def get_session() -> WalletSession:
    if "wallet" not in st.session_state:
        cfg = settings()["wallet"]
        provider = JsonRpcProvider(cfg["rpc_url"], timeout=cfg["timeout_seconds"]) if cfg["rpc_url"] else None
        session = WalletSession(provider, eth_price())
        try:
            session.restore()
        except WalletError as e:
            st.warning(f"Could not restore wallet: {e}")
        st.session_state["wallet"] = session
    return st.session_state["wallet"]


wallet = get_session()

if not wallet.connected:
    if st.button("Connect wallet", type="primary"):
        try:
            wallet.connect()
        except WalletError as e:
            # WalletNotDetectedError included
            st.error(str(e))
        else:
            st.rerun()
    st.stop()

c1, c2 = st.columns([3, 1])
c1.write(f"Connected: `{wallet.address}`")
if c2.button("Disconnect"):
    wallet.disconnect()
    st.rerun()

try:
    balance = wallet.balance()
    rows = wallet.transactions()
    tokens = wallet.tokens()
except WalletError as e:
    st.error(f"Error loading wallet data: {e}")
    st.stop()

b1, b2 = st.columns(2)
b1.metric("Balance (ETH)", balance.eth_text)
b2.metric("Value", balance.fiat_text)
if not wallet.eth_price_myr:
    st.caption("ETH price unavailable; fiat value shown as zero.")

st.subheader("Recent transactions")
if rows:
    st.dataframe(
        pd.DataFrame([{"Type": r.label, "Amount": r.amount_text} for r in rows]),
        use_container_width=True,
        hide_index=True,
    )
else:
    st.info("No transactions found for this account.")

st.subheader("Property tokens")
st.dataframe(
    pd.DataFrame(
        [{"Property": t.name, "Address": t.address, "Amount": f"{t.amount} {t.symbol}"} for t in tokens]
    ),
    use_container_width=True,
    hide_index=True,
)
