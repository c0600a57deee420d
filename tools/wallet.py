"""
Wallet panel backend.

A WalletSession is created per page load and wraps whichever provider the
page was given. Nothing is signed or sent: balance, history and a demo token
list are the only queries.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Protocol

import requests
import requests_cache
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from tools.formatting import fmt_money
from tools.settings import settings

logger = logging.getLogger(__name__)

WEI_PER_ETH = Decimal(10) ** 18


class WalletError(Exception):
    pass


class WalletNotDetectedError(WalletError):
    pass


@dataclass(frozen=True)
class Transaction:
    sender: str
    recipient: str
    value_wei: int


@dataclass(frozen=True)
class TransactionRow:
    direction: str  # "received" | "sent"
    amount_eth: Decimal

    @property
    def label(self) -> str:
        return "Received" if self.direction == "received" else "Sent"

    @property
    def amount_text(self) -> str:
        sign = "+" if self.direction == "received" else "-"
        return f"{sign}{self.amount_eth.normalize():f} ETH"


@dataclass(frozen=True)
class WalletBalance:
    eth: Decimal
    fiat: float

    @property
    def eth_text(self) -> str:
        return f"{self.eth:.4f}"

    @property
    def fiat_text(self) -> str:
        return f"≈ {fmt_money(self.fiat, 2)}"


@dataclass(frozen=True)
class TokenHolding:
    name: str
    address: str
    amount: int
    symbol: str


DEMO_TOKENS = [TokenHolding("Sample Property Token", "123 Jalan Bukit Bintang", 10, "PROP")]


class WalletProvider(Protocol):
    def accounts(self) -> List[str]: ...

    def request_accounts(self) -> List[str]: ...

    def balance_wei(self, address: str) -> int: ...

    def history(self, address: str) -> List[Transaction]: ...


def wei_to_eth(wei: int) -> Decimal:
    return Decimal(int(wei)) / WEI_PER_ETH


class JsonRpcProvider:
    """Ethereum JSON-RPC over HTTP. Plain nodes expose no account history."""

    def __init__(self, url: str, timeout: float = 5, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._id = 0

    def _call(self, method: str, params: Optional[list] = None):
        self._id += 1
        payload = {"jsonrpc": "2.0", "id": self._id, "method": method, "params": params or []}
        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise WalletError(f"{method} failed: {e}") from e
        if data.get("error"):
            raise WalletError(f"{method} failed: {data['error'].get('message', data['error'])}")
        return data.get("result")

    def accounts(self) -> List[str]:
        return list(self._call("eth_accounts") or [])

    def request_accounts(self) -> List[str]:
        return self.accounts()

    def balance_wei(self, address: str) -> int:
        return int(self._call("eth_getBalance", [address, "latest"]), 16)

    def history(self, address: str) -> List[Transaction]:
        return []


class PriceFetchError(Exception):
    pass


@retry(
    reraise=True,
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
    retry=retry_if_exception_type(PriceFetchError),
)
def _get_price(session: requests.Session, url: str, timeout: float) -> float:
    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
        return float(resp.json()["ethereum"]["myr"])
    except (requests.RequestException, KeyError, TypeError, ValueError) as e:
        raise PriceFetchError(str(e)) from e


def fetch_eth_price_myr(session: Optional[requests.Session] = None) -> float:
    """ETH price in MYR from CoinGecko; 0 when unavailable."""
    cfg = settings()["wallet"]
    session = session or requests_cache.CachedSession(
        "data/price_cache", backend="sqlite", expire_after=cfg["price_cache_seconds"]
    )
    try:
        return _get_price(session, cfg["price_url"], cfg["timeout_seconds"])
    except PriceFetchError as e:
        logger.error("Error fetching ETH price: %s", e)
        return 0.0


class WalletSession:
    def __init__(self, provider: Optional[WalletProvider], eth_price_myr: float = 0.0):
        self.provider = provider
        self.eth_price_myr = eth_price_myr
        self.address: Optional[str] = None

    @property
    def connected(self) -> bool:
        return self.address is not None

    def restore(self) -> Optional[str]:
        """Reconnect silently if the provider already exposes an account."""
        if self.provider is None:
            return None
        accounts = self.provider.accounts()
        if accounts:
            self.address = accounts[0]
        return self.address

    def connect(self) -> str:
        if self.provider is None:
            raise WalletNotDetectedError("Wallet provider not detected. Configure WALLET_RPC_URL first.")
        accounts = self.provider.request_accounts()
        if not accounts:
            raise WalletError("Provider returned no accounts")
        self.address = accounts[0]
        logger.info("Wallet connected: %s", self.address)
        return self.address

    def disconnect(self) -> None:
        self.address = None

    def on_accounts_changed(self, accounts: List[str]) -> None:
        if not accounts:
            self.disconnect()
        else:
            self.address = accounts[0]

    def _require(self) -> str:
        if self.provider is None or self.address is None:
            raise WalletError("Wallet is not connected")
        return self.address

    def balance(self) -> WalletBalance:
        address = self._require()
        eth = wei_to_eth(self.provider.balance_wei(address))
        return WalletBalance(eth=eth, fiat=round(float(eth) * self.eth_price_myr, 2))

    def transactions(self, limit: int = 10) -> List[TransactionRow]:
        address = self._require().lower()
        rows = []
        for tx in self.provider.history(self._require())[:limit]:
            received = (tx.recipient or "").lower() == address
            rows.append(TransactionRow("received" if received else "sent", wei_to_eth(tx.value_wei)))
        return rows

    def tokens(self) -> List[TokenHolding]:
        self._require()
        return list(DEMO_TOKENS)
