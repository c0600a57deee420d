from decimal import Decimal

import pytest
import requests

import tools.wallet as wallet
from tools.wallet import (
    JsonRpcProvider,
    PriceFetchError,
    Transaction,
    WalletError,
    WalletNotDetectedError,
    WalletSession,
    fetch_eth_price_myr,
    wei_to_eth,
)

ME = "0xAbC0000000000000000000000000000000000001"
OTHER = "0x0000000000000000000000000000000000000002"
ETH = 10**18


class FakeProvider:
    def __init__(self, accounts=(ME,), balance=ETH, history=()):
        self._accounts = list(accounts)
        self._balance = balance
        self._history = list(history)

    def accounts(self):
        return self._accounts

    def request_accounts(self):
        return self._accounts

    def balance_wei(self, address):
        return self._balance

    def history(self, address):
        return self._history


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


class FakeHttp:
    def __init__(self, payload=None, exc=None):
        self.payload = payload
        self.exc = exc
        self.requests = []

    def post(self, url, json=None, timeout=None):
        self.requests.append(json)
        if self.exc:
            raise self.exc
        return FakeResponse(self.payload)

    def get(self, url, timeout=None):
        self.requests.append(url)
        if self.exc:
            raise self.exc
        return FakeResponse(self.payload)


def test_wei_to_eth():
    assert wei_to_eth(ETH // 4) == Decimal("0.25")


def test_connect_without_provider():
    session = WalletSession(None)
    assert session.restore() is None
    with pytest.raises(WalletNotDetectedError):
        session.connect()


def test_connect_with_no_accounts():
    with pytest.raises(WalletError):
        WalletSession(FakeProvider(accounts=())).connect()


def test_restore_and_account_changes():
    session = WalletSession(FakeProvider())
    assert session.restore() == ME
    assert session.connected
    session.on_accounts_changed([OTHER])
    assert session.address == OTHER
    session.on_accounts_changed([])
    assert not session.connected


def test_balance_in_eth_and_ringgit():
    session = WalletSession(FakeProvider(balance=3 * ETH // 2), eth_price_myr=10000)
    session.connect()
    bal = session.balance()
    assert bal.eth_text == "1.5000"
    assert bal.fiat == 15000
    assert bal.fiat_text == "≈ RM15,000.00"


def test_transactions_direction():
    history = [
        Transaction(OTHER, ME.lower(), ETH // 4),
        Transaction(ME, OTHER, ETH),
    ] + [Transaction(ME, OTHER, 1)] * 20
    session = WalletSession(FakeProvider(history=history))
    session.connect()
    rows = session.transactions()
    assert len(rows) == 10
    assert (rows[0].label, rows[0].amount_text) == ("Received", "+0.25 ETH")
    assert (rows[1].label, rows[1].amount_text) == ("Sent", "-1 ETH")


def test_queries_require_connection():
    session = WalletSession(FakeProvider())
    with pytest.raises(WalletError):
        session.balance()
    with pytest.raises(WalletError):
        session.tokens()
    session.connect()
    assert session.tokens()[0].symbol == "PROP"
    session.disconnect()
    with pytest.raises(WalletError):
        session.transactions()


def test_json_rpc_provider():
    http = FakeHttp({"jsonrpc": "2.0", "id": 1, "result": hex(ETH)})
    provider = JsonRpcProvider("http://node", session=http)
    assert provider.balance_wei(ME) == ETH
    assert http.requests[0]["method"] == "eth_getBalance"
    assert http.requests[0]["params"] == [ME, "latest"]
    assert provider.history(ME) == []


def test_json_rpc_errors():
    provider = JsonRpcProvider("http://node", session=FakeHttp({"error": {"message": "boom"}}))
    with pytest.raises(WalletError, match="boom"):
        provider.accounts()
    provider = JsonRpcProvider("http://node", session=FakeHttp(exc=requests.ConnectionError("down")))
    with pytest.raises(WalletError, match="eth_accounts failed"):
        provider.accounts()


def test_fetch_eth_price():
    http = FakeHttp({"ethereum": {"myr": 15000}})
    assert fetch_eth_price_myr(session=http) == 15000.0


def test_fetch_eth_price_failure_returns_zero(monkeypatch):
    def fail(*args):
        raise PriceFetchError("rate limited")

    monkeypatch.setattr(wallet, "_get_price", fail)
    assert fetch_eth_price_myr(session=FakeHttp()) == 0.0
