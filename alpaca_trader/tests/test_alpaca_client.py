from __future__ import annotations

import threading

import pytest
import requests

from alpaca_trader.core.errors import OrderRejected, RequestTimeout, Unauthorized, Unavailable
from alpaca_trader.data.client import AlpacaClient
from shared.config import AlpacaSettings


class _Response:
    def __init__(self, status_code: int = 200, payload=None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = ""

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _Session:
    def __init__(self, *outcomes) -> None:
        self.headers: dict[str, str] = {}
        self.outcomes = list(outcomes)
        self.calls: list[tuple[str, str, dict]] = []

    def request(self, method: str, url: str, **kwargs):
        self.calls.append((method, url, kwargs))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        return None


def _client(session: _Session, **overrides) -> tuple[AlpacaClient, list[float]]:
    settings = AlpacaSettings(api_key_id="key", api_secret_key="secret", **overrides)
    sleeps: list[float] = []
    return AlpacaClient(settings, session_factory=lambda: session, sleep=sleeps.append), sleeps


def test_sets_auth_headers_and_timeout() -> None:
    session = _Session(_Response(payload=[]))
    client, _ = _client(session, request_timeout=2.5)

    assert client.get_trading("/assets") == []
    assert session.headers["APCA-API-KEY-ID"] == "key"
    assert session.headers["APCA-API-SECRET-KEY"] == "secret"
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "https://paper-api.alpaca.markets/v2/assets")
    assert kwargs["timeout"] == 2.5


def test_live_mode_uses_live_trading_url() -> None:
    session = _Session(_Response(payload={}))
    client, _ = _client(session, paper=False)
    client.get_trading("/account")
    assert session.calls[0][1] == "https://api.alpaca.markets/v2/account"


def test_retries_unavailable_with_backoff() -> None:
    session = _Session(
        _Response(status_code=503, text="busy"),
        requests.ConnectionError("reset"),
        _Response(payload={"bars": []}),
    )
    client, sleeps = _client(session, max_retries=3, retry_backoff=0.5)

    assert client.get_data("/stocks/AAPL/bars") == {"bars": []}
    assert sleeps == [0.5, 1.0]
    assert len(session.calls) == 3


def test_gives_up_after_max_retries() -> None:
    session = _Session(*[_Response(status_code=500, text="oops") for _ in range(3)])
    client, sleeps = _client(session, max_retries=2, retry_backoff=0.5)

    with pytest.raises(Unavailable) as exc_info:
        client.get_trading("/assets")
    assert exc_info.value.status_code == 500
    assert len(session.calls) == 3
    assert sleeps == [0.5, 1.0]


def test_zero_retries_attempts_once() -> None:
    session = _Session(_Response(status_code=503, text="busy"), _Response(payload=[]))
    client, sleeps = _client(session, max_retries=0)

    with pytest.raises(Unavailable):
        client.get_trading("/assets")
    assert len(session.calls) == 1
    assert sleeps == []


def test_timeout_maps_to_request_timeout() -> None:
    session = _Session(requests.Timeout("slow"))
    client, _ = _client(session, max_retries=0)

    with pytest.raises(RequestTimeout):
        client.get_data("/stocks/AAPL/bars")


def test_unauthorized_is_not_retried() -> None:
    session = _Session(_Response(status_code=401, payload={"message": "forbidden"}))
    client, sleeps = _client(session, max_retries=3)

    with pytest.raises(Unauthorized):
        client.get_trading("/account")
    assert sleeps == []
    assert len(session.calls) == 1


def test_order_rejection_carries_broker_details() -> None:
    session = _Session(_Response(status_code=403, payload={"code": 40310000, "message": "insufficient buying power"}))
    client, _ = _client(session)

    with pytest.raises(Unauthorized):
        client.post_order({"symbol": "AAPL"})

    session = _Session(_Response(status_code=422, payload={"code": 42210000, "message": "qty must be > 0"}))
    client, _ = _client(session)

    with pytest.raises(OrderRejected) as exc_info:
        client.post_order({"symbol": "AAPL"})
    assert exc_info.value.symbol == "AAPL"
    assert exc_info.value.status_code == 422
    assert exc_info.value.broker_error_code == "42210000"


def test_order_submission_is_not_retried() -> None:
    session = _Session(_Response(status_code=503, text="busy"))
    client, sleeps = _client(session, max_retries=3)

    with pytest.raises(Unavailable):
        client.post_order({"symbol": "AAPL"})
    assert sleeps == []
    assert len(session.calls) == 1


def test_invalid_json_is_unavailable() -> None:
    session = _Session(_Response(status_code=200, payload=None, text="<html>"))
    client, _ = _client(session, max_retries=0)

    with pytest.raises(Unavailable, match="invalid JSON"):
        client.get_trading("/assets")


def test_each_thread_gets_its_own_session() -> None:
    created: list[_Session] = []

    def factory() -> _Session:
        session = _Session(_Response(payload=[]))
        created.append(session)
        return session

    settings = AlpacaSettings(api_key_id="key", api_secret_key="secret")
    client = AlpacaClient(settings, session_factory=factory, sleep=lambda _: None)

    client.get_trading("/assets")
    worker = threading.Thread(target=client.get_trading, args=("/assets",))
    worker.start()
    worker.join()

    assert len(created) == 2
    assert created[0] is not created[1]
    assert all(session.headers["APCA-API-KEY-ID"] == "key" for session in created)
    assert all(len(session.calls) == 1 for session in created)

    closed: list[_Session] = []
    for session in created:
        session.close = lambda s=session: closed.append(s)
    client.close()
    assert closed == created
