"""
Alpaca REST client
Thin requests wrapper with auth headers, per-call timeout, bounded retry
and mapping of HTTP failures onto the trading error taxonomy.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional

import requests

from alpaca_trader.core.errors import (
    OrderRejected,
    RequestTimeout,
    Unauthorized,
    Unavailable,
)
from shared.config import AlpacaSettings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = {408, 429, 500, 502, 503, 504}


class AlpacaClient:
    """
    Alpaca API client.
    
    Only ``Unavailable`` failures on idempotent reads are retried, up to
    ``max_retries`` times after the first attempt with exponential backoff.
    Order submission is attempted exactly once.

    Each thread gets its own ``requests.Session`` from ``session_factory``
    since sessions are not safe to share across worker threads.
    """
    
    def __init__(
        self,
        settings: AlpacaSettings,
        session_factory: Callable[[], requests.Session] = requests.Session,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = settings
        self._session_factory = session_factory
        self._sleep = sleep
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()
        if not settings.has_credentials:
            logger.warning("Alpaca API credentials not configured - requests will be rejected")
    
    @property
    def settings(self) -> AlpacaSettings:
        return self._settings
    
    @property
    def session(self) -> requests.Session:
        """The calling thread's session, created with auth headers on first use."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            session.headers.update(
                {
                    "APCA-API-KEY-ID": self._settings.api_key_id,
                    "APCA-API-SECRET-KEY": self._settings.api_secret_key,
                    "Accept": "application/json",
                }
            )
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session
    
    def close(self) -> None:
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()
    
    def get_trading(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return self._get(f"{self._settings.trading_url}{path}", params)
    
    def get_data(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return self._get(f"{self._settings.data_url}{path}", params)
    
    def post_order(self, body: dict[str, Any]) -> Any:
        """POST /orders. Client-side 4xx responses become OrderRejected."""
        url = f"{self._settings.trading_url}/orders"
        response = self._send("POST", url, json=body)
        if response.status_code in (401, 403):
            raise Unauthorized(f"Order for {body.get('symbol')} not authorized: {response.status_code}")
        if 400 <= response.status_code < 500 and response.status_code not in RETRYABLE_STATUS:
            code, message = _error_details(response)
            logger.error(f"Order for {body.get('symbol')} rejected: {response.status_code} {message}")
            raise OrderRejected(
                f"Order rejected for {body.get('symbol')}: {message}",
                symbol=body.get("symbol"),
                status_code=response.status_code,
                broker_error_code=code,
            )
        return self._json_or_raise(response, url)
    
    def _get(self, url: str, params: Optional[dict[str, Any]]) -> Any:
        attempts = self._settings.max_retries + 1
        last_error: Optional[Unavailable] = None
        
        for attempt in range(attempts):
            try:
                response = self._send("GET", url, params=params)
                return self._json_or_raise(response, url)
            except Unavailable as e:
                last_error = e
                if attempt + 1 >= attempts:
                    break
                wait_time = self._settings.retry_backoff * (2 ** attempt)
                logger.warning(
                    f"GET {url} failed (attempt {attempt + 1}/{attempts}): {e}. "
                    f"Retrying in {wait_time:.2f}s..."
                )
                self._sleep(wait_time)
        
        logger.error(f"GET {url} failed after {attempts} attempts: {last_error}")
        raise last_error
    
    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self.session.request(method, url, timeout=self._settings.request_timeout, **kwargs)
        except requests.Timeout as e:
            raise RequestTimeout(f"{method} {url} timed out after {self._settings.request_timeout}s") from e
        except requests.RequestException as e:
            raise Unavailable(f"{method} {url} failed: {e}") from e
    
    def _json_or_raise(self, response: requests.Response, url: str) -> Any:
        status = response.status_code
        if status in (401, 403):
            raise Unauthorized(f"Alpaca refused credentials for {url}: {status}")
        if status >= 400:
            _, message = _error_details(response)
            raise Unavailable(f"Alpaca returned {status} for {url}: {message}", status_code=status)
        try:
            return response.json()
        except ValueError as e:
            raise Unavailable(f"Alpaca returned invalid JSON for {url}", status_code=status) from e


def _error_details(response: requests.Response) -> tuple[Optional[str], str]:
    try:
        data = response.json()
    except ValueError:
        return None, response.text or response.reason or ""
    if isinstance(data, dict):
        code = data.get("code")
        return (str(code) if code is not None else None), str(data.get("message", data))
    return None, str(data)
