"""
Trading Switch
Enabled/disabled flag consulted by every trading request.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


class TradingSwitch:
    """
    Thread-safe trading on/off flag.

    The session scheduler flips it at market open and close; request
    handlers check ``is_enabled`` before doing any trading work.
    """

    def __init__(self, enabled: bool = False, reason: str = "initial") -> None:
        self._lock = threading.Lock()
        self._enabled = enabled
        self._reason = reason
        self._changed_at: Optional[datetime] = None

    @property
    def is_enabled(self) -> bool:
        with self._lock:
            return self._enabled

    @property
    def reason(self) -> str:
        with self._lock:
            return self._reason

    @property
    def changed_at(self) -> Optional[datetime]:
        with self._lock:
            return self._changed_at

    def enable(self, reason: str = "manual") -> bool:
        """Enable trading. Returns False if it was already enabled."""
        return self._set(True, reason)

    def disable(self, reason: str = "manual") -> bool:
        """Disable trading. Returns False if it was already disabled."""
        return self._set(False, reason)

    def _set(self, enabled: bool, reason: str) -> bool:
        with self._lock:
            if self._enabled == enabled:
                return False
            self._enabled = enabled
            self._reason = reason
            self._changed_at = datetime.now(tz=timezone.utc)
        logger.info(f"Trading {'enabled' if enabled else 'disabled'} ({reason})")
        return True
