# tedi/core/StatusMessage.py
"""Self-expiring status bar message."""

import time
from typing import Callable, Optional


class StatusMessage:
    """A message shown in the message bar for `timeout` seconds after it is set."""

    def __init__(
        self,
        initial_message: str = "",
        timeout: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.timeout = timeout
        self._clock = clock
        self._message: Optional[str] = initial_message or None
        self._set_time: Optional[float] = None
        if initial_message:
            self._set_time = clock()

    def set_message(self, message: str) -> None:
        self._message = message
        self._set_time = self._clock()

    def clear(self) -> None:
        self._message = None
        self._set_time = None

    @property
    def message(self) -> Optional[str]:
        """The current text, or None once it has expired."""
        if self._set_time is None:
            return None
        if self._clock() - self._set_time > self.timeout:
            self.clear()
            return None
        return self._message
