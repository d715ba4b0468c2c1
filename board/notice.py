import asyncio
from typing import Any, Optional, Protocol
from settings import NOTICE_TIMEOUT_SECONDS


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Any, *args: Any) -> Any: ...


class Notice:
    """User-facing message that clears itself after a fixed delay."""

    def __init__(self, timeout: float = NOTICE_TIMEOUT_SECONDS, scheduler: Optional[Scheduler] = None):
        self.timeout = timeout
        self.message: Optional[str] = None
        self._scheduler = scheduler
        self._handle = None

    @property
    def active(self) -> bool:
        return self.message is not None

    def show(self, message: str) -> None:
        """Display ``message``, restarting the expiry timer."""
        self._cancel_timer()
        self.message = message
        scheduler = self._scheduler or asyncio.get_running_loop()
        self._handle = scheduler.call_later(self.timeout, self.clear)

    def clear(self) -> None:
        self._cancel_timer()
        self.message = None

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
