from __future__ import annotations

import time
from typing import Callable, Dict, Optional, Protocol

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """Host-provided repeating callback, one request per frame (animation-frame style).

    Timestamps are milliseconds on the scheduler's own clock.
    """

    def now(self) -> float: ...

    def request_frame(self, callback: FrameCallback) -> int: ...

    def cancel_frame(self, handle: int) -> None: ...


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class ManualFrameScheduler:
    """Frame scheduler driven by the host calling `run_frame` once per frame.

    Callbacks requested while a frame is running are deferred to the next frame.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or _monotonic_ms
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    def now(self) -> float:
        return float(self._clock())

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_frame(self, timestamp: Optional[float] = None) -> int:
        ts = self.now() if timestamp is None else float(timestamp)
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback(ts)
        return len(due)
