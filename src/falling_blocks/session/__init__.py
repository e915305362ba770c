"""Session layer: one engine, a snapshot cache, observers and the auto-descent loop."""

from .scheduler import FrameCallback, FrameScheduler, ManualFrameScheduler
from .store import GameSession, Listener

__all__ = [
    "FrameCallback",
    "FrameScheduler",
    "ManualFrameScheduler",
    "GameSession",
    "Listener",
]
