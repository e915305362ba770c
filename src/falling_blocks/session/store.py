from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

import numpy as np

from falling_blocks.game import FallingBlocksGame, GameConfig, GameState, ScoringRules

from .scheduler import FrameScheduler, ManualFrameScheduler

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class GameSession:
    """Owns one engine and exposes it to the outside world.

    - Observers register with `subscribe` and are called synchronously after
      every state change that the notification policy reports.
    - `get_snapshot` rebuilds the immutable `GameState` only when something
      changed since the previous read, so observers get a stable reference.
    - `start` runs the auto-descent loop on the frame scheduler; the loop keeps
      polling while paused or over so pausing never needs a restart.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        scheduler: Optional[FrameScheduler] = None,
        rules: Optional[ScoringRules] = None,
    ) -> None:
        self.game = FallingBlocksGame(config, rules)
        self.scheduler: FrameScheduler = scheduler or ManualFrameScheduler()
        self._listeners: Dict[Listener, bool] = {}
        self._snapshot: GameState = self.game.get_state()
        self._dirty = False
        self._running = False
        self._frame_handle: Optional[int] = None
        self._last_step_time = 0.0

    @property
    def config(self) -> GameConfig:
        return self.game.config

    @property
    def is_running(self) -> bool:
        return self._running

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners[listener] = True

        def unsubscribe() -> None:
            self._listeners.pop(listener, None)

        return unsubscribe

    def _notify(self) -> None:
        self._dirty = True
        # Iterate over a copy; listeners removed mid-round are skipped.
        for listener in list(self._listeners):
            if self._listeners.get(listener):
                listener()

    def get_snapshot(self) -> GameState:
        if self._dirty:
            self._snapshot = self.game.get_state()
            self._dirty = False
        return self._snapshot

    def get_board_with_piece(self) -> np.ndarray:
        return self.game.get_board_with_piece()

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._last_step_time = self.scheduler.now()
        self._frame_handle = self.scheduler.request_frame(self._on_frame)
        logger.debug("auto-descent started")

    def stop(self) -> None:
        self._running = False
        if self._frame_handle is not None:
            self.scheduler.cancel_frame(self._frame_handle)
            self._frame_handle = None
            logger.debug("auto-descent stopped")

    def destroy(self) -> None:
        self.stop()
        self._listeners.clear()
        logger.debug("session destroyed")

    def _on_frame(self, timestamp: float) -> None:
        self._frame_handle = None
        if not self._running:
            return
        state = self.get_snapshot()
        if not (state.game_over or state.paused):
            interval = self.game.rules.drop_interval_ms(state.level)
            if timestamp - self._last_step_time > interval:
                self.move_down()
                self._last_step_time = timestamp
        # A listener may have stopped the loop during move_down.
        if self._running:
            self._frame_handle = self.scheduler.request_frame(self._on_frame)

    def move_down(self) -> bool:
        moved = self.game.move_down()
        # Always notify: a failed step may have locked the piece or ended the game.
        self._notify()
        return moved

    def hard_drop(self) -> bool:
        dropped = self.game.hard_drop()
        self._notify()
        return dropped

    def move_left(self) -> bool:
        moved = self.game.move_left()
        if moved:
            self._notify()
        return moved

    def move_right(self) -> bool:
        moved = self.game.move_right()
        if moved:
            self._notify()
        return moved

    def rotate(self) -> bool:
        rotated = self.game.rotate()
        if rotated:
            self._notify()
        return rotated

    def toggle_pause(self) -> None:
        self.game.toggle_pause()
        self._notify()

    def restart(self) -> None:
        self.game.restart()
        self._notify()
