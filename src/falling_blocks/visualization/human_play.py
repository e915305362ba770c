from __future__ import annotations

import argparse
from typing import Callable, Dict, Optional

import pygame

from falling_blocks.game import GameConfig
from falling_blocks.session import GameSession, ManualFrameScheduler
from falling_blocks.utils.logging import setup_logger

from .renderer import Renderer


def _key_bindings(session: GameSession) -> Dict[int, Callable[[], object]]:
    return {
        pygame.K_LEFT: session.move_left,
        pygame.K_RIGHT: session.move_right,
        pygame.K_UP: session.rotate,
        pygame.K_DOWN: session.move_down,
        pygame.K_SPACE: session.hard_drop,
        pygame.K_p: session.toggle_pause,
    }


def run(config: Optional[GameConfig] = None) -> None:
    pygame.init()
    session: Optional[GameSession] = None
    try:
        clock = pygame.time.Clock()
        scheduler = ManualFrameScheduler(clock=pygame.time.get_ticks)
        session = GameSession(config, scheduler)
        renderer = Renderer()

        cfg = session.config
        screen = pygame.display.set_mode(renderer.window_size(cfg.width, cfg.height))
        pygame.display.set_caption("Falling Blocks")

        changed = [True]

        def on_change() -> None:
            changed[0] = True

        session.subscribe(on_change)
        bindings = _key_bindings(session)
        session.start()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        session.restart()
                    elif not session.get_snapshot().game_over:
                        command = bindings.get(event.key)
                        if command is not None:
                            command()

            scheduler.run_frame()

            if changed[0]:
                changed[0] = False
                renderer.draw(screen, session.get_board_with_piece(), session.get_snapshot())

            clock.tick(60)
    finally:
        if session is not None:
            session.destroy()
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks in a pygame window.")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--level", type=int, default=1, help="Initial level")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="info")
    return p


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(level=args.log_level)
    run(GameConfig(width=args.width, height=args.height, initial_level=args.level, random_seed=args.seed))


if __name__ == "__main__":  # pragma: no cover
    main()
