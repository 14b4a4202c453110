from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from falling_blocks.game import Action, GameConfig, GameSnapshot, Piece, TetrisEngine
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_p: Action.PAUSE,
}


class PygameAdapter:
    """Keyboard and window front-end for a :class:`TetrisEngine`."""

    def __init__(self, engine: TetrisEngine, renderer: Renderer) -> None:
        self.engine = engine
        self.renderer = renderer

    def render_board(self, snapshot: GameSnapshot) -> None:
        self.renderer.render_board(snapshot)

    def render_next(self, piece: Optional[Piece]) -> None:
        self.renderer.render_next(piece)

    def on_input(self, event: pygame.event.Event) -> Optional[Action]:
        if event.type != pygame.KEYDOWN:
            return None
        action = KEY_TO_ACTION.get(event.key)
        # Only the pause key gets through while the game is not actively running
        if action is Action.PAUSE:
            return action if self.engine.running else None
        if self.engine.paused or not self.engine.running:
            return None
        return action


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--verbose", action="store_true", help="Log engine state transitions")
    return p


def run(seed: Optional[int] = None, cell_size: int = 30, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        engine = TetrisEngine(GameConfig(random_seed=seed), clock=pygame.time.get_ticks)
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size)
        pygame.display.set_caption("Falling Blocks")
        renderer.attach(screen)
        adapter = PygameAdapter(engine, renderer)
        engine.add_game_over_listener(lambda score: print(f"Game over! Final score: {score}"))

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_RETURN:
                    if not engine.running:
                        engine.start(pygame.time.get_ticks())
                else:
                    action = adapter.on_input(event)
                    if action is not None:
                        engine.apply(action, pygame.time.get_ticks())

            engine.tick(pygame.time.get_ticks())

            snapshot = engine.snapshot()
            adapter.render_board(snapshot)
            adapter.render_next(snapshot.next_piece)
            pygame.display.flip()
            clock.tick(fps)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(seed=args.seed, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
