from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, List, Optional

import numpy as np

from .collision import collides
from .grid import GameGrid
from .pieces import Piece
from .rules import ScoringRules
from .shapes import TetrominoType


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5
    PAUSE = 6


class GameStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    random_seed: Optional[int] = None


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view of the engine handed to presentation code."""
    board: np.ndarray
    piece: Optional[Piece]
    next_piece: Optional[Piece]
    score: int
    level: int
    lines: int
    drop_interval_ms: int
    status: GameStatus

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameSnapshot):
            return NotImplemented
        return (
            (self.piece, self.next_piece, self.score, self.level, self.lines,
             self.drop_interval_ms, self.status)
            == (other.piece, other.next_piece, other.score, other.level, other.lines,
                other.drop_interval_ms, other.status)
            and np.array_equal(self.board, other.board)
        )


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class TetrisEngine:
    """Spawn, fall, lock, clear and respawn for a single game.

    The engine is driven from outside: a frame loop calls :meth:`tick` with the
    current time and input handlers call the move/rotate/drop operations.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.clock = clock or _monotonic_ms
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid()
        self.current: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self.score = 0
        self.level = 1
        self.lines = 0
        self.drop_interval_ms = self.rules.initial_drop_interval_ms
        self.last_drop_time = 0
        self.status = GameStatus.IDLE
        self._game_over_listeners: List[Callable[[int], None]] = []

    @property
    def running(self) -> bool:
        return self.status in (GameStatus.RUNNING, GameStatus.PAUSED)

    @property
    def paused(self) -> bool:
        return self.status is GameStatus.PAUSED

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def add_game_over_listener(self, callback: Callable[[int], None]) -> None:
        self._game_over_listeners.append(callback)

    def _now(self, now_ms: Optional[int]) -> int:
        return self.clock() if now_ms is None else now_ms

    def _random_piece(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return Piece.spawn(kind)

    def start(self, now_ms: Optional[int] = None) -> None:
        self.grid.reset()
        self.score = 0
        self.level = 1
        self.lines = 0
        self.drop_interval_ms = self.rules.initial_drop_interval_ms
        self.current = None
        self.status = GameStatus.RUNNING
        logger.info("Game started")
        self.next_piece = self._random_piece()
        self.spawn_next()
        self.last_drop_time = self._now(now_ms)

    def spawn_next(self) -> None:
        if self.next_piece is None:
            self.next_piece = self._random_piece()
        self.current = self.next_piece
        self.next_piece = self._random_piece()
        if collides(self.current.x, self.current.y, self.current.shape, self.grid):
            self._end_game()

    def _end_game(self) -> None:
        self.status = GameStatus.GAME_OVER
        logger.info("Game over, final score %d", self.score)
        for callback in self._game_over_listeners:
            callback(self.score)

    def move(self, dx: int, dy: int) -> bool:
        if self.status is not GameStatus.RUNNING or self.current is None:
            return False
        new_x = self.current.x + dx
        new_y = self.current.y + dy
        if collides(new_x, new_y, self.current.shape, self.grid):
            return False
        self.current.x = new_x
        self.current.y = new_y
        return True

    def soft_drop(self) -> bool:
        moved = self.move(0, 1)
        if moved:
            self.score += self.rules.soft_drop_points
        return moved

    def rotate_piece(self) -> bool:
        if self.status is not GameStatus.RUNNING or self.current is None:
            return False
        rotated = self.current.rotated()
        if collides(rotated.x, rotated.y, rotated.shape, self.grid):
            return False
        self.current.shape = rotated.shape
        return True

    def hard_drop(self) -> int:
        if self.status is not GameStatus.RUNNING or self.current is None:
            return 0
        dropped = 0
        while self.move(0, 1):
            self.score += self.rules.hard_drop_points
            dropped += 1
        self.lock()
        return dropped

    def lock(self) -> int:
        assert self.current is not None
        self.grid.lock(self.current)
        cleared = self.grid.clear_full_rows()
        if cleared:
            self.score += self.rules.score_for_lines(cleared, self.level)
            self.lines += cleared
            self.level = self.rules.level_for_lines(self.lines)
            self.drop_interval_ms = self.rules.drop_interval_for_level(self.level)
            logger.debug("Cleared %d rows, lines=%d level=%d", cleared, self.lines, self.level)
        self.spawn_next()
        return cleared

    def tick(self, now_ms: int) -> bool:
        if self.status is not GameStatus.RUNNING:
            return False
        if now_ms - self.last_drop_time <= self.drop_interval_ms:
            return False
        if not self.move(0, 1):
            self.lock()
        self.last_drop_time = now_ms
        return True

    def toggle_pause(self, now_ms: Optional[int] = None) -> None:
        if self.status is GameStatus.RUNNING:
            self.status = GameStatus.PAUSED
            logger.info("Paused")
        elif self.status is GameStatus.PAUSED:
            self.status = GameStatus.RUNNING
            self.last_drop_time = self._now(now_ms)
            logger.info("Resumed")

    def apply(self, action: Action, now_ms: Optional[int] = None) -> None:
        action = Action(action)
        if action == Action.LEFT:
            self.move(-1, 0)
        elif action == Action.RIGHT:
            self.move(1, 0)
        elif action == Action.ROTATE:
            self.rotate_piece()
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.PAUSE:
            self.toggle_pause(now_ms)
        elif action == Action.NONE:
            pass

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            board=self.grid.clone_state(),
            piece=self.current.copy() if self.current is not None else None,
            next_piece=self.next_piece.copy() if self.next_piece is not None else None,
            score=self.score,
            level=self.level,
            lines=self.lines,
            drop_interval_ms=self.drop_interval_ms,
            status=self.status,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current is not None and self.status is not GameStatus.GAME_OVER:
            for x, y in self.current.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -self.current.color_id
        return state
