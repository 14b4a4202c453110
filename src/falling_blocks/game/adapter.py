from __future__ import annotations

from typing import Any, Optional, Protocol

from .core import Action, GameSnapshot
from .pieces import Piece


class PresentationAdapter(Protocol):
    """What a front-end provides to show the engine and feed it input.

    Adapters read :class:`GameSnapshot` objects and translate raw input events
    into :class:`Action` values; the engine itself never calls into them.
    """

    def render_board(self, snapshot: GameSnapshot) -> None: ...

    def render_next(self, piece: Optional[Piece]) -> None: ...

    def on_input(self, event: Any) -> Optional[Action]: ...
