"""Listener interface for game notifications.

A listener is handed to :meth:`Game.make_move` for that call only; there is no
process-wide event manager.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawnstorm.core.enums import Color
    from pawnstorm.core.rules import GameState
    from pawnstorm.game.state import Game, MoveRecord


class GameListener:
    """Receives notifications about a committed move. Override what you need."""

    def on_move(self, game: Game, record: MoveRecord) -> None:
        """A move was committed."""

    def on_check(self, game: Game, color: Color) -> None:
        """*color* is now in check (and not mated)."""

    def on_game_over(self, game: Game, state: GameState) -> None:
        """The game reached a terminal state."""
