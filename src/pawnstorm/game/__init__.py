"""Game management layer — the facade the presentation layer talks to.

Quick start::

    from pawnstorm.core import Color, parse_position
    from pawnstorm.game import Game

    game = Game()
    game.make_move(parse_position("e2"), parse_position("e4"))
    reply = game.find_best_move(Color.BLACK)
"""

from pawnstorm.game.interfaces import GameListener
from pawnstorm.game.state import Game, MoveRecord

__all__ = [
    "Game",
    "GameListener",
    "MoveRecord",
]
