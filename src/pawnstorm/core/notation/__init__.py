"""Notation package: FEN boundary format, SAN and movetext."""

from pawnstorm.core.notation.fen import STARTING_FEN, board_from_fen, board_to_fen
from pawnstorm.core.notation.pgn import movetext_from_sans, result_token
from pawnstorm.core.notation.san import move_to_san

__all__ = [
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "move_to_san",
    "movetext_from_sans",
    "result_token",
]
