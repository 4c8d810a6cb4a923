"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from pawnstorm.core import Board, all_legal_moves, Color

    board = Board.initial()
    for move in all_legal_moves(Color.WHITE, board):
        print(move)
"""

from pawnstorm.core.board import Board, MissingKingError
from pawnstorm.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    DrawReason,
    GameStatus,
    PieceType,
)
from pawnstorm.core.legality import (
    all_legal_moves,
    castling_moves,
    has_legal_move,
    is_in_check,
    legal_moves,
)
from pawnstorm.core.move import Move, MoveError, MoveResult
from pawnstorm.core.move_generator import is_square_attacked, pseudo_legal_moves
from pawnstorm.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    move_to_san,
)
from pawnstorm.core.piece import Piece
from pawnstorm.core.position import Position, parse_position
from pawnstorm.core.rules import DEFAULT_RULES, GameState, Rules, RulesConfig

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "DrawReason",
    "GameStatus",
    "PieceType",
    "PROMOTION_TYPES",
    # Domain objects
    "Board",
    "GameState",
    "MissingKingError",
    "Move",
    "MoveError",
    "MoveResult",
    "Piece",
    "Position",
    "Rules",
    "RulesConfig",
    "DEFAULT_RULES",
    "parse_position",
    # Move generation / legality
    "all_legal_moves",
    "castling_moves",
    "has_legal_move",
    "is_in_check",
    "is_square_attacked",
    "legal_moves",
    "pseudo_legal_moves",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "move_to_san",
]
