"""Static evaluation: material plus a centralization bonus."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pawnstorm.core.enums import Color, PieceType

if TYPE_CHECKING:
    from pawnstorm.core.board import Board

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 0,
}

CENTER_BONUS = 30
NEAR_CENTER_BONUS = 10


def square_bonus(file: int, rank: int) -> int:
    """+30 on d4/e4/d5/e5, +10 on the ring around them, else 0."""
    if file in (3, 4) and rank in (3, 4):
        return CENTER_BONUS
    if 2 <= file <= 5 and 2 <= rank <= 5:
        return NEAR_CENTER_BONUS
    return 0


def evaluate(board: Board, perspective: Color) -> int:
    """Score *board* from *perspective*; ``evaluate(b, W) == -evaluate(b, B)``."""
    score = 0
    for piece in board.get_all_pieces():
        if piece.piece_type == PieceType.KING:
            continue
        value = PIECE_VALUES[piece.piece_type]
        value += square_bonus(piece.position.file, piece.position.rank)
        if piece.color == perspective:
            score += value
        else:
            score -= value
    return score
