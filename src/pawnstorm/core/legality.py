"""Legal move filtering, check detection and castling."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pawnstorm.core.enums import Color, PieceType
from pawnstorm.core.move import Move
from pawnstorm.core.move_generator import is_square_attacked, pseudo_legal_moves
from pawnstorm.core.position import Position

if TYPE_CHECKING:
    from pawnstorm.core.board import Board
    from pawnstorm.core.piece import Piece


# file of rook, files that must be empty, files the king crosses, king target
_CASTLING_SIDES: tuple[tuple[int, tuple[int, ...], tuple[int, ...], int], ...] = (
    (7, (5, 6), (5, 6), 6),
    (0, (1, 2, 3), (3, 2), 2),
)


def is_in_check(color: Color, board: Board) -> bool:
    """Is *color*'s king attacked by the opponent?

    Returns ``False`` when *color* has no king; that is never a legal game
    state and :meth:`Board.king_of` is the strict lookup.
    """
    king = board.find_king(color)
    if king is None:
        return False
    return is_square_attacked(king.position, color.opposite, board)


def leaves_king_in_check(move: Move, board: Board) -> bool:
    """Would committing *move* leave the mover's own king attacked?"""
    mover = board.get_piece_at(move.from_pos)
    assert mover is not None, f"No piece on {move.from_pos}"
    trial = board.clone()
    trial.apply_move(move)
    return is_in_check(mover.color, trial)


def castling_moves(king: Piece, board: Board) -> list[Move]:
    """Castling moves currently available to *king*."""
    home = king.color.home_rank
    if (
        king.piece_type != PieceType.KING
        or king.has_moved
        or king.position != Position(4, home)
    ):
        return []

    opponent = king.color.opposite
    if is_square_attacked(king.position, opponent, board):
        return []

    moves: list[Move] = []
    for rook_file, empty_files, transit_files, target_file in _CASTLING_SIDES:
        rook = board.get_piece_at(Position(rook_file, home))
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != king.color
            or rook.has_moved
        ):
            continue
        if not all(board.is_empty(Position(f, home)) for f in empty_files):
            continue
        if any(
            is_square_attacked(Position(f, home), opponent, board)
            for f in transit_files
        ):
            continue
        moves.append(
            Move(king.position, Position(target_file, home), king, is_castling=True)
        )
    return moves


def legal_moves(piece: Piece, board: Board) -> list[Move]:
    """Moves of *piece* that do not leave its own king in check."""
    candidates = pseudo_legal_moves(piece, board)
    if piece.piece_type == PieceType.KING:
        candidates.extend(castling_moves(piece, board))

    legal: list[Move] = []
    append_legal = legal.append
    for move in candidates:
        occupant = board.get_piece_at(move.to_pos)
        if occupant is not None and occupant.color == piece.color:
            continue
        if leaves_king_in_check(move, board):
            continue
        append_legal(move)
    return legal


def all_legal_moves(color: Color, board: Board) -> list[Move]:
    """Every legal move for *color*, in board enumeration order."""
    moves: list[Move] = []
    for piece in board.pieces_of(color):
        moves.extend(legal_moves(piece, board))
    return moves


def has_legal_move(color: Color, board: Board) -> bool:
    """Whether *color* has at least one legal move (stops at the first)."""
    return any(legal_moves(piece, board) for piece in board.pieces_of(color))
