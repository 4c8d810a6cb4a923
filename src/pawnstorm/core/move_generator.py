"""Pseudo-legal move generation and attack detection.

Nothing here knows about check: the moves produced are geometrically
plausible for the piece and may still expose the mover's king.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from pawnstorm.core.enums import PROMOTION_TYPES, Color, PieceType
from pawnstorm.core.move import Move
from pawnstorm.core.piece import Piece
from pawnstorm.core.position import ALL_POSITIONS, Position

if TYPE_CHECKING:
    from pawnstorm.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[Position, ...]]:
    targets: dict[Position, tuple[Position, ...]] = {}
    for pos in ALL_POSITIONS:
        moves: list[Position] = []
        for df, dr in offsets:
            to_pos = pos.offset(df, dr)
            if to_pos is not None:
                moves.append(to_pos)
        targets[pos] = tuple(moves)
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[tuple[Position, ...], ...]]:
    rays_per_square: dict[Position, tuple[tuple[Position, ...], ...]] = {}
    for pos in ALL_POSITIONS:
        square_rays: list[tuple[Position, ...]] = []
        for df, dr in directions:
            ray: list[Position] = []
            to_pos = pos.offset(df, dr)
            while to_pos is not None:
                ray.append(to_pos)
                to_pos = to_pos.offset(df, dr)
            square_rays.append(tuple(ray))
        rays_per_square[pos] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Piece-specific generators ---------------------------------------------


def _append_pawn_move(
    piece: Piece,
    to_pos: Position,
    captured: Piece | None,
    moves: list[Move],
) -> None:
    last_rank = piece.color.opposite.home_rank
    if to_pos.rank == last_rank:
        for pt in PROMOTION_TYPES:
            moves.append(Move(piece.position, to_pos, piece, captured, promotion=pt))
    else:
        moves.append(Move(piece.position, to_pos, piece, captured))


def _gen_pawn(piece: Piece, board: Board) -> list[Move]:
    moves: list[Move] = []
    pos = piece.position
    direction = piece.color.pawn_direction

    one_step = pos.offset(0, direction)
    if one_step is not None and board.is_empty(one_step):
        _append_pawn_move(piece, one_step, None, moves)
        start_rank = 1 if piece.color == Color.WHITE else 6
        if pos.rank == start_rank:
            two_step = pos.offset(0, 2 * direction)
            if two_step is not None and board.is_empty(two_step):
                moves.append(Move(pos, two_step, piece))

    for df in (-1, 1):
        cap_pos = pos.offset(df, direction)
        if cap_pos is None:
            continue
        target = board.get_piece_at(cap_pos)
        if target is not None:
            if target.color != piece.color:
                _append_pawn_move(piece, cap_pos, target, moves)
            continue

        # En passant: the passed pawn sits beside us, not on the target square.
        beside = pos.offset(df, 0)
        if beside is None:
            continue
        passed = board.get_piece_at(beside)
        if (
            passed is not None
            and passed.double_stepped
            and passed.piece_type == PieceType.PAWN
            and passed.color != piece.color
        ):
            moves.append(Move(pos, cap_pos, piece, passed, is_en_passant=True))

    return moves


def _gen_steps(
    piece: Piece,
    board: Board,
    targets: dict[Position, tuple[Position, ...]],
) -> list[Move]:
    moves: list[Move] = []
    for to_pos in targets[piece.position]:
        target = board.get_piece_at(to_pos)
        if target is None or target.color != piece.color:
            moves.append(Move(piece.position, to_pos, piece, target))
    return moves


def _gen_sliding(
    piece: Piece,
    board: Board,
    rays: dict[Position, tuple[tuple[Position, ...], ...]],
) -> list[Move]:
    moves: list[Move] = []
    for ray in rays[piece.position]:
        for to_pos in ray:
            target = board.get_piece_at(to_pos)
            if target is None:
                moves.append(Move(piece.position, to_pos, piece))
                continue
            if target.color != piece.color:
                moves.append(Move(piece.position, to_pos, piece, target))
            break
    return moves


_GENERATORS: dict[PieceType, Callable[[Piece, Board], list[Move]]] = {
    PieceType.PAWN: _gen_pawn,
    PieceType.KNIGHT: lambda piece, board: _gen_steps(piece, board, _KNIGHT_TARGETS),
    PieceType.BISHOP: lambda piece, board: _gen_sliding(piece, board, _BISHOP_RAYS),
    PieceType.ROOK: lambda piece, board: _gen_sliding(piece, board, _ROOK_RAYS),
    PieceType.QUEEN: lambda piece, board: _gen_sliding(piece, board, _QUEEN_RAYS),
    PieceType.KING: lambda piece, board: _gen_steps(piece, board, _KING_TARGETS),
}


# -- Public API -------------------------------------------------------------


def pseudo_legal_moves(piece: Piece, board: Board) -> list[Move]:
    """Geometrically plausible moves of *piece* (castling excluded)."""
    return _GENERATORS[piece.piece_type](piece, board)


def is_square_attacked(pos: Position, by_color: Color, board: Board) -> bool:
    """Is *pos* attacked by any piece of *by_color*?

    Unlike :func:`pseudo_legal_moves`, pawn diagonals count as attacks
    whether or not the square is occupied.
    """
    # A pawn of by_color attacks pos from one rank "behind" it.
    back = -by_color.pawn_direction
    for df in (-1, 1):
        src = pos.offset(df, back)
        if src is None:
            continue
        piece = board.get_piece_at(src)
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.PAWN
        ):
            return True

    for src in _KNIGHT_TARGETS[pos]:
        piece = board.get_piece_at(src)
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KNIGHT
        ):
            return True

    for src in _KING_TARGETS[pos]:
        piece = board.get_piece_at(src)
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KING
        ):
            return True

    for rays, sliders in (
        (_BISHOP_RAYS, (PieceType.BISHOP, PieceType.QUEEN)),
        (_ROOK_RAYS, (PieceType.ROOK, PieceType.QUEEN)),
    ):
        for ray in rays[pos]:
            for src in ray:
                piece = board.get_piece_at(src)
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in sliders:
                    return True
                break

    return False
