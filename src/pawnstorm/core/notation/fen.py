"""FEN parsing and serialization.

Only used at the engine boundary: the board keeps its own representation and
derives castling rights and the en passant target from piece bookkeeping.
"""

from __future__ import annotations

from pawnstorm.core.board import Board
from pawnstorm.core.enums import CastlingRights, Color, PieceType
from pawnstorm.core.piece import Piece
from pawnstorm.core.position import Position, parse_position

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}

# right -> (color, rook file)
_ROOK_CORNERS: dict[CastlingRights, tuple[Color, int]] = {
    CastlingRights.WHITE_KINGSIDE: (Color.WHITE, 7),
    CastlingRights.WHITE_QUEENSIDE: (Color.WHITE, 0),
    CastlingRights.BLACK_KINGSIDE: (Color.BLACK, 7),
    CastlingRights.BLACK_QUEENSIDE: (Color.BLACK, 0),
}


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string into a :class:`Board`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    board = Board(side)

    # 2. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                pos = Position(file, rank)
                board.set_piece_at(pos, Piece.from_char(ch, pos))
                file += 1
            if file > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 3. Castling: anything without a right is treated as having moved
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right
    _apply_castling_rights(board, castling)

    # 4. En passant
    if ep_part != "-":
        ep = parse_position(ep_part)
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if ep.rank != expected_ep_rank:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        mover = side.opposite
        pawn_pos = Position(ep.file, ep.rank + mover.pawn_direction)
        pawn = board.get_piece_at(pawn_pos)
        if pawn is None or pawn.piece_type != PieceType.PAWN or pawn.color != mover:
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}")
        pawn.double_stepped = True
        pawn.has_moved = True
        pawn.move_count = 1

    # 5–6. Clocks (optional)
    if len(parts) > 4:
        board.halfmove_clock = int(parts[4])
        if board.halfmove_clock < 0:
            raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")

    if len(parts) > 5:
        board.fullmove_number = int(parts[5])
        if board.fullmove_number < 1:
            raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    return board


def _apply_castling_rights(board: Board, castling: CastlingRights) -> None:
    for color, both in (
        (Color.WHITE, CastlingRights.WHITE_BOTH),
        (Color.BLACK, CastlingRights.BLACK_BOTH),
    ):
        king = board.get_piece_at(Position(4, color.home_rank))
        if (
            king is not None
            and king.piece_type == PieceType.KING
            and not castling & both
        ):
            king.has_moved = True

    for right, (color, rook_file) in _ROOK_CORNERS.items():
        rook = board.get_piece_at(Position(rook_file, color.home_rank))
        if rook is not None and rook.piece_type == PieceType.ROOK and not castling & right:
            rook.has_moved = True


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board.get_piece_at(Position(file, rank))
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if board.current_player == Color.WHITE else "b"

    # 3. Castling
    rights = board.castling_rights
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS.items() if rights & right)
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep = board.en_passant_target
    ep_str = ep.name if ep is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{board.halfmove_clock} {board.fullmove_number}"
    )
