"""SAN (Standard Algebraic Notation) conversion."""

from __future__ import annotations

from pawnstorm.core.board import Board
from pawnstorm.core.enums import PieceType
from pawnstorm.core.legality import has_legal_move, is_in_check, legal_moves
from pawnstorm.core.move import Move

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def move_to_san(board: Board, move: Move) -> str:
    """Convert a legal *move* to SAN given the *board* before the move."""
    piece = board.get_piece_at(move.from_pos)
    assert piece is not None

    # Castling
    if move.is_castling:
        san = "O-O" if move.to_pos.file == 6 else "O-O-O"
    else:
        san = ""
        is_capture = not board.is_empty(move.to_pos) or move.is_en_passant

        if piece.piece_type == PieceType.PAWN:
            if is_capture:
                san += move.from_pos.name[0]
        else:
            san += _SAN_PIECE[piece.piece_type]

            # Disambiguation
            ambiguous = [
                m
                for other in board.pieces(piece.color, piece.piece_type)
                if other is not piece
                for m in legal_moves(other, board)
                if m.to_pos == move.to_pos
            ]
            if ambiguous:
                same_file = any(m.from_pos.file == move.from_pos.file for m in ambiguous)
                same_rank = any(m.from_pos.rank == move.from_pos.rank for m in ambiguous)
                if not same_file:
                    san += move.from_pos.name[0]
                elif not same_rank:
                    san += move.from_pos.name[1]
                else:
                    san += move.from_pos.name

        if is_capture:
            san += "x"

        san += move.to_pos.name

        if move.promotion is not None:
            san += "=" + _SAN_PIECE[move.promotion]

    # Check / checkmate suffix
    after = board.clone()
    after.apply_move(move)
    if is_in_check(after.current_player, after):
        san += "+" if has_legal_move(after.current_player, after) else "#"

    return san
