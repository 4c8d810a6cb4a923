"""Tests for FEN, SAN and movetext notation."""

import pytest

from pawnstorm.core.enums import CastlingRights, Color, DrawReason, PieceType
from pawnstorm.core.move import Move
from pawnstorm.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    move_to_san,
    movetext_from_sans,
    result_token,
)
from pawnstorm.core.position import E1, E2, E4, G1, Position, parse_position
from pawnstorm.core.rules import GameState


class TestFenParsing:
    def test_starting_position(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert board.current_player == Color.WHITE
        assert board.castling_rights == CastlingRights.ALL
        assert board.en_passant_target is None
        assert board.halfmove_clock == 0
        assert board.fullmove_number == 1
        assert len(board) == 32

    def test_partial_castling(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1")
        assert board.castling_rights == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )

    def test_en_passant_square(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        board = board_from_fen(fen)
        assert board.en_passant_target == Position(4, 2)

    def test_clock_fields_are_optional(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 b - -")
        assert board.current_player == Color.BLACK
        assert board.halfmove_clock == 0
        assert board.fullmove_number == 1

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 x - - 0 1",
            "4k3/8/8/8/8/8/8/4K4 w - - 0 1",
            "4k3/8/8/8/8/8/8/4X3 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w KK - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - e3 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - - -1 1",
        ],
    )
    def test_invalid(self, fen: str) -> None:
        with pytest.raises(ValueError):
            board_from_fen(fen)


class TestFenRoundTrip:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq e6 0 2",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K2R w K - 12 40",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert board_to_fen(board_from_fen(fen)) == fen

    def test_after_moves(self) -> None:
        board = board_from_fen(STARTING_FEN)
        board.apply_move(Move(E2, E4))
        assert (
            board_to_fen(board)
            == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )

    def test_king_move_drops_castling(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        board.apply_move(Move(E1, parse_position("f1")))
        board.apply_move(Move(parse_position("a8"), parse_position("b8")))
        assert board_to_fen(board).split()[2] == "k"


def _san(fen: str, uci_from: str, uci_to: str, **kwargs: object) -> str:
    board = board_from_fen(fen)
    return move_to_san(
        board, Move(parse_position(uci_from), parse_position(uci_to), **kwargs)
    )


class TestSan:
    def test_pawn_push(self) -> None:
        assert _san(STARTING_FEN, "e2", "e4") == "e4"

    def test_knight(self) -> None:
        assert _san(STARTING_FEN, "g1", "f3") == "Nf3"

    def test_pawn_capture(self) -> None:
        fen = "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2"
        assert _san(fen, "e4", "d5") == "exd5"

    def test_en_passant(self) -> None:
        fen = "4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1"
        assert _san(fen, "e5", "d6", is_en_passant=True) == "exd6"

    def test_castling(self) -> None:
        fen = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
        board = board_from_fen(fen)
        assert move_to_san(board, Move(E1, G1, is_castling=True)) == "O-O"
        assert move_to_san(board, Move(E1, Position(2, 0), is_castling=True)) == "O-O-O"

    def test_promotion_with_check(self) -> None:
        fen = "k7/4P3/8/8/8/8/8/4K3 w - - 0 1"
        assert _san(fen, "e7", "e8", promotion=PieceType.QUEEN) == "e8=Q+"

    def test_file_disambiguation(self) -> None:
        fen = "4k3/8/8/8/8/8/4K3/R6R w - - 0 1"
        assert _san(fen, "a1", "d1") == "Rad1"

    def test_rank_disambiguation(self) -> None:
        fen = "4k3/8/8/R7/8/8/8/R3K3 w - - 0 1"
        assert _san(fen, "a1", "a3") == "R1a3"

    def test_checkmate_suffix(self) -> None:
        fen = "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2"
        assert _san(fen, "d8", "h4") == "Qh4#"


class TestMovetext:
    def test_numbering(self) -> None:
        assert movetext_from_sans(["e4", "e5", "Nf3"]) == "1. e4 e5 2. Nf3"

    def test_black_first(self) -> None:
        text = movetext_from_sans(["e5", "Nf3"], first_move_number=7, black_first=True)
        assert text == "7... e5 8. Nf3"

    def test_result(self) -> None:
        assert movetext_from_sans(["f3", "e5"], "*") == "1. f3 e5 *"

    def test_result_tokens(self) -> None:
        assert result_token(GameState.checkmate(Color.WHITE)) == "1-0"
        assert result_token(GameState.resigned(Color.BLACK)) == "0-1"
        assert result_token(GameState.stalemate()) == "1/2-1/2"
        assert result_token(GameState.draw(DrawReason.AGREEMENT)) == "1/2-1/2"
        assert result_token(GameState.active()) == "*"
