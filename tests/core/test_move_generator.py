"""Perft tests — the gold standard for move-generator correctness.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from pawnstorm.core.board import Board
from pawnstorm.core.enums import Color, PieceType
from pawnstorm.core.legality import all_legal_moves
from pawnstorm.core.move import Move
from pawnstorm.core.move_generator import is_square_attacked, pseudo_legal_moves
from pawnstorm.core.notation import STARTING_FEN, board_from_fen
from pawnstorm.core.position import D4, E4, E5, Position, parse_position


def perft(board: Board, depth: int) -> int:
    """Count leaf nodes at *depth* by applying each move to a clone."""
    moves = all_legal_moves(board.current_player, board)
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        child = board.clone()
        child.apply_move(move)
        nodes += perft(child, depth - 1)
    return nodes


KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
POSITION_3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"
POSITION_4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"
POSITION_5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(board_from_fen(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(board_from_fen(STARTING_FEN), 2) == 400

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(board_from_fen(STARTING_FEN), 3) == 8_902


# ── Positions rich in castling, en passant and promotions ────────────────────


class TestPerftTactical:
    def test_kiwipete_depth_1(self) -> None:
        assert perft(board_from_fen(KIWIPETE), 1) == 48

    @pytest.mark.slow
    def test_kiwipete_depth_2(self) -> None:
        assert perft(board_from_fen(KIWIPETE), 2) == 2_039

    def test_position_3_depth_2(self) -> None:
        assert perft(board_from_fen(POSITION_3), 1) == 14
        assert perft(board_from_fen(POSITION_3), 2) == 191

    @pytest.mark.slow
    def test_position_3_depth_3(self) -> None:
        assert perft(board_from_fen(POSITION_3), 3) == 2_812

    def test_position_4_depth_2(self) -> None:
        assert perft(board_from_fen(POSITION_4), 1) == 6
        assert perft(board_from_fen(POSITION_4), 2) == 264

    def test_position_5_depth_1(self) -> None:
        assert perft(board_from_fen(POSITION_5), 1) == 44

    @pytest.mark.slow
    def test_position_5_depth_2(self) -> None:
        assert perft(board_from_fen(POSITION_5), 2) == 1_486


# ── Piece generators ─────────────────────────────────────────────────────────


def _targets(fen: str, square: str) -> set[str]:
    board = board_from_fen(fen)
    piece = board.get_piece_at(parse_position(square))
    assert piece is not None
    return {m.to_pos.name for m in pseudo_legal_moves(piece, board)}


class TestPseudoLegal:
    def test_knight_in_corner(self) -> None:
        assert _targets("4k3/8/8/8/8/8/8/N3K3 w - - 0 1", "a1") == {"b3", "c2"}

    def test_rook_stops_at_blockers(self) -> None:
        fen = "4k3/8/8/3p4/8/8/3P4/3RK3 w - - 0 1"
        assert _targets(fen, "d1") == {"a1", "b1", "c1"}

    def test_bishop_captures_enemy(self) -> None:
        fen = "4k3/8/8/8/8/2p5/8/K3B3 w - - 0 1"
        assert _targets(fen, "e1") == {"d2", "c3", "f2", "g3", "h4"}

    def test_pawn_pushes_from_start(self) -> None:
        assert _targets(STARTING_FEN, "e2") == {"e3", "e4"}

    def test_pawn_blocked(self) -> None:
        assert _targets("4k3/8/8/8/4p3/4P3/8/4K3 w - - 0 1", "e3") == set()

    def test_black_pawn_moves_down(self) -> None:
        fen = "4k3/3p4/2P5/8/8/8/8/4K3 b - - 0 1"
        assert _targets(fen, "d7") == {"d6", "d5", "c6"}

    def test_promotion_expands_to_four_moves(self) -> None:
        board = board_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        pawn = board.get_piece_at(parse_position("a7"))
        assert pawn is not None
        promos = {m.promotion for m in pseudo_legal_moves(pawn, board)}
        assert promos == {
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
        }

    def test_en_passant_only_right_after_double_step(self) -> None:
        board = board_from_fen("4k3/3p4/8/4P3/8/8/8/4K3 b - - 0 1")
        board.apply_move(Move(parse_position("d7"), parse_position("d5")))
        pawn = board.get_piece_at(E5)
        assert pawn is not None
        ep = [m for m in pseudo_legal_moves(pawn, board) if m.is_en_passant]
        assert len(ep) == 1
        assert ep[0].to_pos == Position(3, 5)

        # A tempo elsewhere forfeits the right.
        board.apply_move(Move(parse_position("e1"), parse_position("f1")))
        board.apply_move(Move(parse_position("e8"), parse_position("f8")))
        assert not any(m.is_en_passant for m in pseudo_legal_moves(pawn, board))


class TestAttacks:
    def test_pawn_attacks_diagonals(self) -> None:
        board = board_from_fen("4k3/8/8/8/3P4/8/8/4K3 w - - 0 1")
        assert is_square_attacked(Position(2, 4), Color.WHITE, board)
        assert is_square_attacked(E5, Color.WHITE, board)
        assert not is_square_attacked(Position(3, 4), Color.WHITE, board)

    def test_slider_attack_blocked(self) -> None:
        board = board_from_fen("4k3/8/8/8/3R4/8/3P4/7K w - - 0 1")
        assert is_square_attacked(Position(3, 7), Color.WHITE, board)
        assert is_square_attacked(E4, Color.WHITE, board)
        assert not is_square_attacked(Position(3, 0), Color.WHITE, board)
        assert board.get_piece_at(D4) is not None
