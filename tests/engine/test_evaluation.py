"""Tests for static evaluation."""

import pytest

from pawnstorm.core.enums import Color
from pawnstorm.core.notation import STARTING_FEN, board_from_fen
from pawnstorm.engine.evaluation import (
    CENTER_BONUS,
    NEAR_CENTER_BONUS,
    evaluate,
    square_bonus,
)


class TestSquareBonus:
    @pytest.mark.parametrize("square", [(3, 3), (4, 3), (3, 4), (4, 4)])
    def test_center(self, square: tuple[int, int]) -> None:
        assert square_bonus(*square) == CENTER_BONUS

    @pytest.mark.parametrize("square", [(2, 2), (5, 5), (2, 4), (5, 3)])
    def test_near_center(self, square: tuple[int, int]) -> None:
        assert square_bonus(*square) == NEAR_CENTER_BONUS

    @pytest.mark.parametrize("square", [(0, 0), (1, 3), (6, 4), (3, 7)])
    def test_edge(self, square: tuple[int, int]) -> None:
        assert square_bonus(*square) == 0


class TestEvaluate:
    def test_starting_position_is_balanced(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert evaluate(board, Color.WHITE) == 0

    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "4k3/8/8/3Q4/8/8/8/4K3 w - - 0 1",
        ],
    )
    def test_antisymmetric(self, fen: str) -> None:
        board = board_from_fen(fen)
        assert evaluate(board, Color.WHITE) == -evaluate(board, Color.BLACK)

    def test_material_and_center(self) -> None:
        # Queen on d5: 900 + 30, kings count for nothing.
        board = board_from_fen("4k3/8/8/3Q4/8/8/8/4K3 w - - 0 1")
        assert evaluate(board, Color.WHITE) == 930

    def test_rook_on_edge(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert evaluate(board, Color.WHITE) == -500
