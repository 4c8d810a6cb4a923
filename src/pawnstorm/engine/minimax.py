"""Pure-Python minimax search with alpha-beta pruning."""

from __future__ import annotations

import logging
import random
from time import perf_counter

from pawnstorm.core.board import Board
from pawnstorm.core.enums import Color
from pawnstorm.core.legality import all_legal_moves, has_legal_move, is_in_check
from pawnstorm.core.move import Move
from pawnstorm.engine.evaluation import PIECE_VALUES, evaluate
from pawnstorm.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000
MATE_SCORE = 100_000


def _never_cancelled() -> bool:
    return False


class MinimaxSearchEngine(IEngine):
    """Fixed-depth minimax searcher.

    Every node works on its own clone of the board, so the caller's board is
    never touched. A deadline or cancel callback stops the search early; the
    best fully searched root move is returned in that case (``None`` if no
    root move finished).
    """

    __slots__ = ("_cancel_check", "_deadline", "_nodes", "_stopped", "_rng")

    def __init__(self, rng: random.Random | None = None) -> None:
        self._nodes = 0
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled
        self._stopped = False
        self._rng = rng or random.Random()

    def search(
        self,
        board: Board,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
        color: Color | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._stopped = False
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if limits.time_limit_ms is not None:
            ms = max(limits.time_limit_ms, 1)
            self._deadline = perf_counter() + (ms / 1000.0)

        root = board.clone()
        if color is not None:
            root.current_player = color
        side = root.current_player

        root_moves = all_legal_moves(side, root)
        if not root_moves:
            if is_in_check(side, root):
                return SearchResult(None, -MATE_SCORE, 0, self._nodes)
            return SearchResult(None, 0, 0, self._nodes)

        if limits.random_move:
            move = self._rng.choice(root_moves)
            return SearchResult(move, evaluate(root, side), 0, 1)

        ordered_root = self._order_moves(root_moves)
        score, move = self._search_root(root, side, ordered_root, limits.max_depth)
        _LOGGER.debug(
            "Searched depth %d for %s: best=%s score=%d nodes=%d%s",
            limits.max_depth,
            side,
            move,
            score,
            self._nodes,
            " (stopped early)" if self._stopped else "",
        )
        return SearchResult(move, score, limits.max_depth, self._nodes)

    def _search_root(
        self,
        board: Board,
        side: Color,
        root_moves: list[Move],
        depth: int,
    ) -> tuple[int, Move | None]:
        best_score = -_INF_SCORE
        best_move: Move | None = None
        alpha = -_INF_SCORE
        beta = _INF_SCORE

        for move in root_moves:
            if self._should_stop():
                break

            child = board.clone()
            child.apply_move(move)
            score = self._minimax(child, depth - 1, alpha, beta, False, side)
            if self._stopped:
                break

            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)

        if best_move is None:
            return 0, None
        return best_score, best_move

    def _minimax(
        self,
        board: Board,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
        side: Color,
    ) -> int:
        if self._should_stop():
            return evaluate(board, side)

        self._nodes += 1
        to_move = board.current_player

        if depth <= 0:
            if has_legal_move(to_move, board):
                return evaluate(board, side)
            return self._terminal_score(board, to_move, side, depth)

        moves = all_legal_moves(to_move, board)
        if not moves:
            return self._terminal_score(board, to_move, side, depth)

        if maximizing:
            best = -_INF_SCORE
            for move in self._order_moves(moves):
                child = board.clone()
                child.apply_move(move)
                best = max(best, self._minimax(child, depth - 1, alpha, beta, False, side))
                alpha = max(alpha, best)
                if beta <= alpha:
                    break
            return best

        best = _INF_SCORE
        for move in self._order_moves(moves):
            child = board.clone()
            child.apply_move(move)
            best = min(best, self._minimax(child, depth - 1, alpha, beta, True, side))
            beta = min(beta, best)
            if beta <= alpha:
                break
        return best

    def _terminal_score(
        self,
        board: Board,
        to_move: Color,
        side: Color,
        depth: int,
    ) -> int:
        if not is_in_check(to_move, board):
            return 0
        # Shallower mates keep more remaining depth and score further from 0.
        mate = MATE_SCORE + depth
        return -mate if to_move == side else mate

    def _should_stop(self) -> bool:
        if self._stopped:
            return True
        if self._cancel_check() or (
            self._deadline is not None and perf_counter() >= self._deadline
        ):
            self._stopped = True
        return self._stopped

    def _order_moves(self, moves: list[Move]) -> list[Move]:
        """Captures first (most valuable victim), then promotions, then the rest."""
        return sorted(moves, key=self._move_order_score, reverse=True)

    def _move_order_score(self, move: Move) -> int:
        score = 0
        if move.captured_piece is not None:
            score += 10_000 + 10 * PIECE_VALUES[move.captured_piece.piece_type]
            if move.moving_piece is not None:
                score -= PIECE_VALUES[move.moving_piece.piece_type]
        if move.promotion is not None:
            score += 5_000 + PIECE_VALUES[move.promotion]
        return score


def find_best_move(board: Board, color: Color, depth: int) -> Move | None:
    """Best move for *color* at a fixed *depth*, without a deadline."""
    engine = MinimaxSearchEngine()
    result = engine.search(
        board,
        SearchLimits(max_depth=depth, time_limit_ms=None),
        color=color,
    )
    return result.best_move
