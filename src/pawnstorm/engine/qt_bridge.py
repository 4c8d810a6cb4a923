"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from pawnstorm.core.board import Board
from pawnstorm.core.notation import board_to_fen
from pawnstorm.engine.minimax import MinimaxSearchEngine
from pawnstorm.engine.search import Difficulty, SearchLimits, limits_for_difficulty

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand."""

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, int, int, int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_limits")

    def __init__(
        self,
        *,
        max_depth: int = 3,
        time_limit_ms: int | None = 700,
    ) -> None:
        super().__init__()
        self._engine = MinimaxSearchEngine()
        self._limits = SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)
        self._cancel_event = threading.Event()

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, int)
    def request_move(self, board_obj: object, request_id: int) -> None:
        """Search for the best move on *board_obj* and emit result."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "Engine received invalid board")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                board_obj.clone(),
                self._limits,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(
                request_id,
                result.score,
                result.depth,
                result.nodes,
            )
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search. Safe from any thread."""
        self._cancel_event.set()

    @pyqtSlot(int, int)
    def set_limits(self, max_depth: int, time_limit_ms: int) -> None:
        """Update search limits (takes effect on the next search)."""
        self._limits = SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)

    @pyqtSlot(int)
    def set_difficulty(self, difficulty: int) -> None:
        """Switch to a difficulty preset, keeping the current deadline."""
        self._limits = limits_for_difficulty(
            Difficulty(difficulty), self._limits.time_limit_ms
        )


class EngineSession(QObject):
    """Owns the worker thread and hands back only results that are still current.

    A result is dropped when a newer request was issued after it, or when the
    position returned by *current_board* no longer matches the one that was
    searched.
    """

    move_ready = pyqtSignal(object)
    no_move = pyqtSignal()
    failed = pyqtSignal(str)

    _engine_request = pyqtSignal(object, int)

    def __init__(
        self,
        current_board: Callable[[], Board] | None = None,
        parent: QObject | None = None,
        *,
        max_depth: int = 3,
        time_limit_ms: int | None = 700,
    ) -> None:
        super().__init__(parent)
        self._current_board = current_board
        self._thread = QThread(self)
        self._worker = EngineWorker(max_depth=max_depth, time_limit_ms=time_limit_ms)
        self._request_id = 0
        self._pending_request: int | None = None
        self._pending_fen: str | None = None
        self._is_started = False

        self._engine_request.connect(self._worker.request_move)
        self._worker.best_move_ready.connect(self._on_best_move)
        self._worker.search_no_move.connect(self._on_no_move)
        self._worker.search_cancelled.connect(self._on_cancelled)
        self._worker.search_error.connect(self._on_error)

    @property
    def worker(self) -> EngineWorker:
        return self._worker

    @property
    def pending_request(self) -> int | None:
        return self._pending_request

    def start(self) -> None:
        """Move the worker to its own thread and start it."""
        if self._is_started:
            return
        self._worker.moveToThread(self._thread)
        self._thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Stop the active search and wait for the worker thread."""
        if not self._is_started:
            return
        self.cancel()
        self._thread.quit()
        self._thread.wait(2000)
        self._is_started = False

    def request_move(self, board: Board) -> int:
        """Queue a search of a clone of *board*; returns the request id."""
        self._request_id += 1
        self._pending_request = self._request_id
        self._pending_fen = board_to_fen(board)
        self._engine_request.emit(board.clone(), self._request_id)
        return self._request_id

    def cancel(self) -> None:
        """Cancel the running search and forget the pending request."""
        self._pending_request = None
        self._pending_fen = None
        # Called directly: a queued slot would wait behind the running search.
        self._worker.cancel()

    def _is_current(self, request_id: int) -> bool:
        if request_id != self._pending_request:
            return False
        if self._current_board is None:
            return True
        return board_to_fen(self._current_board()) == self._pending_fen

    def _on_best_move(
        self,
        request_id: int,
        move: object,
        score: int,
        depth: int,
        nodes: int,
    ) -> None:
        if not self._is_current(request_id):
            _LOGGER.debug("Dropping stale engine result %d", request_id)
            return
        self._pending_request = None
        _LOGGER.debug(
            "Engine move %s (score=%d depth=%d nodes=%d)", move, score, depth, nodes
        )
        self.move_ready.emit(move)

    def _on_no_move(self, request_id: int, *_stats: int) -> None:
        if not self._is_current(request_id):
            return
        self._pending_request = None
        self.no_move.emit()

    def _on_cancelled(self, request_id: int) -> None:
        if request_id == self._pending_request:
            self._pending_request = None

    def _on_error(self, request_id: int, message: str) -> None:
        if request_id != self._pending_request:
            return
        self._pending_request = None
        self.failed.emit(message)
