"""Game facade: move requests, state transitions, history and the opponent."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pawnstorm.core.board import Board
from pawnstorm.core.enums import PROMOTION_TYPES, Color, DrawReason, GameStatus, PieceType
from pawnstorm.core.legality import all_legal_moves, is_in_check, legal_moves
from pawnstorm.core.move import Move, MoveError, MoveResult
from pawnstorm.core.move_generator import pseudo_legal_moves
from pawnstorm.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    move_to_san,
    movetext_from_sans,
    result_token,
)
from pawnstorm.core.position import Position
from pawnstorm.core.rules import DEFAULT_RULES, GameState, Rules, RulesConfig
from pawnstorm.engine.minimax import MinimaxSearchEngine
from pawnstorm.engine.search import (
    Difficulty,
    IEngine,
    SearchResult,
    limits_for_difficulty,
)
from pawnstorm.game.interfaces import GameListener

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    san: str
    fen_after: str
    state_after: GameState


class Game:
    """One game of chess: the boundary the presentation layer talks to.

    Pure logic, no threading and no UI. The live board is only
    mutated by :meth:`make_move` and :meth:`undo`; searches run on clones.
    """

    __slots__ = (
        "_board",
        "_state",
        "_history",
        "_snapshots",
        "_rules",
        "_engine",
        "_draw_offer_by",
        "start_fen",
    )

    def __init__(
        self,
        board: Board | None = None,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        engine: IEngine | None = None,
    ) -> None:
        self._board = board if board is not None else Board.initial()
        self._rules = rules
        self._engine: IEngine = engine if engine is not None else MinimaxSearchEngine()
        self._history: list[MoveRecord] = []
        self._snapshots: list[Board] = []
        self._draw_offer_by: Color | None = None
        self.start_fen = board_to_fen(self._board)
        self._state = Rules.game_state(self._board, self._rules)

    @classmethod
    def from_fen(
        cls,
        fen: str = STARTING_FEN,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        engine: IEngine | None = None,
    ) -> Game:
        return cls(board_from_fen(fen), rules=rules, engine=engine)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        """The live board. Treat as read-only; clone before experimenting."""
        return self._board

    @property
    def side_to_move(self) -> Color:
        return self._board.current_player

    @property
    def history(self) -> list[MoveRecord]:
        return list(self._history)

    @property
    def is_game_over(self) -> bool:
        return self._state.is_terminal

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self._history)

    @property
    def draw_offered_by(self) -> Color | None:
        return self._draw_offer_by

    def get_game_state(self) -> GameState:
        return self._state

    def get_possible_moves(self, pos: Position) -> list[Move]:
        """Legal moves of the piece on *pos* (empty for an empty square)."""
        piece = self._board.get_piece_at(pos)
        if piece is None:
            return []
        return legal_moves(piece, self._board)

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move."""
        return all_legal_moves(self.side_to_move, self._board)

    def to_fen(self) -> str:
        return board_to_fen(self._board)

    def movetext(self) -> str:
        """Numbered SAN move list, e.g. ``1. e4 e5 2. Nf3``."""
        start = board_from_fen(self.start_fen)
        token = result_token(self._state) if self.is_game_over else None
        return movetext_from_sans(
            [record.san for record in self._history],
            token,
            first_move_number=start.fullmove_number,
            black_first=start.current_player == Color.BLACK,
        )

    # ── Move application ─────────────────────────────────────────────────

    def make_move(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceType | None = None,
        listener: GameListener | None = None,
    ) -> MoveResult:
        """Validate and commit a move; failures leave the game untouched."""
        if self._state.is_terminal:
            return self._reject(
                MoveError.GAME_NOT_ACTIVE, f"Game is over: {self._state}"
            )

        board = self._board
        piece = board.get_piece_at(from_pos)
        if piece is None:
            return self._reject(MoveError.INVALID_MOVE, f"No piece at {from_pos}")
        if piece.color != board.current_player:
            return self._reject(
                MoveError.INVALID_MOVE,
                f"Not {piece.color}'s turn ({board.current_player} to move)",
            )

        occupant = board.get_piece_at(to_pos)
        if occupant is not None and occupant.color == piece.color:
            return self._reject(
                MoveError.INVALID_MOVE, f"{to_pos} is occupied by your own piece"
            )

        candidates = [m for m in legal_moves(piece, board) if m.to_pos == to_pos]
        if not candidates:
            geometric = any(
                m.to_pos == to_pos for m in pseudo_legal_moves(piece, board)
            )
            if geometric:
                reason = f"{from_pos}{to_pos} would leave the king in check"
            else:
                reason = (
                    f"{piece.piece_type.name.lower()} cannot move "
                    f"from {from_pos} to {to_pos}"
                )
            return self._reject(MoveError.INVALID_MOVE, reason)

        move = self._select_promotion(candidates, promotion)
        if isinstance(move, MoveResult):
            return move

        self._commit(move, listener)
        return MoveResult.success(move)

    def apply(self, move: Move, listener: GameListener | None = None) -> MoveResult:
        """Commit a :class:`Move` value, e.g. one returned by the engine."""
        return self.make_move(move.from_pos, move.to_pos, move.promotion, listener)

    def undo(self) -> Move | None:
        """Take back the last move. Returns it, or ``None`` if there is none."""
        if not self._snapshots:
            return None
        self._board = self._snapshots.pop()
        record = self._history.pop()
        self._draw_offer_by = None
        self._state = Rules.game_state(self._board, self._rules)
        _LOGGER.debug("Undid %s", record.san)
        return record.move

    # ── Resignation / draw ───────────────────────────────────────────────

    def resign(self, color: Color) -> GameState:
        if not self._state.is_terminal:
            self._state = GameState.resigned(color.opposite)
            _LOGGER.info("%s resigned", color)
        return self._state

    def offer_draw(self, color: Color) -> bool:
        if self._state.is_terminal or self._draw_offer_by is not None:
            return False
        self._draw_offer_by = color
        return True

    def accept_draw(self, color: Color) -> bool:
        if self._state.is_terminal:
            return False
        if self._draw_offer_by is None or self._draw_offer_by == color:
            return False
        self._draw_offer_by = None
        self._state = GameState.draw(DrawReason.AGREEMENT)
        _LOGGER.info("Draw agreed")
        return True

    def decline_draw(self) -> None:
        self._draw_offer_by = None

    # ── Opponent ─────────────────────────────────────────────────────────

    def search(
        self,
        difficulty: Difficulty | int = Difficulty.MEDIUM,
        color: Color | None = None,
        time_limit_ms: int | None = None,
    ) -> SearchResult | None:
        """Run the engine on a clone of the live board."""
        if self._state.is_terminal:
            return None
        limits = limits_for_difficulty(difficulty, time_limit_ms)
        side = color if color is not None else self.side_to_move
        snapshot = self._board.clone()
        snapshot.current_player = side
        return self._engine.search(snapshot, limits)

    def find_best_move(
        self,
        color: Color | None = None,
        difficulty: Difficulty | int = Difficulty.MEDIUM,
        time_limit_ms: int | None = None,
    ) -> Move | None:
        """Engine move for *color* (default: side to move), or ``None``."""
        result = self.search(difficulty, color, time_limit_ms)
        return result.best_move if result is not None else None

    # ── Internal ─────────────────────────────────────────────────────────

    @staticmethod
    def _reject(error: MoveError, reason: str) -> MoveResult:
        _LOGGER.debug("Rejected move: %s", reason)
        return MoveResult.failure(error, reason)

    @staticmethod
    def _select_promotion(
        candidates: list[Move], promotion: PieceType | None
    ) -> Move | MoveResult:
        if candidates[0].promotion is None:
            if promotion is not None:
                return Game._reject(
                    MoveError.INVALID_MOVE, "Promotion is only possible on the last rank"
                )
            return candidates[0]

        if promotion is None:
            return Game._reject(
                MoveError.INVALID_MOVE, "Choose a piece to promote the pawn to"
            )
        if promotion not in PROMOTION_TYPES:
            return Game._reject(
                MoveError.INVALID_MOVE,
                f"Cannot promote to {promotion.name.lower()}",
            )
        for move in candidates:
            if move.promotion == promotion:
                return move
        raise AssertionError("promotion candidates incomplete")

    def _commit(self, move: Move, listener: GameListener | None) -> None:
        board = self._board
        mover = board.current_player
        san = move_to_san(board, move)

        self._snapshots.append(board.clone())
        board.apply_move(move)
        assert not is_in_check(mover, board), f"{move} left {mover} in check"

        self._draw_offer_by = None
        self._state = Rules.game_state(board, self._rules)
        record = MoveRecord(
            move=move,
            san=san,
            fen_after=board_to_fen(board),
            state_after=self._state,
        )
        self._history.append(record)
        _LOGGER.debug("%s played %s", mover, san)

        if listener is not None:
            listener.on_move(self, record)
        if self._state.status == GameStatus.CHECK:
            if listener is not None:
                listener.on_check(self, board.current_player)
        elif self._state.is_terminal:
            _LOGGER.info("Game over: %s", self._state)
            if listener is not None:
                listener.on_game_over(self, self._state)
