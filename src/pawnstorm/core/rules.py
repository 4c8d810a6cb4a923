"""Game-state machine: check, checkmate, stalemate and draw detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pawnstorm.core.enums import Color, DrawReason, GameStatus, PieceType
from pawnstorm.core.legality import has_legal_move, is_in_check

if TYPE_CHECKING:
    from pawnstorm.core.board import Board

_MINOR_PIECES = (PieceType.KNIGHT, PieceType.BISHOP)
_MATING_MATERIAL = (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN)


@dataclass(slots=True, frozen=True)
class RulesConfig:
    """Thresholds of the automatic draw rules."""

    fifty_move_halfmoves: int = 50
    repetition_count: int = 3
    insufficient_material_pieces: int = 4


DEFAULT_RULES = RulesConfig()


@dataclass(slots=True, frozen=True)
class GameState:
    """Tagged game state.

    ``color`` is the checked side for CHECK and the winner for CHECKMATE and
    RESIGNED; ``reason`` is set for DRAW only.
    """

    status: GameStatus
    color: Color | None = None
    reason: DrawReason | None = None

    @classmethod
    def active(cls) -> GameState:
        return cls(GameStatus.ACTIVE)

    @classmethod
    def check(cls, color: Color) -> GameState:
        return cls(GameStatus.CHECK, color)

    @classmethod
    def checkmate(cls, winner: Color) -> GameState:
        return cls(GameStatus.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> GameState:
        return cls(GameStatus.STALEMATE)

    @classmethod
    def draw(cls, reason: DrawReason) -> GameState:
        return cls(GameStatus.DRAW, reason=reason)

    @classmethod
    def resigned(cls, winner: Color) -> GameState:
        return cls(GameStatus.RESIGNED, winner)

    @property
    def is_terminal(self) -> bool:
        return self.status not in (GameStatus.ACTIVE, GameStatus.CHECK)

    @property
    def is_draw(self) -> bool:
        return self.status in (GameStatus.STALEMATE, GameStatus.DRAW)

    @property
    def winner(self) -> Color | None:
        if self.status in (GameStatus.CHECKMATE, GameStatus.RESIGNED):
            return self.color
        return None

    def __str__(self) -> str:
        if self.status == GameStatus.CHECK:
            return f"{self.color} in check"
        if self.status == GameStatus.CHECKMATE:
            return f"checkmate, {self.color} wins"
        if self.status == GameStatus.RESIGNED:
            return f"resignation, {self.color} wins"
        if self.status == GameStatus.DRAW:
            assert self.reason is not None
            return f"draw ({self.reason.name.lower().replace('_', ' ')})"
        return self.status.name.lower()


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def is_in_check(board: Board) -> bool:
        return is_in_check(board.current_player, board)

    @staticmethod
    def is_checkmate(board: Board) -> bool:
        if not Rules.is_in_check(board):
            return False
        return not has_legal_move(board.current_player, board)

    @staticmethod
    def is_stalemate(board: Board) -> bool:
        if Rules.is_in_check(board):
            return False
        return not has_legal_move(board.current_player, board)

    @staticmethod
    def is_insufficient_material(
        board: Board, config: RulesConfig = DEFAULT_RULES
    ) -> bool:
        """Few pieces, none of them pawns, rooks or queens, one minor a side at most."""
        pieces = board.get_all_pieces()
        if len(pieces) > config.insufficient_material_pieces:
            return False
        if any(p.piece_type in _MATING_MATERIAL for p in pieces):
            return False
        for color in Color:
            minors = sum(
                1 for p in pieces if p.color == color and p.piece_type in _MINOR_PIECES
            )
            if minors > 1:
                return False
        return True

    @staticmethod
    def is_fifty_move_rule(board: Board, config: RulesConfig = DEFAULT_RULES) -> bool:
        return board.halfmove_clock >= config.fifty_move_halfmoves

    @staticmethod
    def is_repetition(board: Board, config: RulesConfig = DEFAULT_RULES) -> bool:
        return board.repetition_count() >= config.repetition_count

    @staticmethod
    def game_state(board: Board, config: RulesConfig = DEFAULT_RULES) -> GameState:
        """Derive the state for the side to move.

        No-legal-move outcomes are decided before any draw rule.
        Raises :class:`~pawnstorm.core.board.MissingKingError` if a king is
        absent.
        """
        side = board.current_player
        board.king_of(side)
        board.king_of(side.opposite)

        in_check = is_in_check(side, board)
        if not has_legal_move(side, board):
            if in_check:
                return GameState.checkmate(side.opposite)
            return GameState.stalemate()
        if in_check:
            return GameState.check(side)
        if Rules.is_fifty_move_rule(board, config):
            return GameState.draw(DrawReason.FIFTY_MOVE)
        if Rules.is_insufficient_material(board, config):
            return GameState.draw(DrawReason.INSUFFICIENT_MATERIAL)
        if Rules.is_repetition(board, config):
            return GameState.draw(DrawReason.REPETITION)
        return GameState.active()
