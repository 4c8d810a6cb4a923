"""Move value object and the tagged result of applying one."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto

from pawnstorm.core.enums import PieceType
from pawnstorm.core.piece import Piece
from pawnstorm.core.position import Position

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable description of an intended transition.

    ``moving_piece`` and ``captured_piece`` point at pieces of the board the
    move was generated on. They take no part in equality or hashing, so a move
    found on a cloned board compares equal to the same move on the live one.
    """

    from_pos: Position
    to_pos: Position
    moving_piece: Piece | None = field(default=None, compare=False, repr=False)
    captured_piece: Piece | None = field(default=None, compare=False, repr=False)
    is_castling: bool = False
    is_en_passant: bool = False
    promotion: PieceType | None = None

    def __post_init__(self) -> None:
        if self.from_pos == self.to_pos:
            raise ValueError(f"Move must change square: {self.from_pos}")

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    @property
    def is_promotion(self) -> bool:
        return self.promotion is not None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_pos.name}{self.to_pos.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base


class MoveError(IntEnum):
    """Why a move request was rejected."""

    INVALID_MOVE = auto()
    GAME_NOT_ACTIVE = auto()


@dataclass(frozen=True, slots=True)
class MoveResult:
    """``success(move)`` or ``failure(error, reason)``; never raised."""

    move: Move | None = None
    error: MoveError | None = None
    reason: str = ""

    @classmethod
    def success(cls, move: Move) -> MoveResult:
        return cls(move=move)

    @classmethod
    def failure(cls, error: MoveError, reason: str) -> MoveResult:
        return cls(error=error, reason=reason)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def __str__(self) -> str:
        if self.ok:
            return f"Move successful: {self.move}"
        return f"Move failed: {self.reason}"
