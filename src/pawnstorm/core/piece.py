"""Piece state object."""

from __future__ import annotations

from dataclasses import dataclass

from pawnstorm.core.enums import Color, PieceType
from pawnstorm.core.position import Position

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(slots=True, eq=False)
class Piece:
    """A piece on one particular :class:`~pawnstorm.core.board.Board`.

    Pieces are mutable (position and move bookkeeping change as the game
    goes on) and compare by identity; a board clone gets its own copies.
    ``double_stepped`` marks a pawn that just advanced two squares and may
    be taken en passant on the very next ply.
    """

    piece_type: PieceType
    color: Color
    position: Position
    has_moved: bool = False
    move_count: int = 0
    double_stepped: bool = False

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str, position: Position) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(ptype, color, position)

    def copy(self) -> Piece:
        return Piece(
            self.piece_type,
            self.color,
            self.position,
            self.has_moved,
            self.move_count,
            self.double_stepped,
        )
