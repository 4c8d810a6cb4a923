"""Board - piece placement plus turn bookkeeping."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from typing import TYPE_CHECKING

from pawnstorm.core.enums import CastlingRights, Color, PieceType
from pawnstorm.core.piece import Piece
from pawnstorm.core.position import Position

if TYPE_CHECKING:
    from pawnstorm.core.move import Move

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# (right, rook file) per color
_CASTLING_CORNERS: dict[Color, tuple[tuple[CastlingRights, int], ...]] = {
    Color.WHITE: (
        (CastlingRights.WHITE_KINGSIDE, 7),
        (CastlingRights.WHITE_QUEENSIDE, 0),
    ),
    Color.BLACK: (
        (CastlingRights.BLACK_KINGSIDE, 7),
        (CastlingRights.BLACK_QUEENSIDE, 0),
    ),
}


class MissingKingError(ValueError):
    """A color has no king on the board: an engine invariant was broken."""


class Board:
    """Mutable square → piece mapping with side to move, clocks and history.

    The board performs no validation; callers hand it moves that already
    passed the legality filter.
    """

    __slots__ = (
        "_pieces",
        "current_player",
        "halfmove_clock",
        "fullmove_number",
        "history",
        "_position_keys",
    )

    def __init__(
        self,
        current_player: Color = Color.WHITE,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self._pieces: dict[Position, Piece] = {}
        self.current_player = current_player
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self.history: list[Move] = []
        self._position_keys: list[Hashable] = []

    # -- Element access -----------------------------------------------------

    def get_piece_at(self, pos: Position) -> Piece | None:
        return self._pieces.get(pos)

    def set_piece_at(self, pos: Position, piece: Piece | None) -> None:
        """Place *piece* on *pos* (``None`` clears the square)."""
        if piece is None:
            self._pieces.pop(pos, None)
            return
        piece.position = pos
        self._pieces[pos] = piece

    __getitem__ = get_piece_at
    __setitem__ = set_piece_at

    def is_empty(self, pos: Position) -> bool:
        return pos not in self._pieces

    def __contains__(self, pos: Position) -> bool:
        return pos in self._pieces

    def __iter__(self) -> Iterator[Piece]:
        return iter(list(self._pieces.values()))

    # -- Query helpers ------------------------------------------------------

    def get_all_pieces(self) -> list[Piece]:
        return list(self._pieces.values())

    def pieces_of(self, color: Color) -> list[Piece]:
        """All pieces belonging to *color*."""
        return [p for p in self._pieces.values() if p.color == color]

    def pieces(self, color: Color, piece_type: PieceType) -> list[Piece]:
        """*color*'s pieces of *piece_type*."""
        return [
            p
            for p in self._pieces.values()
            if p.color == color and p.piece_type == piece_type
        ]

    def has_piece(self, color: Color, piece_type: PieceType) -> bool:
        return any(
            p.color == color and p.piece_type == piece_type
            for p in self._pieces.values()
        )

    def find_king(self, color: Color) -> Piece | None:
        for piece in self._pieces.values():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return piece
        return None

    def king_of(self, color: Color) -> Piece:
        """Return the single king of *color*."""
        king = self.find_king(color)
        if king is None:
            raise MissingKingError(f"No {color.name} king on board")
        return king

    @property
    def en_passant_target(self) -> Position | None:
        """Square behind a pawn that double-stepped on the previous ply."""
        mover = self.current_player.opposite
        for piece in self._pieces.values():
            if piece.double_stepped and piece.color == mover:
                return piece.position.offset(0, -mover.pawn_direction)
        return None

    @property
    def castling_rights(self) -> CastlingRights:
        """Castling availability implied by unmoved kings and rooks."""
        rights = CastlingRights.NONE
        for color, corners in _CASTLING_CORNERS.items():
            home = color.home_rank
            king = self._pieces.get(Position(4, home))
            if king is None or king.has_moved or king.piece_type != PieceType.KING:
                continue
            if king.color != color:
                continue
            for right, rook_file in corners:
                rook = self._pieces.get(Position(rook_file, home))
                if (
                    rook is not None
                    and rook.piece_type == PieceType.ROOK
                    and rook.color == color
                    and not rook.has_moved
                ):
                    rights |= right
        return rights

    def position_key(self) -> Hashable:
        """Key identifying the position for repetition purposes."""
        placement = frozenset((pos, str(p)) for pos, p in self._pieces.items())
        return (
            placement,
            self.current_player,
            self.castling_rights,
            self._capturable_en_passant_target(),
        )

    def _capturable_en_passant_target(self) -> Position | None:
        """En passant square, but only if a pawn of the side to move can use it."""
        target = self.en_passant_target
        if target is None:
            return None
        rank = target.rank - self.current_player.pawn_direction
        for df in (-1, 1):
            pos = Position(target.file, rank).offset(df, 0)
            if pos is None:
                continue
            piece = self._pieces.get(pos)
            if (
                piece is not None
                and piece.piece_type == PieceType.PAWN
                and piece.color == self.current_player
            ):
                return target
        return None

    def repetition_count(self) -> int:
        """How many times the current position occurred in this game."""
        if not self._position_keys:
            return 1
        return self._position_keys.count(self.position_key())

    # -- Mutation / copying -------------------------------------------------

    def apply_move(self, move: Move) -> None:
        """Commit *move* unconditionally (caller has validated it)."""
        piece = self._pieces.get(move.from_pos)
        assert piece is not None, f"No piece on {move.from_pos}"
        color = piece.color

        if not self._position_keys:
            self._position_keys.append(self.position_key())

        # En passant eligibility lasts exactly one ply.
        for other in self._pieces.values():
            other.double_stepped = False

        captured_pos = move.to_pos
        if move.is_en_passant:
            captured_pos = Position(move.to_pos.file, move.from_pos.rank)
        captured = self._pieces.pop(captured_pos, None)

        del self._pieces[move.from_pos]
        piece.has_moved = True
        piece.move_count += 1

        placed = piece
        if move.promotion is not None:
            placed = Piece(
                move.promotion,
                color,
                move.to_pos,
                has_moved=True,
                move_count=piece.move_count,
            )
        self.set_piece_at(move.to_pos, placed)

        if (
            piece.piece_type == PieceType.PAWN
            and abs(move.to_pos.rank - move.from_pos.rank) == 2
        ):
            piece.double_stepped = True

        if move.is_castling:
            rank = move.from_pos.rank
            if move.to_pos.file == 6:
                rook_from, rook_to = Position(7, rank), Position(5, rank)
            else:
                rook_from, rook_to = Position(0, rank), Position(3, rank)
            rook = self._pieces.pop(rook_from)
            rook.has_moved = True
            rook.move_count += 1
            self.set_piece_at(rook_to, rook)

        # Clocks
        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if color == Color.BLACK:
            self.fullmove_number += 1

        self.current_player = color.opposite
        self.history.append(move)
        self._position_keys.append(self.position_key())

    def clone(self) -> Board:
        """Deep copy: pieces are duplicated, history and keys copied."""
        b = Board(self.current_player, self.halfmove_clock, self.fullmove_number)
        b._pieces = {pos: p.copy() for pos, p in self._pieces.items()}
        b.history = self.history.copy()
        b._position_keys = self._position_keys.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls, current_player: Color = Color.WHITE) -> Board:
        return cls(current_player)

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f in range(8):
            b.set_piece_at(Position(f, 1), Piece(PieceType.PAWN, Color.WHITE, Position(f, 1)))
            b.set_piece_at(Position(f, 6), Piece(PieceType.PAWN, Color.BLACK, Position(f, 6)))

        for f, pt in enumerate(_BACK_RANK):
            b.set_piece_at(Position(f, 0), Piece(pt, Color.WHITE, Position(f, 0)))
            b.set_piece_at(Position(f, 7), Piece(pt, Color.BLACK, Position(f, 7)))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def placement(self) -> dict[Position, str]:
        """Square → FEN character snapshot of the occupancy."""
        return {pos: str(p) for pos, p in self._pieces.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.placement() == other.placement()
            and self.current_player == other.current_player
        )

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self._pieces)

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self._pieces.get(Position(file, rank))
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
