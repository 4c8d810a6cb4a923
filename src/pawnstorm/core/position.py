"""Board coordinate value type and helpers.

Files and ranks are zero based: ``Position(0, 0)`` is a1, ``Position(7, 7)``
is h8.
"""

from __future__ import annotations

from dataclasses import dataclass

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable (file, rank) square coordinate."""

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not (0 <= self.file < 8 and 0 <= self.rank < 8):
            raise ValueError(f"Position out of bounds: ({self.file}, {self.rank})")

    def offset(self, df: int, dr: int) -> Position | None:
        """Shifted position, or ``None`` when it leaves the board."""
        f = self.file + df
        r = self.rank + dr
        if 0 <= f < 8 and 0 <= r < 8:
            return Position(f, r)
        return None

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``Position(4, 3).name == 'e4'``."""
        return _FILES[self.file] + _RANKS[self.rank]

    @property
    def is_light(self) -> bool:
        return (self.file + self.rank) % 2 == 1

    def __str__(self) -> str:
        return self.name


def parse_position(name: str) -> Position:
    """Parse square name, e.g. 'e4' -> Position(4, 3)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Position(_FILES.index(name[0]), _RANKS.index(name[1]))


ALL_POSITIONS: tuple[Position, ...] = tuple(
    Position(f, r) for r in range(8) for f in range(8)
)

# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Position(f, 0) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Position(f, 1) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Position(f, 2) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Position(f, 3) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Position(f, 4) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Position(f, 5) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Position(f, 6) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Position(f, 7) for f in range(8))
