"""Shared engine search models, difficulty presets and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pawnstorm.core.board import Board
    from pawnstorm.core.move import Move

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    ``random_move`` skips the search and picks uniformly among legal moves.
    """

    max_depth: int = 3
    time_limit_ms: int | None = 700
    random_move: bool = False


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``score`` is from the point of view of the side the search played for.
    """

    best_move: Move | None
    score: int
    depth: int
    nodes: int


class Difficulty(IntEnum):
    """Opponent strength; values 1-5 are the search depth."""

    RANDOM = 0
    BEGINNER = 1
    EASY = 2
    MEDIUM = 3
    HARD = 4
    EXPERT = 5


def limits_for_difficulty(
    difficulty: Difficulty | int,
    time_limit_ms: int | None = None,
) -> SearchLimits:
    """Map a difficulty tier to :class:`SearchLimits`."""
    try:
        level = Difficulty(difficulty)
    except ValueError:
        raise ValueError(f"Unknown difficulty: {difficulty!r}") from None
    if level == Difficulty.RANDOM:
        return SearchLimits(max_depth=1, time_limit_ms=time_limit_ms, random_move=True)
    return SearchLimits(max_depth=int(level), time_limit_ms=time_limit_ms)


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(
        self,
        board: Board,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
