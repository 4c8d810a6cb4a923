"""Numbered movetext for game records."""

from __future__ import annotations

from pawnstorm.core.enums import Color, GameStatus
from pawnstorm.core.rules import GameState


def result_token(state: GameState) -> str:
    """PGN-style result token for *state*."""
    if state.winner == Color.WHITE:
        return "1-0"
    if state.winner == Color.BLACK:
        return "0-1"
    if state.status in (GameStatus.STALEMATE, GameStatus.DRAW):
        return "1/2-1/2"
    return "*"


def movetext_from_sans(
    sans: list[str],
    result: str | None = None,
    first_move_number: int = 1,
    black_first: bool = False,
) -> str:
    """Build numbered movetext, e.g. ``1. e4 e5 2. Nf3``."""
    parts: list[str] = []
    offset = 1 if black_first else 0
    for idx, san in enumerate(sans):
        ply = idx + offset
        number = first_move_number + ply // 2
        if ply % 2 == 0:
            parts.append(f"{number}.")
        elif idx == 0:
            parts.append(f"{number}...")
        parts.append(san)
    if result is not None:
        parts.append(result)
    return " ".join(parts)
