"""Chess engine package: evaluation, minimax search and difficulty presets.

The Qt worker bridge lives in :mod:`pawnstorm.engine.qt_bridge` and is imported
explicitly so the rules engine stays usable without a Qt event loop.
"""

from pawnstorm.engine.evaluation import PIECE_VALUES, evaluate
from pawnstorm.engine.minimax import MATE_SCORE, MinimaxSearchEngine, find_best_move
from pawnstorm.engine.search import (
    Difficulty,
    IEngine,
    SearchLimits,
    SearchResult,
    limits_for_difficulty,
)

DefaultEngine: type[IEngine] = MinimaxSearchEngine

__all__ = [
    "DefaultEngine",
    "Difficulty",
    "IEngine",
    "MATE_SCORE",
    "MinimaxSearchEngine",
    "PIECE_VALUES",
    "SearchLimits",
    "SearchResult",
    "evaluate",
    "find_best_move",
    "limits_for_difficulty",
]
