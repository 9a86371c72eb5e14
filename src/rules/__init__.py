"""Rule engine deciding legality of moves and completion of the grid."""

from .engine import MoveResult, Outcome, RuleEngine, Status
from .moves import SENTINEL, Move, parse_move

__all__ = [
    "Move",
    "MoveResult",
    "Outcome",
    "RuleEngine",
    "SENTINEL",
    "Status",
    "parse_move",
]
