"""Tic-Tac-Toe engine built on minimax search with alpha-beta pruning."""
from .arena import Arena, ArenaResult, AuditResult, RandomPlayer, audit_engine
from .game import WIN_LINES, Board, Cell, IllegalMoveError
from .search import Node, SearchConfig, SearchInvariantError, SearchStats, SearchTree

__all__ = [
    "Arena",
    "ArenaResult",
    "AuditResult",
    "Board",
    "Cell",
    "IllegalMoveError",
    "Node",
    "RandomPlayer",
    "SearchConfig",
    "SearchInvariantError",
    "SearchStats",
    "SearchTree",
    "WIN_LINES",
    "audit_engine",
]
