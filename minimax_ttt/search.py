"""Minimax search with alpha-beta pruning over a lazily expanded game tree.

The engine keeps a single "current" node for the position in play.  Children
are generated the first time a node is visited and cached for the node's
lifetime, so consecutive searches from the same position reuse the work done
by earlier ones.  Committing a move promotes the chosen child (together with
whatever subtree it already grew) to the root and releases its siblings.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Tuple

from .game import Board, Cell, Coordinate, IllegalMoveError

logger = logging.getLogger(__name__)


class SearchInvariantError(AssertionError):
    """Raised when the pruned and exhaustive searches disagree."""


@dataclass
class SearchConfig:
    # Re-run every search without pruning and compare the chosen index.
    verify_pruning: bool = False
    # Refuse moves once a line has been completed.
    reject_decided_positions: bool = True
    default_depth: int = 4

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "SearchConfig":
        values = dict(values or {})
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"unknown search options: {', '.join(unknown)}")
        config = cls(**values)
        if config.default_depth < 1:
            raise ValueError("default_depth must be at least 1")
        return config


@dataclass
class SearchStats:
    best_index: Optional[int]
    nodes_visited: int
    unpruned_nodes_visited: Optional[int] = None


class Node:
    """A position, the side to move, and the children once they are known."""

    def __init__(self, board: Board, to_move: Cell) -> None:
        self.board = board
        self.to_move = to_move
        # None until expanded; an empty tuple marks a finished game.
        self.children: Optional[Tuple[Node, ...]] = None

    @property
    def is_expanded(self) -> bool:
        return self.children is not None

    @property
    def maximizing(self) -> bool:
        return self.to_move > 0

    def score(self) -> int:
        return self.board.score()

    def ensure_children(self) -> Tuple["Node", ...]:
        if self.children is None:
            if self.score() != 0:
                self.children = ()
            else:
                next_player = self.to_move.opponent()
                self.children = tuple(
                    Node(successor, next_player)
                    for successor in self.board.legal_successors(self.to_move)
                )
        return self.children

    def child(self, index: int) -> "Node":
        children = self.ensure_children()
        if not 0 <= index < len(children):
            raise IndexError(f"child index {index} out of range for {len(children)} moves")
        return children[index]

    def depth(self) -> int:
        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children)

    def count(self) -> int:
        total = 1
        for child in self.children or ():
            total += child.count()
        return total

    def expand_to(self, depth: int) -> None:
        if depth <= 0:
            return
        for child in self.ensure_children():
            child.expand_to(depth - 1)

    def dump(self, indent: int = 0) -> str:
        parts = [self.board.render(indent), " " * indent, f"score: {self.score()}\n"]
        for child in self.children or ():
            parts.append(child.dump(indent + 1))
        return "".join(parts)

    def __repr__(self) -> str:
        state = "unexpanded" if self.children is None else f"{len(self.children)} children"
        return f"Node(to_move={self.to_move.name}, score={self.score()}, {state})"


class SearchTree:
    """Game session driven by minimax search with alpha-beta pruning."""

    def __init__(
        self,
        first_player: Cell = Cell.X,
        config: Optional[SearchConfig] = None,
    ) -> None:
        if first_player == Cell.EMPTY:
            raise ValueError("the first player must be X or O")
        self.config = config or SearchConfig()
        self._current = Node(Board.initial(), first_player)
        self._visited = 0
        self.last_stats: Optional[SearchStats] = None

    @classmethod
    def from_position(
        cls,
        board: Board,
        to_move: Cell,
        config: Optional[SearchConfig] = None,
    ) -> "SearchTree":
        """Start a session from an arbitrary position instead of the empty board."""

        tree = cls(first_player=to_move, config=config)
        tree._current = Node(board, to_move)
        return tree

    @property
    def root(self) -> Node:
        return self._current

    @property
    def board(self) -> Board:
        return self._current.board

    # Alias kept for callers that think in terms of "the state of the game".
    state = board

    @property
    def player(self) -> Cell:
        return self._current.to_move

    def is_over(self) -> bool:
        return self.board.score() != 0 or self.board.is_full()

    # ------------------------------------------------------------------
    def choose(self, row: int, col: int) -> None:
        """Play the side to move at ``(row, col)``.

        Raises :class:`IllegalMoveError` without touching the tree when the
        cell is taken or, under the default policy, when the game is already
        decided.
        """

        board = self._current.board
        if board.get(row, col) != Cell.EMPTY:
            raise IllegalMoveError(f"cell ({row}, {col}) is already occupied")
        if self.config.reject_decided_positions and board.score() != 0:
            raise IllegalMoveError("the game has already been decided")

        player = self._current.to_move
        for child in self._current.ensure_children():
            if child.board.get(row, col) == player:
                break
        else:
            # Decided positions are expanded without children.
            successor = next(
                candidate
                for candidate in board.legal_successors(player)
                if candidate.get(row, col) == player
            )
            child = Node(successor, player.opponent())

        self._current = child

    def choose_with_index(self, index: int) -> None:
        """Commit the child at ``index``, as returned by :meth:`find_move_index`."""

        self._current = self._current.child(index)

    def child_move(self, index: int) -> Coordinate:
        """Board coordinate filled by the child at ``index``."""

        changed = self.board.diff(self._current.child(index).board)
        assert len(changed) == 1, changed
        return changed[0]

    # ------------------------------------------------------------------
    def find_move_index(self, max_depth: int) -> Optional[int]:
        """Return the index of the best child for the side to move.

        ``None`` means there is nothing to search: the game is already decided
        or ``max_depth`` is zero.  Among equally valued moves the first one in
        enumeration order is returned.
        """

        if max_depth < 0:
            raise ValueError("max_depth must not be negative")

        best_index, visited = self._search_root(max_depth, prune=True)
        stats = SearchStats(best_index=best_index, nodes_visited=visited)

        if self.config.verify_pruning:
            exhaustive_index, exhaustive_visited = self._search_root(max_depth, prune=False)
            stats.unpruned_nodes_visited = exhaustive_visited
            if exhaustive_index != best_index:
                raise SearchInvariantError(
                    f"pruned search chose {best_index}, exhaustive search chose {exhaustive_index}"
                )
            if visited > exhaustive_visited:
                raise SearchInvariantError(
                    f"pruned search visited {visited} nodes, more than {exhaustive_visited}"
                )

        self.last_stats = stats
        logger.debug(
            "depth=%d player=%s best_index=%s nodes=%d",
            max_depth,
            self.player.name,
            best_index,
            visited,
        )
        return best_index

    def best_move(self, max_depth: int) -> Optional[Coordinate]:
        index = self.find_move_index(max_depth)
        if index is None:
            return None
        return self.child_move(index)

    def play_engine_move(self, max_depth: int) -> Optional[int]:
        """Search and commit the engine's reply; returns the committed index."""

        index = self.find_move_index(max_depth)
        if index is not None:
            self.choose_with_index(index)
        return index

    def _search_root(self, max_depth: int, prune: bool) -> Tuple[Optional[int], int]:
        self._visited = 0
        root = self._current
        if root.score() != 0 or max_depth == 0:
            return None, 0

        maximizing = root.maximizing
        best = -math.inf if maximizing else math.inf
        best_index: Optional[int] = None
        alpha = -math.inf
        beta = math.inf

        for index, child in enumerate(root.ensure_children()):
            value = self._minimax(child, max_depth - 1, alpha, beta, prune)
            improved = value > best if maximizing else value < best
            if improved:
                best = value
                best_index = index
                if maximizing:
                    alpha = best
                else:
                    beta = best

        return best_index, self._visited

    def _minimax(self, node: Node, depth: int, alpha: float, beta: float, prune: bool) -> float:
        self._visited += 1

        if depth == 0:
            return node.score()

        children = node.ensure_children()
        if not children:
            return node.score()

        maximizing = node.maximizing
        best = -math.inf if maximizing else math.inf
        for child in children:
            value = self._minimax(child, depth - 1, alpha, beta, prune)
            if maximizing:
                best = max(best, value)
                if prune and best > beta:
                    return best
                alpha = max(alpha, best)
            else:
                best = min(best, value)
                if prune and best < alpha:
                    return best
                beta = min(beta, best)
        return best

    # ------------------------------------------------------------------
    def update_to_depth(self, depth: int) -> None:
        """Materialize every node down to ``depth`` plies below the root."""

        self._current.expand_to(depth)

    def depth(self) -> int:
        return self._current.depth()

    def node_count(self) -> int:
        return self._current.count()

    def dump(self) -> str:
        return self._current.dump(0)


__all__ = ["Node", "SearchConfig", "SearchInvariantError", "SearchStats", "SearchTree"]
