"""Matches and exhaustive audits of the minimax engine against other players."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .game import Board, Cell, Coordinate
from .search import SearchConfig, SearchTree

__all__ = ["Arena", "ArenaResult", "AuditResult", "RandomPlayer", "audit_engine"]


@dataclass
class ArenaResult:
    wins: int
    losses: int
    draws: int

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.draws

    @property
    def win_rate(self) -> float:
        return self.wins / self.total if self.total else 0.0


class RandomPlayer:
    """Plays a uniformly random empty cell."""

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def select_move(self, board: Board) -> Coordinate:
        moves = board.empty_cells()
        if not moves:
            raise RuntimeError("No empty cells left to play")
        return moves[int(self.rng.integers(len(moves)))]


@dataclass
class Arena:
    depth: int = 9
    engine_player: Cell = Cell.O
    opponent: Optional[RandomPlayer] = None
    config: Optional[SearchConfig] = None

    def play_game(self, first_player: Cell) -> int:
        """Play one game and return the final score from the engine's side."""

        opponent = self.opponent or RandomPlayer()
        tree = SearchTree(first_player=first_player, config=self.config)
        while not tree.is_over():
            if tree.player == self.engine_player:
                tree.play_engine_move(self.depth)
            else:
                row, col = opponent.select_move(tree.board)
                tree.choose(row, col)
        return tree.board.score() * (1 if self.engine_player > 0 else -1)

    def play_matches(self, num_games: int = 20) -> ArenaResult:
        if self.opponent is None:
            self.opponent = RandomPlayer()
        results = ArenaResult(wins=0, losses=0, draws=0)

        for game_index in range(num_games):
            engine_first = game_index % 2 == 0
            first = self.engine_player if engine_first else self.engine_player.opponent()
            outcome = self.play_game(first)
            if outcome > 0:
                results.wins += 1
            elif outcome < 0:
                results.losses += 1
            else:
                results.draws += 1

        return results


@dataclass
class AuditResult:
    lines: int = 0
    opponent_wins: int = 0
    engine_wins: int = 0
    losing_lines: List[List[Coordinate]] = field(default_factory=list)

    @property
    def draws(self) -> int:
        return self.lines - self.opponent_wins - self.engine_wins


def audit_engine(
    opening: Sequence[Coordinate] = ((0, 0),),
    depth: int = 9,
    first_player: Cell = Cell.X,
) -> AuditResult:
    """Try every reply sequence of the human side against the engine.

    The human side moves first and plays ``opening``; afterwards the engine
    answers each human move with its searched reply while the human side
    branches over all empty cells.
    """

    human = first_player
    result = AuditResult()

    def replay(moves: Sequence[Coordinate]) -> SearchTree:
        tree = SearchTree(first_player=first_player)
        for row, col in moves:
            tree.choose(row, col)
        return tree

    def explore(moves: List[Coordinate]) -> None:
        tree = replay(moves)
        if tree.is_over():
            result.lines += 1
            score = tree.board.score()
            if score == int(human):
                result.opponent_wins += 1
                result.losing_lines.append(list(moves))
            elif score != 0:
                result.engine_wins += 1
            return

        if tree.player == human:
            for move in tree.board.empty_cells():
                explore(moves + [move])
        else:
            move = tree.best_move(depth)
            assert move is not None
            explore(moves + [move])

    explore(list(opening))
    return result
