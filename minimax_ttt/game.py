"""Board representation and scoring for classic 3x3 Tic-Tac-Toe.

The board is kept independent from the search engine and the UI.  Cells are
stored as a flat row-major tuple of nine :class:`Cell` marks, so a board is an
immutable, hashable value that can be shared freely between search nodes.

Each mark carries a numeric weight: ``X`` is ``-10`` and ``O`` is ``+10``.  The
sign tells which side is maximizing and the weight itself is the score of a
won position, so :meth:`Board.score` never needs to translate between players
and numbers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Sequence, Tuple, Union

import numpy as np

Coordinate = Tuple[int, int]

# Scan order is significant: score() reports the first complete line found.
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

_GLYPHS = {"_": 0, " ": 0, ".": 0, "X": -10, "O": 10}


class Cell(IntEnum):
    """Occupancy of a single square, weighted by the player that owns it."""

    EMPTY = 0
    X = -10
    O = 10

    def opponent(self) -> "Cell":
        """Get the player that moves after this one."""
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        return Cell.EMPTY

    @property
    def glyph(self) -> str:
        if self is Cell.EMPTY:
            return "_"
        return self.name


class IllegalMoveError(RuntimeError):
    """Raised when a move targets an occupied cell or a finished game."""


def _check_coordinate(row: int, col: int) -> None:
    if not 0 <= row < 3 or not 0 <= col < 3:
        raise IndexError(f"board coordinate ({row}, {col}) is outside 0..2")


@dataclass(frozen=True)
class Board:
    """An immutable 3x3 Tic-Tac-Toe position."""

    cells: Tuple[Cell, ...] = field(default=(Cell.EMPTY,) * 9)

    def __post_init__(self) -> None:
        if len(self.cells) != 9:
            raise ValueError("a board holds exactly nine cells")

    @classmethod
    def initial(cls) -> "Board":
        return cls()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Union[Cell, str]]]) -> "Board":
        """Build a board from three rows of cells or glyphs (``X``, ``O``, ``_``)."""

        if len(rows) != 3 or any(len(row) != 3 for row in rows):
            raise ValueError("rows must describe a 3x3 grid")
        cells: List[Cell] = []
        for row in rows:
            for value in row:
                if isinstance(value, str):
                    if value.upper() not in _GLYPHS:
                        raise ValueError(f"unknown cell glyph {value!r}")
                    cells.append(Cell(_GLYPHS[value.upper()]))
                else:
                    cells.append(Cell(value))
        return cls(tuple(cells))

    def get(self, row: int, col: int) -> Cell:
        _check_coordinate(row, col)
        return self.cells[row * 3 + col]

    def place(self, row: int, col: int, player: Cell) -> "Board":
        """Return a copy of the board with ``player`` written at ``(row, col)``."""

        _check_coordinate(row, col)
        return self._with(row * 3 + col, player)

    def _with(self, index: int, player: Cell) -> "Board":
        cells = list(self.cells)
        cells[index] = player
        return Board(tuple(cells))

    def legal_successors(self, player: Cell) -> Iterator["Board"]:
        """Yield every board reachable by one move of ``player``.

        Boards are produced lazily in row-major order of the empty cell that
        was filled.  Search results are reported as indices into this
        sequence, so the order must never change.
        """

        if player == Cell.EMPTY:
            raise ValueError("successor states need a player, not an empty cell")
        return (
            self._with(index, player)
            for index, cell in enumerate(self.cells)
            if cell == Cell.EMPTY
        )

    def score(self) -> int:
        """Return the weight of the first completed line, or 0.

        Lines are scanned rows first, then columns, then the main and anti
        diagonals.  A board completing two lines at once is scored by the one
        scanned first.
        """

        cells = self.cells
        for a, b, c in WIN_LINES:
            if cells[a] != Cell.EMPTY and cells[a] == cells[b] == cells[c]:
                return int(cells[a])
        return 0

    def empty_cells(self) -> List[Coordinate]:
        return [divmod(index, 3) for index, cell in enumerate(self.cells) if cell == Cell.EMPTY]

    def is_full(self) -> bool:
        return all(cell != Cell.EMPTY for cell in self.cells)

    def diff(self, other: "Board") -> List[Coordinate]:
        """Coordinates whose marks differ between the two boards."""

        return [
            divmod(index, 3)
            for index, (mine, theirs) in enumerate(zip(self.cells, other.cells))
            if mine != theirs
        ]

    def as_array(self) -> np.ndarray:
        """Read-only ``int8`` 3x3 grid of cell weights."""

        grid = np.array([int(cell) for cell in self.cells], dtype=np.int8).reshape(3, 3)
        grid.flags.writeable = False
        return grid

    def render(self, indent: int = 0) -> str:
        prefix = " " * indent
        lines = []
        for row in range(3):
            start = row * 3
            glyphs = " ".join(cell.glyph for cell in self.cells[start : start + 3])
            lines.append(f"{prefix}[{glyphs}]\n")
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()
