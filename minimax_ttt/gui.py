"""Tkinter front end: a 3x3 grid of buttons played against the minimax engine."""
from __future__ import annotations

import logging
from typing import List

import tkinter as tk
from tkinter import ttk

from .game import Cell, IllegalMoveError
from .search import SearchConfig, SearchTree
from .utils import configure_logging, load_config, parse_depth

logger = logging.getLogger(__name__)

GLYPHS = {Cell.EMPTY: " ", Cell.X: "X", Cell.O: "O"}


class TicTacToeApp:
    HUMAN = Cell.X

    def __init__(self, config: SearchConfig) -> None:
        self.config = config
        self.root = tk.Tk()
        self.root.title("Tic tac toe")
        self.root.resizable(False, False)

        self.tree = SearchTree(first_player=self.HUMAN, config=self.config)
        self.depth_var = tk.StringVar()
        self.status_var = tk.StringVar()
        self.buttons: List[List[ttk.Button]] = []
        self._build_widgets()
        self.update_grid()

    def _build_widgets(self) -> None:
        grid_frame = ttk.Frame(self.root, padding=10)
        grid_frame.pack(side=tk.TOP)
        for row in range(3):
            row_buttons = []
            for col in range(3):
                button = ttk.Button(
                    grid_frame,
                    width=4,
                    command=lambda r=row, c=col: self.handle_click(r, c),
                )
                button.grid(row=row, column=col, ipady=12)
                row_buttons.append(button)
            self.buttons.append(row_buttons)

        control_frame = ttk.Frame(self.root, padding=10)
        control_frame.pack(side=tk.TOP, fill=tk.X)

        ttk.Button(
            control_frame,
            text="Restart",
            command=self.start_new_game,
        ).pack(side=tk.TOP, fill=tk.X)

        ttk.Label(control_frame, text="Max depth:").pack(side=tk.LEFT)
        ttk.Entry(control_frame, textvariable=self.depth_var, width=6).pack(
            side=tk.LEFT, padx=5
        )
        ttk.Label(control_frame, textvariable=self.status_var).pack(side=tk.RIGHT)

    def start_new_game(self) -> None:
        self.tree = SearchTree(first_player=self.HUMAN, config=self.config)
        self.update_grid()

    def handle_click(self, row: int, col: int) -> None:
        try:
            self.tree.choose(row, col)
        except IllegalMoveError as exc:
            self.status_var.set("Illegal move")
            logger.debug("ignored click at (%d, %d): %s", row, col, exc)
            return

        depth = parse_depth(self.depth_var.get(), default=self.config.default_depth)
        self.tree.play_engine_move(depth)
        self.update_grid()

    def update_grid(self) -> None:
        board = self.tree.board
        for row in range(3):
            for col in range(3):
                self.buttons[row][col].configure(text=GLYPHS[board.get(row, col)])
        self.update_status()

    def update_status(self) -> None:
        score = self.tree.board.score()
        if score != 0:
            self.status_var.set(f"{Cell(score).name} wins!")
        elif self.tree.board.is_full():
            self.status_var.set("Draw")
        else:
            self.status_var.set(f"{self.tree.player.name} to move")

    def run(self) -> None:
        self.root.mainloop()


def main() -> None:
    configure_logging()
    config = load_config()
    app = TicTacToeApp(SearchConfig.from_mapping(config.get("search")))
    app.run()


if __name__ == "__main__":
    main()
