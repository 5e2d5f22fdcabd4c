"""Benchmark alpha-beta pruning against exhaustive minimax and dump search trees."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .game import Cell, Coordinate
from .search import SearchConfig, SearchTree
from .utils import DEFAULT_CONFIG_PATH, configure_logging, load_config

__all__ = ["benchmark", "build_tree", "main", "parse_args"]

logger = logging.getLogger(__name__)

COLUMNS = ["depth", "best_index", "best_move", "nodes_pruned", "nodes_full", "ratio"]


def build_tree(
    opening: Iterable[Coordinate] = (),
    config: Optional[SearchConfig] = None,
    first_player: Cell = Cell.X,
) -> SearchTree:
    tree = SearchTree(first_player=first_player, config=config)
    for row, col in opening:
        tree.choose(row, col)
    return tree


def benchmark(depths: Sequence[int], opening: Iterable[Coordinate] = ()) -> pd.DataFrame:
    """Search the opening position at each depth, with and without pruning."""

    opening = [tuple(move) for move in opening]
    rows: List[Dict[str, Any]] = []
    for depth in depths:
        tree = build_tree(opening, SearchConfig(verify_pruning=True))
        index = tree.find_move_index(depth)
        stats = tree.last_stats
        assert stats is not None
        full = stats.unpruned_nodes_visited or 0
        rows.append(
            {
                "depth": depth,
                "best_index": index,
                "best_move": None if index is None else tree.child_move(index),
                "nodes_pruned": stats.nodes_visited,
                "nodes_full": full,
                "ratio": stats.nodes_visited / full if full else float("nan"),
            }
        )
        logger.info("depth %d: %d/%d nodes", depth, stats.nodes_visited, full)
    return pd.DataFrame(rows, columns=COLUMNS)


def _parse_move(text: str) -> Coordinate:
    try:
        row, col = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"moves look like 'row,col', got {text!r}")
    if not 0 <= row < 3 or not 0 <= col < 3:
        raise argparse.ArgumentTypeError(f"move {text!r} is off the board")
    return row, col


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark the Tic-Tac-Toe minimax engine")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML configuration file")
    parser.add_argument("--depth", type=int, nargs="+", default=None, help="Search depths to benchmark")
    parser.add_argument(
        "--move",
        type=_parse_move,
        action="append",
        default=None,
        help="Opening move as row,col (repeat for several moves)",
    )
    parser.add_argument(
        "--dump-depth",
        type=int,
        default=None,
        help="Expand the tree to this depth and print it instead of benchmarking",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level)

    config = load_config(args.config)
    bench_cfg = config.get("bench", {}) or {}
    search_config = SearchConfig.from_mapping(config.get("search"))

    opening = args.move if args.move is not None else bench_cfg.get("opening", [])
    dump_depth = args.dump_depth if args.dump_depth is not None else bench_cfg.get("dump_depth")

    if dump_depth is not None:
        tree = build_tree(opening, search_config)
        tree.update_to_depth(int(dump_depth))
        print(tree.dump(), end="")
        print(f"depth={tree.depth()} nodes={tree.node_count()}")
        return

    depths = args.depth or bench_cfg.get("depths") or [search_config.default_depth]
    table = benchmark([int(depth) for depth in depths], opening)
    print(table.to_string(index=False))


if __name__ == "__main__":
    main()
