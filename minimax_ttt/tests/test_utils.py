from __future__ import annotations

import logging

import pytest

from minimax_ttt.search import SearchConfig
from minimax_ttt.utils import DEFAULT_CONFIG_PATH, configure_logging, load_config, parse_depth


@pytest.mark.parametrize(
    "text, expected",
    [
        ("7", 7),
        (" 5 ", 5),
        ("0", 1),
        ("-3", 1),
        ("deep", 4),
        ("", 4),
        (None, 4),
    ],
)
def test_parse_depth(text, expected) -> None:
    assert parse_depth(text) == expected


def test_parse_depth_uses_given_default() -> None:
    assert parse_depth("?", default=6) == 6
    assert parse_depth("?", default=0) == 1


def test_default_config_is_valid() -> None:
    config = load_config()
    assert DEFAULT_CONFIG_PATH.exists()
    assert SearchConfig.from_mapping(config["search"]) == SearchConfig()
    assert config["bench"]["opening"] == [[0, 0]]


def test_load_config_handles_empty_and_invalid_files(tmp_path) -> None:
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_config(empty) == {}

    listing = tmp_path / "list.yaml"
    listing.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(listing)


def test_configure_logging_accepts_names() -> None:
    configure_logging("debug")
    configure_logging(logging.WARNING)
