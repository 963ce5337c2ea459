import logging
from dataclasses import replace
from pathlib import Path

import pytest

from mzxview.commands import (
    Char,
    Color,
    End,
    LoadCharSet,
    LoadPalette,
    Other,
    PlayerColor,
    SetColor,
    Wait,
)
from mzxview.components import Color as PaletteColor, Palette, Position
from mzxview.counters import Counters
from mzxview.errors import BoardIndexError
from mzxview.state import World
from mzxview.systems.robot import run_all_robots, run_robot_until_end
from mzxview.things import Thing
from tests.test_utils import make_board, make_charset, make_robot, make_world


def one_robot_world(program, tmp_path: Path = Path("."), **kwargs) -> World:
    board = make_board(
        2,
        1,
        [(Thing.ROBOT, 0x1F, 1), (Thing.PLAYER, 0x1E, 0)],
        player_pos=Position(1, 0),
    )
    robot = make_robot(program, position=Position(0, 0))
    return make_world(board, [robot], path=tmp_path, **kwargs)


def test_set_color_then_end() -> None:
    world = one_robot_world([SetColor(5, 10, 20, 30), End(), SetColor(6, 1, 1, 1)])
    after = run_all_robots(world, 0)
    assert after.state.palette[5] == PaletteColor(10, 20, 30)
    assert after.state.palette[6] == world.state.palette[6]
    assert world.state.palette[5] != PaletteColor(10, 20, 30)


def test_wait_stops_the_pass() -> None:
    world = one_robot_world([Char(65), Wait(1), Char(66)])
    after = run_all_robots(world, 0)
    assert after.robots(0)[0].ch == 65


def test_program_without_end_runs_to_completion() -> None:
    world = one_robot_world([Char(65), Other("cycle", (1,)), Char(66)])
    after = run_all_robots(world, 0)
    assert after.robots(0)[0].ch == 66


def test_color_recolors_robot_cell() -> None:
    after = run_all_robots(one_robot_world([Color(0x4C)]), 0)
    assert after.board(0).level[0].color == 0x4C
    assert after.board(0).level[1].color == 0x1E


def test_player_color_recolors_player_cell() -> None:
    after = run_all_robots(one_robot_world([PlayerColor(0x2A)]), 0)
    assert after.board(0).level[1].color == 0x2A
    assert after.board(0).level[0].color == 0x1F


def test_values_resolve_through_counters() -> None:
    world = one_robot_world(
        [SetColor("slot", "red", "12", 0), Char("glyph")],
        counters={"slot": 3, "red": 40, "glyph": 300},
    )
    after = run_all_robots(world, 0)
    assert after.state.palette[3] == PaletteColor(40, 12, 0)
    assert after.robots(0)[0].ch == 300 & 0xFF


def test_malformed_number_resolves_as_counter_name() -> None:
    world = one_robot_world([Char("--1"), SetColor(2, "+-3", 1, 1)])
    after = run_all_robots(world, 0)
    assert after.robots(0)[0].ch == 0
    assert after.state.palette[2] == PaletteColor(0, 1, 1)


def test_set_color_out_of_range_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    world = one_robot_world([SetColor(16, 1, 2, 3), SetColor(0, 1, 2, 3)])
    with caplog.at_level(logging.WARNING):
        after = run_all_robots(world, 0)
    assert after.state.palette[0] == PaletteColor(1, 2, 3)
    assert list(after.state.palette.colors[1:]) == list(world.state.palette.colors[1:])
    assert "palette index 16" in caplog.text


def test_set_color_clamps_channels() -> None:
    after = run_all_robots(one_robot_world([SetColor(1, 255, -4, 63)]), 0)
    assert after.state.palette[1] == PaletteColor(63, 0, 63)


def test_load_charset(tmp_path: Path) -> None:
    (tmp_path / "font.chr").write_bytes(bytes([0x81]) * (256 * 14))
    after = run_all_robots(one_robot_world([LoadCharSet("font.chr")], tmp_path), 0)
    assert after.state.charset.glyph(200) == bytes([0x81] * 14)


def test_load_charset_missing_file_keeps_state(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    world = one_robot_world([LoadCharSet("nope.chr"), SetColor(2, 1, 1, 1)], tmp_path)
    with caplog.at_level(logging.WARNING):
        after = run_all_robots(world, 0)
    assert after.state.charset == world.state.charset
    assert after.state.palette[2] == PaletteColor(1, 1, 1)
    assert "nope.chr" in caplog.text


def test_load_charset_wrong_size_keeps_state(tmp_path: Path) -> None:
    (tmp_path / "short.chr").write_bytes(bytes([0xFF]) * 100)
    world = one_robot_world([LoadCharSet("short.chr")], tmp_path)
    after = run_all_robots(world, 0)
    assert after.state.charset == world.state.charset


def test_load_palette_partial(tmp_path: Path) -> None:
    (tmp_path / "part.pal").write_bytes(bytes([1, 2, 3, 4, 5, 6, 7]))
    world = one_robot_world([LoadPalette("part.pal")], tmp_path)
    after = run_all_robots(world, 0)
    assert after.state.palette[0] == PaletteColor(1, 2, 3)
    assert after.state.palette[1] == PaletteColor(4, 5, 6)
    assert list(after.state.palette.colors[2:]) == list(world.state.palette.colors[2:])


def test_load_palette_missing_file_keeps_state(tmp_path: Path) -> None:
    world = one_robot_world([LoadPalette("missing.pal"), Char(9)], tmp_path)
    after = run_all_robots(world, 0)
    assert after.state.palette == world.state.palette
    assert after.robots(0)[0].ch == 9


def test_robots_run_in_order_and_share_state() -> None:
    board = make_board(2, 1, [(Thing.ROBOT, 0x1F, 1), (Thing.ROBOT, 0x1F, 2)])
    first = make_robot([SetColor(1, 10, 10, 10), End()], position=Position(0, 0))
    second = make_robot([SetColor(1, 20, 20, 20), Color(0x70)], position=Position(1, 0))
    after = run_all_robots(make_world(board, [first, second]), 0)
    assert after.state.palette[1] == PaletteColor(20, 20, 20)
    assert after.board(0).level[1].color == 0x70
    assert after.board(0).level[0].color == 0x1F


def test_shared_counters_are_used_for_every_robot() -> None:
    board = make_board(2, 1, [(Thing.ROBOT, 0x1F, 1), (Thing.ROBOT, 0x1F, 2)])
    robots = [
        make_robot([Char("c")], position=Position(0, 0)),
        make_robot([Char("c")], position=Position(1, 0)),
    ]
    after = run_all_robots(make_world(board, robots), 0, Counters.from_mapping({"c": 42}))
    assert [r.ch for r in after.robots(0)] == [42, 42]


def test_robot_outside_board_is_ignored() -> None:
    board = make_board(1, 1, [(Thing.NORMAL, 0x1F, 0)])
    robot = make_robot([Color(0x40)], position=Position(5, 5))
    after = run_all_robots(make_world(board, [robot]), 0)
    assert after.board(0).level[0].color == 0x1F


def test_run_robot_until_end_returns_updated_triple() -> None:
    world = one_robot_world([Char(1), Color(0x22), SetColor(0, 0, 0, 1)])
    state, board, robot = run_robot_until_end(
        world.state, world.board(0), world.robots(0)[0], world.path, Counters()
    )
    assert robot.ch == 1
    assert board.level[0].color == 0x22
    assert state.palette[0] == PaletteColor(0, 0, 1)


def test_unknown_board_raises() -> None:
    world = one_robot_world([Color(0x33)])
    with pytest.raises(BoardIndexError):
        run_all_robots(world, 1)


def test_custom_palette_size_state() -> None:
    board = make_board(1, 1, [(Thing.ROBOT, 0x01, 1)])
    robot = make_robot([SetColor(31, 5, 5, 5)])
    world = make_world(board, [robot])
    world = replace(
        world,
        state=replace(
            world.state,
            charset=make_charset(),
            palette=Palette.from_triples([(0, 0, 0)] * 32),
        ),
    )
    after = run_all_robots(world, 0)
    assert after.state.palette[31] == PaletteColor(5, 5, 5)
