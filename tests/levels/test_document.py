import json
from pathlib import Path

import pytest

from mzxview.commands import End, LoadCharSet, Other, SetColor, Wait
from mzxview.components import Color, OverlayMode, Position
from mzxview.errors import WorldLoadError
from mzxview.levels import load_world, parse_world
from mzxview.levels.document import parse_command
from mzxview.things import Thing


def minimal_board(**extra):
    board = {
        "width": 2,
        "height": 1,
        "level": [[Thing.SPACE, 0x10, 0], [Thing.ROBOT, 0x1F, 1]],
        "player": [0, 0],
        "robots": [
            {
                "ch": 65,
                "position": [1, 0],
                "name": "painter",
                "program": [["set_color", 5, 10, 20, 30], ["end"]],
            }
        ],
    }
    board.update(extra)
    return board


def test_parse_world_defaults(tmp_path: Path) -> None:
    world = parse_world({"boards": [minimal_board()]}, tmp_path)
    assert len(world.boards) == 1
    assert world.path == tmp_path
    assert world.state.charset.slot_count == 256
    assert len(world.state.palette) == 16

    board = world.board(0)
    assert board.width == 2
    assert board.level[1].thing == Thing.ROBOT
    assert [tuple(c) for c in board.under] == [(0, 0x07, 0)] * 2
    assert board.overlay is None
    assert board.overlay_mode == OverlayMode.OFF

    robot = world.robots(0)[0]
    assert robot.ch == 65
    assert robot.position == Position(1, 0)
    assert list(robot.program) == [SetColor(5, 10, 20, 30), End()]


def test_parse_world_with_resources(tmp_path: Path) -> None:
    (tmp_path / "font.chr").write_bytes(bytes([0x18]) * (256 * 14))
    (tmp_path / "game.pal").write_bytes(bytes([1, 2, 3]))
    document = {
        "title": "Demo",
        "charset": "font.chr",
        "palette": "game.pal",
        "counters": {"Score": 10},
        "boards": [
            minimal_board(
                overlay_mode=1,
                overlay=[[32, 7], [88, 0x0C]],
                sensors=[{"ch": 83}],
            )
        ],
    }
    world = parse_world(document, tmp_path)
    assert world.title == "Demo"
    assert world.state.charset.glyph(0) == bytes([0x18] * 14)
    assert world.state.palette[0] == Color(1, 2, 3)
    assert world.state.palette[1] == Color(0, 0, 42)
    assert world.counters.get("score") == 10
    board = world.board(0)
    assert board.overlay_mode == OverlayMode.NORMAL
    assert board.overlay is not None and tuple(board.overlay[1]) == (88, 0x0C)
    assert board.sensors[0].ch == 83


def test_inline_charset_and_palette(tmp_path: Path) -> None:
    document = {
        "charset": {"hex": "ff" * (256 * 14)},
        "palette": [[63, 0, 0], [0, 63, 0]] + [[0, 0, 0]] * 14,
        "boards": [minimal_board()],
    }
    world = parse_world(document, tmp_path)
    assert world.state.charset.glyph(255) == bytes([0xFF] * 14)
    assert len(world.state.palette) == 16
    assert world.state.palette[1] == Color(0, 63, 0)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (["end"], End()),
        ("end", End()),
        (["wait", 5], Wait(5)),
        (["WAIT"], Wait()),
        (["load_char_set", "a.chr"], LoadCharSet("a.chr")),
        (["set_color", "idx", 1, 2, "blue"], SetColor("idx", 1, 2, "blue")),
        (["cycle", 1], Other("cycle", (1,))),
    ],
)
def test_parse_command(raw, expected) -> None:
    assert parse_command(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [[], [5], ["set_color", 1, 2], ["load_palette"], ["load_palette", 3], ["char", 1.5], ["end", 1]],
)
def test_parse_command_rejects_malformed(raw) -> None:
    with pytest.raises(WorldLoadError):
        parse_command(raw)


@pytest.mark.parametrize(
    "document",
    [
        [],
        {},
        {"boards": []},
        {"boards": [minimal_board(width=3)]},
        {"boards": [minimal_board(level=[[0, 0, 0], [0, 0, 256]])]},
        {"boards": [minimal_board(level=[[0, 0, 0], [Thing.ROBOT, 0, 2]])]},
        {"boards": [minimal_board(level=[[0, 0, 0], [Thing.SENSOR, 0, 1]])]},
        {"boards": [minimal_board(overlay_mode=7)]},
        {"boards": [minimal_board(overlay=[[32, 7]])]},
        {"boards": [minimal_board()], "charset": {"hex": "00" * 14}},
        {"boards": [minimal_board()], "charset": "missing.chr"},
        {"boards": [minimal_board()], "palette": [[1, 2]]},
        {"boards": [minimal_board()], "palette": [[63, 0, 0], [0, 63, 0]]},
        {"boards": [minimal_board()], "palette": [[0, 0, 0]] * 15},
        {"boards": [minimal_board()], "counters": {"a": "b"}},
    ],
)
def test_malformed_documents(tmp_path: Path, document) -> None:
    with pytest.raises(WorldLoadError):
        parse_world(document, tmp_path)


def test_load_world_from_file(tmp_path: Path) -> None:
    path = tmp_path / "demo.json"
    path.write_text(json.dumps({"boards": [minimal_board()]}))
    world = load_world(path)
    assert world.title == "demo"
    assert world.path == tmp_path


def test_load_world_bad_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(WorldLoadError):
        load_world(path)


def test_load_world_missing_file(tmp_path: Path) -> None:
    with pytest.raises(WorldLoadError):
        load_world(tmp_path / "nothing.json")
