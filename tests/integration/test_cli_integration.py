import json
from pathlib import Path
from typing import List

import pytest
from PIL import Image

from mzxview.cli import main, parse_config
from mzxview.things import Thing


def write_world(tmp_path: Path, boards: int = 1) -> Path:
    board = {
        "width": 2,
        "height": 1,
        "level": [[Thing.SOLID, 0x0F, 0], [Thing.ROBOT, 0x1F, 1]],
        "robots": [
            {
                "ch": 2,
                "position": [1, 0],
                "program": [
                    ["load_palette", "game.pal"],
                    ["set_color", 15, 63, 0, 0],
                    ["end"],
                ],
            }
        ],
    }
    (tmp_path / "font.chr").write_bytes(bytes([0xFF]) * (256 * 14))
    (tmp_path / "game.pal").write_bytes(bytes([0, 0, 10]))
    path = tmp_path / "world.json"
    path.write_text(json.dumps({"charset": "font.chr", "boards": [board] * boards}))
    return path


def run_cli(args: List[str]) -> int:
    with pytest.raises(SystemExit) as exc:
        main(args)
    return exc.value.code


def test_renders_board(tmp_path: Path) -> None:
    world = write_world(tmp_path)
    out = tmp_path / "out.png"
    main([str(world), "0", str(out)])
    with Image.open(out) as image:
        assert image.size == (16, 14)
        rgb = image.convert("RGB")
        assert rgb.getpixel((0, 0)) == (252, 0, 0)
        assert rgb.getpixel((8, 0)) == (252, 0, 0)


def test_board_defaults_to_zero(tmp_path: Path) -> None:
    world = write_world(tmp_path)
    out = tmp_path / "out.png"
    main([str(world), str(out)])
    assert out.exists()


def test_scale_option(tmp_path: Path) -> None:
    world = write_world(tmp_path)
    out = tmp_path / "big.png"
    main([str(world), "0", str(out), "--scale", "2"])
    with Image.open(out) as image:
        assert image.size == (32, 28)


@pytest.mark.parametrize("args", [[], ["world.json"], ["a", "1", "b", "c"]])
def test_usage_on_wrong_arguments(
    args: List[str], capsys: pytest.CaptureFixture[str]
) -> None:
    assert run_cli(args) == 1
    assert "mzxview" in capsys.readouterr().out


def test_invalid_board_number(capsys: pytest.CaptureFixture[str]) -> None:
    assert run_cli(["world.json", "two", "out.png"]) == 1
    assert "Invalid board number" in capsys.readouterr().out


def test_board_out_of_range(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    world = write_world(tmp_path, boards=2)
    assert run_cli([str(world), "2", str(tmp_path / "out.png")]) == 1
    assert "World only contains 2 boards" in capsys.readouterr().out
    assert not (tmp_path / "out.png").exists()


def test_load_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_cli([str(tmp_path / "missing.json"), "0", str(tmp_path / "o.png")]) == 1
    assert "Error opening" in capsys.readouterr().out


def test_short_inline_palette_is_a_load_failure(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    board = {"width": 1, "height": 1, "level": [[Thing.NORMAL, 0x1F, 0]]}
    world = tmp_path / "world.json"
    world.write_text(
        json.dumps({"palette": [[63, 0, 0], [0, 63, 0]], "boards": [board]})
    )
    out = tmp_path / "out.png"
    assert run_cli([str(world), "0", str(out)]) == 1
    assert "at least 16 colors" in capsys.readouterr().out
    assert not out.exists()


def test_encode_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    world = write_world(tmp_path)
    out = tmp_path / "no_such_dir" / "out.png"
    assert run_cli([str(world), "0", str(out)]) == 1
    assert "Failed to save" in capsys.readouterr().out


def test_parse_config(tmp_path: Path) -> None:
    config = parse_config(["w.json", "3", "o.gif", "--format", "GIF", "-v"])
    assert config.world_file == Path("w.json")
    assert config.board == 3
    assert config.output == Path("o.gif")
    assert config.image_format == "GIF"
    assert config.scale == 1
