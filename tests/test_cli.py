"""Tests for the command line interface."""

import json

import pytest

from slippy_tiles import cli


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every command with default settings and no .env file."""
    for name in ("EXT", "SCHEME", "METATILE_SCALE", "LOG_LEVEL"):
        monkeypatch.delenv(f"SLIPPY_TILES_{name}", raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)


def run_cli(capsys, *argv):
    cli.main(list(argv))
    return capsys.readouterr()


def run_cli_fails(capsys, *argv):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(list(argv))
    assert exc_info.value.code == 1
    return capsys.readouterr()


class TestPathCommand:
    def test_default_scheme(self, capsys):
        out = run_cli(capsys, "path", "14", "2621", "6332").out
        assert out == "14/2621/6332.png\n"

    def test_scheme_and_ext(self, capsys):
        out = run_cli(capsys, "path", "14", "2621", "6332", "--scheme", "tc", "--ext", "jpg").out
        assert out == "14/000/002/621/000/006/332.jpg\n"

    def test_scheme_from_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("SLIPPY_TILES_SCHEME", "mp")
        out = run_cli(capsys, "path", "2", "3", "1").out
        assert out == "2/0000/0003/0000/0001.png\n"

    def test_invalid_tile(self, capsys):
        err = run_cli_fails(capsys, "path", "1", "2", "0").err
        assert "not a valid tile" in err


class TestParseCommand:
    def test_url(self, capsys):
        out = run_cli(capsys, "parse", "https://tile.openstreetmap.org/2/1/3.png").out
        assert "Tile: 2/1/3" in out
        assert "Bounding box:" in out

    def test_unparseable(self, capsys):
        err = run_cli_fails(capsys, "parse", "not-a-tile").err
        assert "could not parse" in err


class TestInfoCommand:
    def test_info(self, capsys):
        out = run_cli(capsys, "info", "1", "1", "0").out
        assert "Tile: 1/1/0" in out
        assert "Parent: 0/0/0" in out
        assert "Children: 2/2/0, 2/3/0, 2/2/1, 2/3/1" in out
        assert "Metatile (scale 8): 1/0/0 scale=8 size=2" in out

    def test_root_has_no_parent(self, capsys):
        out = run_cli(capsys, "info", "0", "0", "0", "--scale", "2").out
        assert "Parent: -" in out
        assert "Metatile (scale 2): 0/0/0 scale=2 size=1" in out


class TestTilesCommand:
    def test_json(self, capsys):
        out = run_cli(capsys, "tiles", "--bbox", "10,10,5,20", "--maxzoom", "3", "-f", "json").out
        data = json.loads(out)
        assert data["bbox"] == [10.0, 10.0, 5.0, 20.0]
        assert [(t["z"], t["x"], t["y"]) for t in data["tiles"]] == [
            (0, 0, 0),
            (1, 1, 0),
            (2, 2, 1),
            (3, 4, 3),
        ]
        assert data["tiles"][-1]["path"] == "3/4/3.png"

    def test_minzoom(self, capsys):
        out = run_cli(
            capsys, "tiles", "-b", "10 10 5 20", "--minzoom", "2", "-z", "3", "-f", "json"
        ).out
        assert [t["z"] for t in json.loads(out)["tiles"]] == [2, 3]

    def test_text(self, capsys):
        out = run_cli(capsys, "tiles", "--bbox", "10,10,5,20", "--maxzoom", "1").out
        assert "Tiles at zooms 0-1: 2 total" in out
        assert "1/1/0.png" in out

    def test_negative_coordinates(self, capsys):
        out = run_cli(capsys, "tiles", "--bbox=-5,-20,-10,-10", "--maxzoom", "1", "-f", "json").out
        assert [(t["z"], t["x"], t["y"]) for t in json.loads(out)["tiles"]] == [
            (0, 0, 0),
            (1, 0, 1),
        ]

    def test_progress_bar_on_stderr(self, capsys):
        """--progress leaves stdout untouched and draws the bar on stderr."""
        argv = ["tiles", "--bbox", "10,10,5,20", "--maxzoom", "3", "-f", "json"]
        plain = run_cli(capsys, *argv)
        with_progress = run_cli(capsys, *argv, "--progress")
        assert with_progress.out == plain.out
        assert plain.err == ""
        assert "/4" in with_progress.err
        assert "tile" in with_progress.err

    def test_bad_bbox(self, capsys):
        err = run_cli_fails(capsys, "tiles", "--bbox", "10,10,5", "--maxzoom", "3").err
        assert "Error parsing bbox" in err

    def test_bad_zoom_range(self, capsys):
        run_cli_fails(capsys, "tiles", "--bbox", "10,10,5,20", "--minzoom", "5", "--maxzoom", "3")


class TestMetatilesCommand:
    def test_metatiles(self, capsys):
        out = run_cli(
            capsys, "metatiles", "--bbox", "10,10,5,20", "--maxzoom", "3", "--scale", "8"
        ).out
        lines = out.splitlines()
        assert lines == [
            "0/0/0 scale=8 size=1 0/0/0/0/0/0.meta",
            "1/0/0 scale=8 size=2 1/0/0/0/0/0.meta",
            "2/0/0 scale=8 size=4 2/0/0/0/0/0.meta",
            "3/0/0 scale=8 size=8 3/0/0/0/0/0.meta",
        ]

    def test_progress_bar_on_stderr(self, capsys):
        argv = ["metatiles", "--bbox", "10,10,5,20", "--maxzoom", "3", "--scale", "8"]
        plain = run_cli(capsys, *argv)
        with_progress = run_cli(capsys, *argv, "--progress")
        assert with_progress.out == plain.out
        assert len(with_progress.out.splitlines()) == 4
        assert plain.err == ""
        assert "4/4" in with_progress.err
        assert "metatile" in with_progress.err

    def test_bad_scale(self, capsys):
        err = run_cli_fails(
            capsys, "metatiles", "--bbox", "10,10,5,20", "--maxzoom", "3", "--scale", "3"
        ).err
        assert "power of two" in err


class TestMain:
    def test_no_command(self, capsys):
        run_cli_fails(capsys)

    def test_bad_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("SLIPPY_TILES_METATILE_SCALE", "6")
        err = run_cli_fails(capsys, "path", "0", "0", "0").err
        assert "SLIPPY_TILES_METATILE_SCALE" in err
