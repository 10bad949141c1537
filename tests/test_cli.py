import json
import logging

import numpy as np
import pytest
from PIL import Image

from parkterrain.cli import main
from parkterrain.config import reference_config, save_config
from parkterrain.engine import HeightField


@pytest.fixture(autouse=True)
def reset_logging():
    # main() points the root logger at the captured stdout of the running test
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)


def test_height_command(capsys, reference_field):
    assert main(["height", "10", "-4.5"]) == 0

    out = capsys.readouterr().out
    assert out.strip().splitlines()[-1] == f"{reference_field.evaluate(10.0, -4.5):.6f}"


def test_height_command_with_config(tmp_path, capsys):
    config = reference_config(world_extent=120.0)
    path = tmp_path / "park.json"
    save_config(config, path)

    assert main(["--config", str(path), "height", "45", "7"]) == 0

    out = capsys.readouterr().out
    assert out.strip().splitlines()[-1] == f"{HeightField(config).evaluate(45.0, 7.0):.6f}"


def test_grid_command_npy(tmp_path, reference_field):
    out = tmp_path / "grid.npy"
    code = main([
        "grid", "--origin-x", "-20", "--origin-z", "-10", "--width", "40", "--depth", "20",
        "--res-x", "8", "--res-z", "4", "--out", str(out)
    ])

    assert code == 0
    expected = reference_field.evaluate_grid(-20.0, -10.0, 40.0, 20.0, 8, 4)
    assert np.array_equal(np.load(out), expected)


def test_grid_command_png(tmp_path):
    out = tmp_path / "grid.png"

    assert main(["grid", "--res-x", "16", "--res-z", "8", "--out", str(out)]) == 0
    with Image.open(out) as image:
        assert image.size == (17, 9)


def test_grid_command_bad_resolution(tmp_path, capsys):
    code = main(["grid", "--res-x", "0", "--out", str(tmp_path / "grid.npy")])

    assert code == 1
    assert "Error:" in capsys.readouterr().out


def test_place_command(tmp_path, capsys):
    out = tmp_path / "placement.json"

    assert main(["place", "--seed", "3", "--json", str(out)]) == 0

    payload = json.loads(out.read_text())
    assert list(payload) == [
        "trees", "benches", "rocks", "lamps", "bins", "paths", "obstacles", "patches"
    ]
    assert len(payload["lamps"]) == 16
    assert len(payload["benches"]) == 14
    assert payload["rocks"][0]["kind"] == "rock"
    assert "benches: 14" in capsys.readouterr().out


def test_analyze_command(capsys):
    assert main(["analyze", "--segments", "40", "--workers", "2"]) == 0

    out = capsys.readouterr().out
    analysis = json.loads(out[out.index("{"):])
    assert analysis["analysis_metadata"]["heightmap_shape"] == [41, 41]
    assert analysis["feature_detection"]["water_bodies_count"] >= 1
    assert "peak_locations" not in analysis["feature_detection"]


def test_missing_config_file(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "absent.json"), "height", "0", "0"])

    assert code == 1
    assert "Error:" in capsys.readouterr().out


def test_invalid_config_file(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"world_extent": -1, "octaves": [], "hills": [], "basins": []}))

    assert main(["--config", str(path), "height", "0", "0"]) == 1
    assert "Invalid heightfield config" in capsys.readouterr().out


def test_serve_forwards_options(monkeypatch):
    forwarded = []

    def fake_serve(argv):
        forwarded.append(argv)
        return 0

    monkeypatch.setattr("parkterrain.service.api.main", fake_serve)

    code = main([
        "--verbose", "serve", "--port", "9000",
        "--tile-size", "10", "--resolution", "8", "--max-tiles", "64"
    ])

    assert code == 0
    argv = forwarded[0]
    assert argv[argv.index("--port") + 1] == "9000"
    assert float(argv[argv.index("--tile-size") + 1]) == 10.0
    assert argv[argv.index("--resolution") + 1] == "8"
    assert argv[argv.index("--max-tiles") + 1] == "64"
    assert "--verbose" in argv
    assert "--config" not in argv


def test_server_main_builds_configured_app(monkeypatch, capsys):
    from parkterrain.service import api

    launched = {}

    def fake_run(app, host, port, log_level):
        launched.update(app=app, host=host, port=port, log_level=log_level)

    monkeypatch.setattr(api.uvicorn, "run", fake_run)

    assert api.main(["--port", "9001", "--tile-size", "10", "--resolution", "2", "--verbose"]) == 0

    assert launched["port"] == 9001
    assert launched["log_level"] == "debug"
    assert logging.getLogger("parkterrain").level == logging.DEBUG
    assert "Starting Park Terrain API server..." in capsys.readouterr().out

    from fastapi.testclient import TestClient

    tile = TestClient(launched["app"]).get("/tiles/1/0").json()
    assert tile["origin"] == [10.0, 0.0]
    assert len(tile["heights"]) == 3
