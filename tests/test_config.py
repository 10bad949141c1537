import json
import math

import pytest
from pydantic import ValidationError

from parkterrain.config import (
    ConfigError, ConfigValidator, Hill, NoiseOctave, WaterBasin,
    load_config, reference_config, save_config
)
from parkterrain.engine import HeightField

from conftest import make_config


def test_reference_config_is_valid():
    config = reference_config()
    is_valid, errors = ConfigValidator().validate(config)

    assert is_valid
    assert errors == []
    assert len(config.octaves) == 3
    assert len(config.hills) == 4
    assert len(config.basins) == 3
    assert config.basins[-1].center_x == 0 and config.basins[-1].target_depth == -0.5


def test_zero_radius_hill_rejected():
    config = make_config(hills=[Hill(center_x=0, center_z=0, peak_height=1, radius=0)])

    with pytest.raises(ConfigError) as exc_info:
        HeightField(config)

    assert len(exc_info.value.errors) == 1
    assert exc_info.value.errors[0].startswith("hills[0].radius must be positive")


def test_negative_radius_basin_rejected():
    config = make_config(basins=[WaterBasin(center_x=0, center_z=0, radius=-1, target_depth=-0.2)])

    with pytest.raises(ConfigError, match="basins\\[0\\].radius"):
        HeightField(config)


def test_negative_hill_height_rejected():
    config = make_config(hills=[Hill(center_x=0, center_z=0, peak_height=-2.5, radius=4)])

    with pytest.raises(ConfigError) as exc_info:
        HeightField(config)

    assert exc_info.value.errors == ["hills[0].peak_height cannot be negative, got -2.5"]


def test_flat_hill_allowed():
    config = make_config(hills=[Hill(center_x=0, center_z=0, peak_height=0.0, radius=4)])

    assert ConfigValidator().validate(config) == (True, [])


def test_any_number_of_octaves_allowed():
    octaves = [NoiseOctave(frequency_scale=0.01 * (i + 1), weight=0.5 / (i + 1)) for i in range(5)]
    field = HeightField(make_config(octaves=octaves))

    assert len(field.config.octaves) == 5
    assert math.isfinite(field.evaluate(12.0, -3.0))


def test_non_finite_values_rejected():
    config = make_config(
        hills=[Hill(center_x=math.nan, center_z=0, peak_height=1, radius=3)],
        basins=[WaterBasin(center_x=0, center_z=0, radius=math.inf, target_depth=-0.2)],
    )

    is_valid, errors = ConfigValidator().validate(config)

    assert not is_valid
    assert len(errors) == 2
    assert errors[0].startswith("hills[0] center")
    assert errors[1].startswith("basins[0].radius")


def test_world_level_errors_collected():
    config = make_config(world_extent=0.0, octaves=[], path_falloff_divisor=-8.0)

    with pytest.raises(ConfigError) as exc_info:
        HeightField(config)

    assert len(exc_info.value.errors) == 3
    assert str(exc_info.value).startswith("Invalid heightfield config: ")


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


def test_configs_are_immutable():
    config = reference_config()

    with pytest.raises(ValidationError):
        config.world_extent = 100.0
    with pytest.raises(ValidationError):
        config.hills[0].peak_height = 10.0


def test_save_and_load(tmp_path):
    config = reference_config()
    path = tmp_path / "park.json"

    save_config(config, path)
    loaded = load_config(path)

    assert loaded == config
    assert HeightField(loaded).evaluate(12.5, -3.0) == HeightField(config).evaluate(12.5, -3.0)


def test_load_applies_defaults(tmp_path):
    path = tmp_path / "small.json"
    path.write_text(json.dumps({
        "world_extent": 50,
        "octaves": [{"frequency_scale": 0.05, "weight": 1.0}],
        "hills": [],
        "basins": [{"center_x": 3, "center_z": 4, "radius": 2, "target_depth": -1}],
    }))

    config = load_config(path)

    assert config.edge_falloff_exponent == 4.0
    assert config.path_falloff_divisor == 8.0
    assert config.basins[0] == WaterBasin(center_x=3, center_z=4, radius=2, target_depth=-1)
    assert config.octaves == [NoiseOctave(frequency_scale=0.05, weight=1.0)]


def test_load_rejects_malformed_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(path)


def test_load_reports_schema_errors(tmp_path):
    path = tmp_path / "wrong.json"
    path.write_text(json.dumps({
        "world_extent": 200,
        "octaves": [{"frequency_scale": 0.015, "weight": 0.6}],
        "hills": [{"center_x": 0, "center_z": 0, "peak_height": 1, "radius": "wide"}],
        "basins": [],
    }))

    with pytest.raises(ConfigError) as exc_info:
        load_config(path)

    assert any(error.startswith("hills.0.radius") for error in exc_info.value.errors)


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_config(tmp_path / "absent.json")
