import pytest

from parkterrain.config import (
    HeightFieldConfig, Hill, NoiseOctave, REFERENCE_OCTAVES, WaterBasin, reference_config
)
from parkterrain.engine import GroundQuery, HeightField


def make_config(hills=(), basins=(), octaves=None, world_extent=200.0, **kwargs) -> HeightFieldConfig:
    """Config with the reference noise and only the given hills and basins."""

    return HeightFieldConfig(
        world_extent=world_extent,
        octaves=list(octaves if octaves is not None else REFERENCE_OCTAVES),
        hills=list(hills),
        basins=list(basins),
        **kwargs
    )


@pytest.fixture
def bare_field() -> HeightField:
    """Reference noise without hills or basins."""

    return HeightField(make_config())


@pytest.fixture
def reference_field() -> HeightField:
    return HeightField(reference_config())


@pytest.fixture
def reference_query(reference_field) -> GroundQuery:
    return GroundQuery(reference_field)


@pytest.fixture
def calm_config() -> HeightFieldConfig:
    """No undulation: one hill and one pond on otherwise flat ground."""

    return make_config(
        octaves=[NoiseOctave(frequency_scale=0.01, weight=0.0)],
        hills=[Hill(center_x=20, center_z=20, peak_height=3, radius=10)],
        basins=[WaterBasin(center_x=-20, center_z=-20, radius=8, target_depth=-0.5)],
    )
