"""
Configuration models for the park heightfield.

Defines the immutable building blocks of a terrain (noise octaves, hills,
water basins) and the aggregate HeightFieldConfig, plus the reference
constants of the park world and JSON persistence helpers.
"""

import json
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .validator import ConfigError


class NoiseOctave(BaseModel):
    model_config = ConfigDict(frozen=True)

    frequency_scale: float = Field(..., description="Angular frequency applied to x and z")
    weight: float = Field(..., description="Contribution of this octave to the noise sum")


class Hill(BaseModel):
    model_config = ConfigDict(frozen=True)

    center_x: float = Field(..., description="Hill centre X coordinate")
    center_z: float = Field(..., description="Hill centre Z coordinate")
    peak_height: float = Field(..., description="Height added at the hill centre")
    radius: float = Field(..., description="Distance at which the hill fades out")


class WaterBasin(BaseModel):
    model_config = ConfigDict(frozen=True)

    center_x: float = Field(..., description="Basin centre X coordinate")
    center_z: float = Field(..., description="Basin centre Z coordinate")
    radius: float = Field(..., description="Distance at which the basin stops pulling")
    target_depth: float = Field(..., description="Elevation the basin pulls toward")


class HeightFieldConfig(BaseModel):
    """
    Complete description of a park terrain.

    Hills and basins are ordered: basins later in the list override
    earlier ones where they overlap.
    """

    model_config = ConfigDict(frozen=True)

    world_extent: float = Field(..., description="Side length of the square world")
    octaves: List[NoiseOctave] = Field(..., description="Noise octaves, large features first")
    hills: List[Hill] = Field(..., description="Additive radial hills")
    basins: List[WaterBasin] = Field(..., description="Water depressions, applied in order")
    edge_falloff_exponent: float = Field(4.0, description="Sharpness of the world-edge falloff")
    path_falloff_divisor: float = Field(8.0, description="Width over which paths ramp back to full height")


# Reference park constants
REFERENCE_WORLD_EXTENT = 200.0

REFERENCE_OCTAVES = [
    NoiseOctave(frequency_scale=0.015, weight=0.6),  # large features
    NoiseOctave(frequency_scale=0.03, weight=0.3),   # medium features
    NoiseOctave(frequency_scale=0.08, weight=0.1),   # small details
]

# The rendered park scene pre-scaled its medium and small octaves by 0.5 and 0.25
# before weighting them; these weights reproduce its sampled surface.
SCENE_COMPAT_OCTAVES = [
    NoiseOctave(frequency_scale=0.015, weight=0.6),
    NoiseOctave(frequency_scale=0.03, weight=0.15),
    NoiseOctave(frequency_scale=0.08, weight=0.025),
]

REFERENCE_HILLS = [
    Hill(center_x=-20, center_z=15, peak_height=3, radius=10),
    Hill(center_x=25, center_z=-25, peak_height=2.5, radius=12),
    Hill(center_x=-30, center_z=-20, peak_height=2, radius=8),
    Hill(center_x=18, center_z=22, peak_height=2.8, radius=9),
]

REFERENCE_BASINS = [
    WaterBasin(center_x=-25, center_z=-20, radius=8, target_depth=-0.3),
    WaterBasin(center_x=25, center_z=25, radius=10, target_depth=-0.4),
    WaterBasin(center_x=0, center_z=0, radius=3, target_depth=-0.5),
]


def reference_config(world_extent: float = REFERENCE_WORLD_EXTENT) -> HeightFieldConfig:
    """Build the park world used by the reference scene."""

    return HeightFieldConfig(
        world_extent=world_extent,
        octaves=list(REFERENCE_OCTAVES),
        hills=list(REFERENCE_HILLS),
        basins=list(REFERENCE_BASINS),
        edge_falloff_exponent=4.0,
        path_falloff_divisor=8.0,
    )


def load_config(path: Union[str, Path]) -> HeightFieldConfig:
    """
    Load a HeightFieldConfig from a JSON file.

    Args:
        path: Path to a JSON document matching HeightFieldConfig

    Returns:
        Parsed configuration (semantic checks happen when a HeightField is built)

    Raises:
        ConfigError: If the file is not valid JSON or does not match the schema
    """

    path = Path(path)
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError([f"{path}: invalid JSON ({e})"]) from e

    try:
        return HeightFieldConfig.model_validate(data)
    except ValidationError as e:
        messages = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigError(messages) from e


def save_config(config: HeightFieldConfig, path: Union[str, Path]) -> None:
    """Write a config as indented JSON."""

    with open(path, "w") as f:
        f.write(config.model_dump_json(indent=2))
