"""
Semantic validation for heightfield configurations.

The pydantic models only check types; this validator checks that the
values describe a usable terrain and reports every problem at once.
"""

import math
from typing import List, Tuple


class ConfigError(ValueError):
    """Raised when a configuration cannot produce a valid HeightField."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Invalid heightfield config: " + "; ".join(self.errors))


class ConfigValidator:
    """
    Validates HeightFieldConfig values.

    Collects error messages instead of stopping at the first problem so
    a broken config file can be fixed in one pass.
    """

    def validate(self, config) -> Tuple[bool, List[str]]:
        """
        Validate a configuration.

        Args:
            config: HeightFieldConfig to check

        Returns:
            Tuple of (is_valid, error_messages)
        """

        errors = []
        errors.extend(self._validate_world(config))
        errors.extend(self._validate_octaves(config.octaves))
        errors.extend(self._validate_hills(config.hills))
        errors.extend(self._validate_basins(config.basins))

        return len(errors) == 0, errors

    def ensure_valid(self, config) -> None:
        """Raise ConfigError if the configuration has any problem."""

        is_valid, errors = self.validate(config)
        if not is_valid:
            raise ConfigError(errors)

    def _validate_world(self, config) -> List[str]:
        errors = []

        if not math.isfinite(config.world_extent) or config.world_extent <= 0:
            errors.append(f"world_extent must be positive and finite, got {config.world_extent}")

        if not math.isfinite(config.edge_falloff_exponent) or config.edge_falloff_exponent <= 0:
            errors.append(
                f"edge_falloff_exponent must be positive and finite, got {config.edge_falloff_exponent}"
            )

        if not math.isfinite(config.path_falloff_divisor) or config.path_falloff_divisor <= 0:
            errors.append(
                f"path_falloff_divisor must be positive and finite, got {config.path_falloff_divisor}"
            )

        return errors

    def _validate_octaves(self, octaves) -> List[str]:
        errors = []

        if len(octaves) == 0:
            errors.append("octaves cannot be empty")

        for i, octave in enumerate(octaves):
            if not math.isfinite(octave.frequency_scale):
                errors.append(f"octaves[{i}].frequency_scale must be finite")
            if not math.isfinite(octave.weight):
                errors.append(f"octaves[{i}].weight must be finite")

        return errors

    def _validate_hills(self, hills) -> List[str]:
        errors = []

        for i, hill in enumerate(hills):
            errors.extend(self._validate_center(f"hills[{i}]", hill.center_x, hill.center_z))
            errors.extend(self._validate_radius(f"hills[{i}]", hill.radius))
            if not math.isfinite(hill.peak_height):
                errors.append(f"hills[{i}].peak_height must be finite")
            elif hill.peak_height < 0:
                errors.append(f"hills[{i}].peak_height cannot be negative, got {hill.peak_height}")

        return errors

    def _validate_basins(self, basins) -> List[str]:
        errors = []

        for i, basin in enumerate(basins):
            errors.extend(self._validate_center(f"basins[{i}]", basin.center_x, basin.center_z))
            errors.extend(self._validate_radius(f"basins[{i}]", basin.radius))
            if not math.isfinite(basin.target_depth):
                errors.append(f"basins[{i}].target_depth must be finite")

        return errors

    @staticmethod
    def _validate_center(label: str, center_x: float, center_z: float) -> List[str]:
        if math.isfinite(center_x) and math.isfinite(center_z):
            return []
        return [f"{label} center ({center_x}, {center_z}) must be finite"]

    @staticmethod
    def _validate_radius(label: str, radius: float) -> List[str]:
        # NaN fails both comparisons, so check finiteness explicitly
        if not math.isfinite(radius) or radius <= 0:
            return [f"{label}.radius must be positive, got {radius}"]
        return []
