"""
Heightmap analysis for sampled park terrain.

Summarizes a sampled grid (elevation, slopes, hills, ponds, walkable flat
ground) so world builds can be checked and compared.
"""

from typing import Any, Dict

import numpy as np
from scipy.ndimage import label, maximum_filter


class HeightmapAnalyzer:
    """
    Analyzes sampled heightmaps.

    Grids are expected in the layout produced by HeightField.evaluate_grid:
    rows along Z, columns along X, with `spacing` world units between
    neighbouring samples.
    """

    def __init__(
        self,
        spacing: float = 1.0,
        water_level: float = 0.0,
        min_peak_height: float = 0.5,
        flat_slope: float = 0.05
    ):
        self.spacing = spacing
        self.water_level = water_level
        self.min_peak_height = min_peak_height
        self.flat_slope = flat_slope

    def analyze(self, heightmap: np.ndarray) -> Dict[str, Any]:
        """
        Full terrain analysis.

        Args:
            heightmap: 2-D array of terrain heights

        Returns:
            Dictionary with elevation, slope and feature sections
        """

        heightmap = np.asarray(heightmap, dtype=np.float64)
        if heightmap.ndim != 2:
            raise ValueError(f"heightmap must be 2-D, got shape {heightmap.shape}")

        return {
            "elevation_stats": self._analyze_elevation(heightmap),
            "slope_analysis": self._analyze_slopes(heightmap),
            "feature_detection": self._detect_features(heightmap),
            "analysis_metadata": {
                "heightmap_shape": list(heightmap.shape),
                "spacing": self.spacing,
                "water_level": self.water_level
            }
        }

    def _analyze_elevation(self, heightmap: np.ndarray) -> Dict[str, float]:
        lowest, highest = float(heightmap.min()), float(heightmap.max())

        return {
            "min": lowest,
            "max": highest,
            "mean": float(heightmap.mean()),
            "median": float(np.median(heightmap)),
            "std": float(heightmap.std()),
            "range": highest - lowest
        }

    def _slope_magnitude(self, heightmap: np.ndarray) -> np.ndarray:
        # np.gradient needs at least two samples per axis
        if min(heightmap.shape) < 2:
            return np.zeros_like(heightmap)

        grad_z, grad_x = np.gradient(heightmap, self.spacing)
        return np.sqrt(grad_x ** 2 + grad_z ** 2)

    def _analyze_slopes(self, heightmap: np.ndarray) -> Dict[str, float]:
        slope_magnitude = self._slope_magnitude(heightmap)

        return {
            "max_slope": float(np.max(slope_magnitude)),
            "mean_slope": float(np.mean(slope_magnitude)),
            "max_slope_deg": float(np.degrees(np.arctan(np.max(slope_magnitude)))),
            "flat_area_fraction": float(np.mean(slope_magnitude < self.flat_slope))
        }

    def _detect_features(self, heightmap: np.ndarray) -> Dict[str, Any]:
        return {**self._detect_peaks(heightmap), **self._detect_water_bodies(heightmap)}

    def _detect_peaks(self, heightmap: np.ndarray) -> Dict[str, Any]:
        """Local maxima that rise above `min_peak_height`."""

        local_maxima = maximum_filter(heightmap, size=5, mode="nearest") == heightmap
        significant_peaks = local_maxima & (heightmap > self.min_peak_height)

        peak_count = int(np.sum(significant_peaks))
        if peak_count == 0:
            return {"peaks_detected": 0, "peak_height_max": 0.0, "peak_locations": []}

        peak_locations = np.where(significant_peaks)
        return {
            "peaks_detected": peak_count,
            "peak_height_max": float(np.max(heightmap[significant_peaks])),
            "peak_locations": [(int(i), int(j)) for i, j in zip(peak_locations[0], peak_locations[1])]
        }

    def _detect_water_bodies(self, heightmap: np.ndarray) -> Dict[str, Any]:
        """Connected regions lying below the water level."""

        water_areas = heightmap < self.water_level
        labeled_water, num_water_bodies = label(water_areas)

        water_sizes = [int(np.sum(labeled_water == i)) for i in range(1, num_water_bodies + 1)]

        return {
            "water_bodies_count": int(num_water_bodies),
            "water_body_fraction": float(np.mean(water_areas)),
            "largest_water_body": max(water_sizes) if water_sizes else 0,
            "deepest_point": float(np.min(heightmap[water_areas])) if np.any(water_areas) else 0.0
        }
