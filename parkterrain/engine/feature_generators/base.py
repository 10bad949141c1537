"""
Base terrain feature and the noise field all terrain builds upon.
"""

import math
from abc import ABC, abstractmethod
from typing import List


class FeatureGenerator(ABC):
    """Base class for features that modify a running terrain height."""

    @abstractmethod
    def apply(self, height: float, x: float, z: float) -> float:
        """Apply this feature to the height already computed at (x, z)."""
        pass


class NoiseField:
    """
    Deterministic multi-frequency undulation.

    Trigonometric pseudo-noise: every octave is an analytic product of
    sines and cosines, so any point can be evaluated on its own without
    lattices or seeds. Output is roughly in [-1, 1] when the weights sum
    to 1.
    """

    def __init__(self, octaves: List):
        self.frequencies = tuple(float(octave.frequency_scale) for octave in octaves)
        self.weights = tuple(float(octave.weight) for octave in octaves)

    def sample(self, x: float, z: float) -> float:
        """Weighted sum of octaves at (x, z)."""

        total = 0.0
        for frequency, weight in zip(self.frequencies, self.weights):
            fx = x * frequency
            fz = z * frequency
            octave = math.sin(fx) * math.cos(fz) + math.cos(fx) * math.sin(fz)
            total += weight * octave

        return total

    def __len__(self) -> int:
        return len(self.frequencies)
