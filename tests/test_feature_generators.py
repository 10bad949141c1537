"""Tests for the individual terrain shaping features."""

import math

import pytest

from parkterrain.config import Hill, NoiseOctave, SCENE_COMPAT_OCTAVES, REFERENCE_OCTAVES, WaterBasin
from parkterrain.engine.feature_generators import (
    EdgeFalloff, HillSet, NoiseField, PathMask, WaterBasinSet
)


def test_noise_single_octave_is_sine_of_sum():
    noise = NoiseField([NoiseOctave(frequency_scale=1.0, weight=1.0)])

    for x, z in [(0.0, 0.0), (0.3, 1.1), (-2.0, 5.5), (10.0, -3.0)]:
        assert noise.sample(x, z) == pytest.approx(math.sin(x + z))


def test_noise_reference_octaves_bounded_and_deterministic():
    noise = NoiseField(REFERENCE_OCTAVES)

    assert len(noise) == 3
    assert noise.sample(0.0, 0.0) == 0.0
    for x in range(-100, 101, 7):
        for z in range(-100, 101, 11):
            value = noise.sample(x, z)
            assert -1.0 <= value <= 1.0
            assert value == noise.sample(x, z)


def test_scene_compat_octaves_match_prescaled_formula():
    noise = NoiseField(SCENE_COMPAT_OCTAVES)

    def prescaled(x, z):
        n1 = math.sin(x * 0.015) * math.cos(z * 0.015) + math.cos(x * 0.015) * math.sin(z * 0.015)
        n2 = (math.sin(x * 0.03) * math.cos(z * 0.03) + math.cos(x * 0.03) * math.sin(z * 0.03)) * 0.5
        n3 = (math.sin(x * 0.08) * math.cos(z * 0.08) + math.cos(x * 0.08) * math.sin(z * 0.08)) * 0.25
        return n1 * 0.6 + n2 * 0.3 + n3 * 0.1

    for x, z in [(12.0, 7.0), (-40.0, 22.5), (63.0, -81.0)]:
        assert noise.sample(x, z) == pytest.approx(prescaled(x, z))


def test_edge_falloff_profile():
    edge = EdgeFalloff(world_extent=200.0)

    assert edge.radius == pytest.approx(90.0)
    assert edge.factor(0.0, 0.0) == 1.0
    assert edge.factor(45.0, 0.0) == pytest.approx(1.0 - 0.5 ** 4)
    assert edge.factor(90.0, 0.0) == pytest.approx(0.0, abs=1e-12)
    assert edge.factor(0.0, -120.0) == 0.0
    assert edge.factor(500.0, 500.0) == 0.0


def test_edge_falloff_decreases_with_distance():
    edge = EdgeFalloff(world_extent=200.0)
    values = [edge.factor(d * 0.6, d * 0.8) for d in range(0, 100, 5)]

    assert all(a >= b for a, b in zip(values, values[1:]))


def test_path_mask_corridors():
    paths = PathMask(divisor=8.0)

    assert paths.factor(0.0, 50.0) == 0.0    # z corridor
    assert paths.factor(-35.0, 0.0) == 0.0   # x corridor
    assert paths.factor(12.0, 12.0) == 0.0   # 45° diagonal
    assert paths.factor(-7.0, 7.0) == 0.0    # 135° diagonal


def test_path_mask_ramp():
    paths = PathMask(divisor=8.0)

    assert paths.corridor_distance(4.0, 20.0) == 4.0
    assert paths.factor(4.0, 20.0) == pytest.approx(0.5)
    assert paths.factor(30.0, 10.0) == 1.0
    assert paths.corridor_distance(10.0, 0.0) == 0.0


def test_hill_profile():
    hills = HillSet([Hill(center_x=10, center_z=10, peak_height=3, radius=10)])

    assert hills.contribution(10.0, 10.0) == 3.0
    assert hills.contribution(15.0, 10.0) == pytest.approx(3 * 0.5 ** 2)
    assert hills.contribution(20.0, 10.0) == 0.0
    assert hills.contribution(-50.0, 40.0) == 0.0
    assert hills.apply(1.25, 10.0, 10.0) == pytest.approx(4.25)


def test_overlapping_hills_stack():
    hill = Hill(center_x=0, center_z=0, peak_height=2, radius=5)
    hills = HillSet([hill, hill])

    assert len(hills) == 2
    assert hills.contribution(0.0, 0.0) == 4.0


def test_basin_center_reaches_target_depth():
    basins = WaterBasinSet([WaterBasin(center_x=5, center_z=5, radius=4, target_depth=-0.5)])

    assert basins.apply(2.0, 5.0, 5.0) == -0.5
    assert basins.apply(2.0, 7.0, 5.0) == pytest.approx(2.0 * 0.75 + -0.5 * 0.25)


def test_basin_leaves_outside_points_untouched():
    basins = WaterBasinSet([WaterBasin(center_x=5, center_z=5, radius=4, target_depth=-0.5)])

    assert basins.apply(1.7, 9.0, 5.0) == 1.7
    assert basins.apply(-3.2, 40.0, -40.0) == -3.2


def test_overlapping_basins_last_one_wins():
    shallow = WaterBasin(center_x=0, center_z=0, radius=10, target_depth=-0.2)
    deep = WaterBasin(center_x=0, center_z=0, radius=10, target_depth=-1.0)

    assert WaterBasinSet([shallow, deep]).apply(1.0, 0.0, 0.0) == -1.0
    # Deepest is not preferred: the later, shallower basin wins
    assert WaterBasinSet([deep, shallow]).apply(1.0, 0.0, 0.0) == -0.2


def test_basin_nearest_with_margin():
    basins = WaterBasinSet([
        WaterBasin(center_x=-25, center_z=-20, radius=8, target_depth=-0.3),
        WaterBasin(center_x=0, center_z=0, radius=3, target_depth=-0.5),
    ])

    assert basins.nearest(-25.0, -20.0) == 0
    assert basins.nearest(0.0, 4.0) is None
    assert basins.nearest(0.0, 4.0, margin=2.0) == 1
    assert basins.nearest(40.0, 40.0, margin=2.0) is None
