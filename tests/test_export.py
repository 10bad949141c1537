import base64
import io

import numpy as np
from PIL import Image

from parkterrain.engine.export import (
    heightmap_to_base64, heightmap_to_image, heightmap_to_uint8,
    save_heightmap_npy, save_heightmap_png
)


def test_uint8_normalization():
    heightmap = np.array([[-0.5, 0.0], [1.0, 3.0]])
    image = heightmap_to_uint8(heightmap)

    assert image.dtype == np.uint8
    assert image.min() == 0
    assert image.max() in (254, 255)
    assert heightmap_to_uint8(np.zeros((3, 3))).max() == 0


def test_image_orientation():
    heightmap = np.zeros((4, 6))
    heightmap[0, :] = 1.0  # smallest z

    image = heightmap_to_image(heightmap)

    assert image.size == (6, 4)
    # Smallest z ends up at the bottom of the picture
    assert image.getpixel((0, 3)) > 0
    assert image.getpixel((0, 0)) == 0


def test_save_png(tmp_path, reference_field):
    heightmap = reference_field.evaluate_grid(-20.0, -20.0, 40.0, 40.0, 16, 12)
    path = save_heightmap_png(heightmap, tmp_path / "park.png")

    with Image.open(path) as image:
        assert image.format == "PNG"
        assert image.size == (17, 13)


def test_save_npy(tmp_path, reference_field):
    heightmap = reference_field.evaluate_grid(-20.0, -20.0, 40.0, 40.0, 8, 8)
    path = save_heightmap_npy(heightmap, tmp_path / "park.npy")

    assert np.array_equal(np.load(path), heightmap)


def test_base64_data_uri():
    uri = heightmap_to_base64(np.arange(12, dtype=np.float64).reshape(3, 4))
    prefix = "data:image/png;base64,"

    assert uri.startswith(prefix)
    with Image.open(io.BytesIO(base64.b64decode(uri[len(prefix):]))) as image:
        assert image.size == (4, 3)
