"""
Heightmap export helpers (PNG previews and raw arrays).
"""

import base64
import io
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image


def heightmap_to_uint8(heightmap: np.ndarray) -> np.ndarray:
    """Normalize a heightmap to [0, 255] for visualization; flat maps become black."""

    heightmap = np.asarray(heightmap, dtype=np.float64)
    normalized = (heightmap - heightmap.min()) / (heightmap.max() - heightmap.min() + 1e-8)
    return (normalized * 255).astype(np.uint8)


def heightmap_to_image(heightmap: np.ndarray) -> Image.Image:
    # Row 0 is the smallest Z; flip so north is up in the picture
    return Image.fromarray(np.ascontiguousarray(np.flipud(heightmap_to_uint8(heightmap))))


def save_heightmap_png(heightmap: np.ndarray, path: Union[str, Path]) -> Path:
    path = Path(path)
    heightmap_to_image(heightmap).save(path, format="PNG")
    return path


def save_heightmap_npy(heightmap: np.ndarray, path: Union[str, Path]) -> Path:
    path = Path(path)
    np.save(path, np.asarray(heightmap, dtype=np.float64))
    return path


def heightmap_to_base64(heightmap: np.ndarray) -> str:
    """Encode a heightmap as a base64 PNG data URI."""

    buffer = io.BytesIO()
    heightmap_to_image(heightmap).save(buffer, format="PNG")
    buffer.seek(0)

    image_base64 = base64.b64encode(buffer.getvalue()).decode("utf-8")
    return f"data:image/png;base64,{image_base64}"
