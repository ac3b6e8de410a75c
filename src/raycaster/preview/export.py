"""Image export utilities for rendered images.

Rendered images are (height, width, 4) uint8 RGBA arrays. The background
alpha of 1 is not meant as transparency, so images
are written as 8-bit RGB and the alpha channel is dropped.

Supported formats:
    - Anything Pillow can write from RGB data (PNG, JPEG, BMP, ...),
      chosen from the file extension

Example:
    >>> from src.raycaster.preview.export import save_image
    >>> from src.raycaster.scene.demo import create_demo_scene
    >>>
    >>> image = create_demo_scene().render()
    >>> save_image(image, "sphere.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def image_to_rgb(image: npt.NDArray[np.uint8]) -> npt.NDArray[np.uint8]:
    """Drop the alpha channel of an RGBA image.

    Args:
        image: Image array of shape (H, W, 4).

    Returns:
        Contiguous image array of shape (H, W, 3) with dtype uint8.

    Raises:
        ValueError: If the image is not an (H, W, 4) array.
    """
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) RGBA image, got shape {image.shape}")
    return np.ascontiguousarray(image[:, :, :3], dtype=np.uint8)


def save_image(image: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save a rendered image as an 8-bit RGB file.

    Args:
        image: Rendered RGBA image of shape (H, W, 4).
        filepath: Output file path; the extension selects the format.

    Returns:
        The path the image was written to.
    """
    path = Path(filepath)
    pil_image = PILImage.fromarray(image_to_rgb(image))
    pil_image.save(path)
    return path


def load_image(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Load an image file as an (H, W, 3) uint8 RGB array."""
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGB"), dtype=np.uint8)
