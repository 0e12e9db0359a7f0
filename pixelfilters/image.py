"""
Row-major RGBA pixel buffer plus Pillow adapters for reading and writing files.
"""
import logging
from pathlib import Path

import numpy as np
from PIL import Image as PILImage

from .color import Color, OPAQUE

logger = logging.getLogger(__name__)


class Image:
    """
    Fixed-size grid of RGBA pixels.

    Pixels live in a uint8 array of shape (height, width, 4); accessors take
    (x, y) like the processing loop does. Filters only ever read a source image
    and write into a freshly allocated result.
    """

    def __init__(self, pixels):
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError(f"Expected pixel array of shape (H, W, 3|4), got {pixels.shape}")
        if not np.issubdtype(pixels.dtype, np.integer):
            raise ValueError(f"Expected integer pixel data, got {pixels.dtype}")
        if pixels.size and (pixels.min() < 0 or pixels.max() > 255):
            raise ValueError("Pixel channels must lie in [0, 255]")

        if pixels.shape[2] == 3:
            alpha = np.full(pixels.shape[:2] + (1,), OPAQUE, dtype=np.uint8)
            pixels = np.concatenate([pixels.astype(np.uint8), alpha], axis=2)

        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @classmethod
    def new(cls, width, height):
        """Allocate a transparent black image."""
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    @classmethod
    def from_colors(cls, rows):
        """Build an image from nested lists of (r, g, b[, a]) tuples, one list per row."""
        rows = [[tuple(c) if len(c) == 4 else tuple(c) + (OPAQUE,) for c in row] for row in rows]
        if not rows:
            return cls.new(0, 0)
        return cls(np.array(rows, dtype=np.int64).reshape(len(rows), len(rows[0]), 4))

    @property
    def width(self):
        return self.pixels.shape[1]

    @property
    def height(self):
        return self.pixels.shape[0]

    @property
    def size(self):
        return self.width, self.height

    def get_pixel(self, x, y) -> Color:
        r, g, b, a = self.pixels[y, x]
        return Color(int(r), int(g), int(b), int(a))

    def set_pixel(self, x, y, color):
        self.pixels[y, x] = color

    def copy(self):
        return Image(self.pixels.copy())

    def __eq__(self, other):
        if not isinstance(other, Image):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

    def __repr__(self):
        return f"Image(width={self.width}, height={self.height})"


# ==== PILLOW ADAPTERS ====

def from_pil(img) -> Image:
    return Image(np.array(img.convert("RGBA")))


def to_pil(image: Image):
    return PILImage.fromarray(image.pixels)


def load_image(path) -> Image:
    """Load any Pillow-readable file as an RGBA image."""
    path = Path(path)
    with PILImage.open(path) as img:
        image = from_pil(img)
    logger.debug("Loaded %s (%dx%d)", path, image.width, image.height)
    return image


def save_image(image: Image, path):
    """Save an image; formats without alpha (JPEG) get the RGB channels only."""
    path = Path(path)
    img = to_pil(image)
    if path.suffix.lower() in (".jpg", ".jpeg"):
        img = img.convert("RGB")
    img.save(path)
    logger.debug("Saved %s (%dx%d)", path, image.width, image.height)
