"""
2D convolution engine with edge-clamped sampling.

Border pixels are replicated: a neighbor outside the image is read from the
nearest edge pixel, never wrapped or zero-padded. Only R, G and B are
convolved; output alpha is always opaque.
"""
import numpy as np

from .color import Color, OPAQUE, clamp, clamp_channel
from .image import Image


def convolve_at(source: Image, kernel, x, y) -> Color:
    """Convolve the neighborhood of (x, y) with kernel and return the clamped color."""
    rx, ry = kernel.radius_x, kernel.radius_y
    weights = kernel.weights
    max_x, max_y = source.width - 1, source.height - 1
    pixels = source.pixels

    result_r = 0.0
    result_g = 0.0
    result_b = 0.0
    for l in range(-ry, ry + 1):
        idy = clamp(y + l, 0, max_y)
        for k in range(-rx, rx + 1):
            idx = clamp(x + k, 0, max_x)
            w = weights[k + rx, l + ry]
            r, g, b = pixels[idy, idx, :3]
            result_r += int(r) * w
            result_g += int(g) * w
            result_b += int(b) * w

    return Color(clamp_channel(result_r), clamp_channel(result_g), clamp_channel(result_b), OPAQUE)


def convolve_image(source: Image, kernel) -> Image:
    """
    Convolve the whole image at once.

    Same sampling, truncation and clamping as convolve_at; values may differ by
    one where float accumulation order lands a sum right on an integer.
    """
    rx, ry = kernel.radius_x, kernel.radius_y
    h, w = source.height, source.width
    out = np.empty((h, w, 4), dtype=np.uint8)
    out[:, :, 3] = OPAQUE
    if h == 0 or w == 0:
        return Image(out)

    rgb = source.pixels[:, :, :3].astype(np.float64)
    padded = np.pad(rgb, ((ry, ry), (rx, rx), (0, 0)), mode="edge")

    # windows[y, x, c, a, b] == padded[y + a, x + b, c]
    windows = np.lib.stride_tricks.sliding_window_view(padded, (2 * ry + 1, 2 * rx + 1), axis=(0, 1))
    acc = np.einsum("yxcab,ba->yxc", windows, kernel.weights)

    out[:, :, :3] = np.clip(np.trunc(acc), 0, 255).astype(np.uint8)
    return Image(out)
