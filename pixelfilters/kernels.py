"""
Convolution kernels and the built-in kernel library.

Weights are indexed ``weights[k + rx, l + ry]`` where k is the horizontal and
l the vertical offset from the center, so the first axis runs along x.
"""
import logging

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_GAUSSIAN_RADIUS = 3
DEFAULT_GAUSSIAN_SIGMA = 2.0

# Kernel presets
KERNEL_BOX_BLUR = np.full((3, 3), 1.0 / 9.0)
KERNEL_SHARPEN = np.array([[0,-1,0],[-1,5,-1],[0,-1,0]], dtype=float)
KERNEL_EDGE_DETECT = np.array([[-1,-1,-1],[0,0,0],[1,1,1]], dtype=float)
KERNEL_LAPLACIAN = np.array([[-1,-1,-1],[-1,8,-1],[-1,-1,-1]], dtype=float)
KERNEL_EMBOSS = np.array([[-2,-1,0],[-1,1,1],[0,1,2]], dtype=float)


class KernelError(ValueError):
    """Raised when a kernel cannot be built from the given weights or parameters."""


class Kernel:
    """Immutable 2D float kernel with odd dimensions and an implicit center."""

    def __init__(self, weights):
        arr = np.array(weights, dtype=float)
        if arr.ndim != 2:
            raise KernelError(f"Kernel must be 2D, got {arr.ndim}D")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise KernelError("Kernel must not be empty")
        if arr.shape[0] % 2 == 0 or arr.shape[1] % 2 == 0:
            raise KernelError(f"Kernel dimensions must be odd, got {arr.shape[0]}x{arr.shape[1]}")
        if not np.all(np.isfinite(arr)):
            raise KernelError("Kernel weights must be finite")
        arr.setflags(write=False)
        self._weights = arr

    @property
    def weights(self):
        return self._weights

    @property
    def width(self):
        return self._weights.shape[0]

    @property
    def height(self):
        return self._weights.shape[1]

    @property
    def radius_x(self):
        return self.width // 2

    @property
    def radius_y(self):
        return self.height // 2

    def weight(self, k, l):
        """Weight at offset (k, l) from the center."""
        return self._weights[k + self.radius_x, l + self.radius_y]

    def total(self):
        return float(self._weights.sum())

    def normalized(self):
        """Copy scaled to sum to 1; kernels summing to zero are returned unchanged."""
        s = self._weights.sum()
        if s == 0:
            return self
        return Kernel(self._weights / s)

    def __eq__(self, other):
        if not isinstance(other, Kernel):
            return NotImplemented
        return np.array_equal(self._weights, other._weights)

    def __hash__(self):
        return hash((self._weights.shape, self._weights.tobytes()))

    def __repr__(self):
        return f"Kernel({self.width}x{self.height})"


def identity():
    return Kernel([[1.0]])


def box_blur():
    """3x3 mean filter."""
    return Kernel(KERNEL_BOX_BLUR)


def gaussian(radius=DEFAULT_GAUSSIAN_RADIUS, sigma=DEFAULT_GAUSSIAN_SIGMA):
    """
    Square Gaussian kernel of size 2*radius+1, normalized to sum to 1.

    Args:
        radius: non-negative integer half-width
        sigma: positive standard deviation
    """
    if isinstance(radius, bool) or int(radius) != radius or radius < 0:
        raise KernelError(f"Gaussian radius must be a non-negative integer, got {radius!r}")
    if not sigma > 0:
        raise KernelError(f"Gaussian sigma must be positive, got {sigma!r}")
    radius = int(radius)

    offsets = np.arange(-radius, radius + 1, dtype=float)
    i, j = np.meshgrid(offsets, offsets, indexing="ij")
    dist2 = i * i + j * j
    # 2*sigma^2 can underflow to 0 for tiny sigma; the center weight stays exp(0)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        exponent = np.where(dist2 > 0, -dist2 / (2.0 * sigma * sigma), 0.0)
    weights = np.exp(exponent)
    weights /= weights.sum()

    logger.debug("Gaussian kernel radius=%d sigma=%s", radius, sigma)
    return Kernel(weights)


def sharpen():
    return Kernel(KERNEL_SHARPEN)


def edge_detect():
    """Directional first-derivative kernel (Prewitt-style, single direction)."""
    return Kernel(KERNEL_EDGE_DETECT)


def laplacian():
    return Kernel(KERNEL_LAPLACIAN)


def emboss():
    return Kernel(KERNEL_EMBOSS)


KERNEL_PRESETS = {
    "identity": identity,
    "blur": box_blur,
    "gaussian": gaussian,
    "sharpen": sharpen,
    "edge": edge_detect,
    "laplacian": laplacian,
    "emboss": emboss,
}
