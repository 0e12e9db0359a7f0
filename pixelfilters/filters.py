"""
Pixel transforms: each filter computes one output color from a source image and a coordinate.
"""
import math
from abc import ABC, abstractmethod

from . import kernels
from .color import BLACK, Color, OPAQUE, clamp, clamp_channel
from .convolution import convolve_at, convolve_image
from .processing import process_image

WAVE_AMPLITUDE = 20
WAVE_PERIOD = 30
SHIFT_OFFSET = 50


class PixelTransform(ABC):
    """Computes the output color at (x, y) from a read-only source image."""

    @abstractmethod
    def compute_color(self, source, x, y) -> Color:
        ...

    def process(self, source, progress=None, is_cancelled=None):
        """Apply the transform to every pixel. Returns a new image or ABORTED."""
        return process_image(source, self, progress, is_cancelled)

    def __repr__(self):
        return f"{type(self).__name__}()"


class InvertFilter(PixelTransform):
    def compute_color(self, source, x, y):
        c = source.get_pixel(x, y)
        return Color(255 - c.r, 255 - c.g, 255 - c.b, c.a)


class GrayscaleFilter(PixelTransform):
    """Luma with truncation, not rounding."""

    def compute_color(self, source, x, y):
        c = source.get_pixel(x, y)
        luma = clamp_channel(math.floor(c.r * 0.299 + c.g * 0.587 + c.b * 0.114))
        return Color(luma, luma, luma, c.a)


class ConvolutionFilter(PixelTransform):
    """Neighborhood convolution with a fixed kernel."""

    def __init__(self, kernel):
        if not isinstance(kernel, kernels.Kernel):
            kernel = kernels.Kernel(kernel)
        self.kernel = kernel

    def compute_color(self, source, x, y):
        return convolve_at(source, self.kernel, x, y)

    def process_fast(self, source):
        """Vectorized whole-image variant; no progress or cancellation."""
        return convolve_image(source, self.kernel)

    def __repr__(self):
        return f"{type(self).__name__}({self.kernel!r})"


class BlurFilter(ConvolutionFilter):
    def __init__(self):
        super().__init__(kernels.box_blur())


class GaussianFilter(ConvolutionFilter):
    def __init__(self, radius=kernels.DEFAULT_GAUSSIAN_RADIUS, sigma=kernels.DEFAULT_GAUSSIAN_SIGMA):
        super().__init__(kernels.gaussian(radius, sigma))
        self.radius = radius
        self.sigma = sigma


class SharpenFilter(ConvolutionFilter):
    def __init__(self):
        super().__init__(kernels.sharpen())


class EdgeDetectFilter(ConvolutionFilter):
    def __init__(self):
        super().__init__(kernels.edge_detect())


class ColorCorrectionFilter(PixelTransform):
    """
    Scales each channel so the reference color maps towards white.

    By default the scale factor is ``255 // reference`` computed with integer
    division before multiplying, which reproduces the legacy output exactly.
    With ``exact=True`` the float ratio ``255 / reference`` is used instead.
    A zero reference channel passes the source channel through.
    """

    def __init__(self, reference, exact=False):
        reference = tuple(reference)
        if len(reference) not in (3, 4):
            raise ValueError(f"Reference color needs 3 or 4 channels, got {len(reference)}")
        for value in reference[:3]:
            if int(value) != value or not 0 <= value <= 255:
                raise ValueError(f"Reference channels must be integers in [0, 255], got {reference}")
        self.reference = Color(*(int(v) for v in reference[:3]))
        self.exact = exact

    def _correct(self, value, ref):
        if ref == 0:
            return value
        if self.exact:
            return clamp_channel(value * 255 / ref)
        return clamp_channel(value * (255 // ref))

    def compute_color(self, source, x, y):
        c = source.get_pixel(x, y)
        ref = self.reference
        return Color(self._correct(c.r, ref.r), self._correct(c.g, ref.g), self._correct(c.b, ref.b), OPAQUE)

    def __repr__(self):
        return f"ColorCorrectionFilter(reference={self.reference.rgb}, exact={self.exact})"


class WaveFilter(PixelTransform):
    """Horizontal sinusoidal displacement; rows stay in place."""

    def __init__(self, amplitude=WAVE_AMPLITUDE, period=WAVE_PERIOD):
        if period == 0:
            raise ValueError("Wave period must be non-zero")
        self.amplitude = amplitude
        self.period = period

    def source_x(self, x, width):
        offset = round(self.amplitude * math.sin(2 * math.pi * x / self.period))
        return clamp(x + offset, 0, width - 1)

    def compute_color(self, source, x, y):
        return source.get_pixel(self.source_x(x, source.width), y)


class ShiftFilter(PixelTransform):
    """Moves the image left by a fixed offset, filling the right edge with opaque black."""

    def __init__(self, offset=SHIFT_OFFSET):
        if offset < 0:
            raise ValueError(f"Shift offset must be non-negative, got {offset}")
        self.offset = offset

    def compute_color(self, source, x, y):
        if x + self.offset < source.width:
            return source.get_pixel(x + self.offset, y)
        return BLACK
