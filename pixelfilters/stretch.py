"""
Two-pass contrast stretch.

Pass 1 scans the whole image for per-channel minimum and maximum. Pass 2 maps
each channel linearly so its minimum lands on 0 and its maximum on 255. The
statistics are a plain value handed from one pass to the next, so a
ContrastStretch instance carries no per-image state and can be reused.
"""
import logging
from dataclasses import dataclass

from .color import Color, OPAQUE, clamp_channel
from .filters import PixelTransform
from .processing import ABORTED, process_image, progress_percent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelStats:
    min_r: int
    min_g: int
    min_b: int
    max_r: int
    max_g: int
    max_b: int

    @property
    def minimum(self):
        return self.min_r, self.min_g, self.min_b

    @property
    def maximum(self):
        return self.max_r, self.max_g, self.max_b

    def is_degenerate(self):
        """True if any channel is constant across the image."""
        return any(lo == hi for lo, hi in zip(self.minimum, self.maximum))


def compute_channel_stats(source, progress=None, is_cancelled=None):
    """
    Pass 1: per-channel min/max over every pixel.

    Progress and cancellation behave as in process_image. Returns ChannelStats,
    or ABORTED. An empty image yields stats with min 256 and max -1.
    """
    min_r = min_g = min_b = 256
    max_r = max_g = max_b = -1
    width = source.width
    pixels = source.pixels

    for i in range(width):
        if progress is not None:
            progress(progress_percent(i, width))
        if is_cancelled is not None and is_cancelled():
            logger.info("Statistics pass aborted at column %d/%d", i, width)
            return ABORTED
        for r, g, b in pixels[:, i, :3].tolist():
            if r > max_r:
                max_r = r
            if g > max_g:
                max_g = g
            if b > max_b:
                max_b = b
            if r < min_r:
                min_r = r
            if g < min_g:
                min_g = g
            if b < min_b:
                min_b = b

    stats = ChannelStats(min_r, min_g, min_b, max_r, max_g, max_b)
    logger.debug("Channel stats: min=%s max=%s", stats.minimum, stats.maximum)
    return stats


def stretch_channel(value, low, high):
    """Map value from [low, high] to [0, 255]. A constant channel passes through."""
    if high == low:
        return value
    return clamp_channel((value - low) * 255 // (high - low))


class ContrastStretchFilter(PixelTransform):
    """Pass 2: per-pixel linear mapping against fixed ChannelStats."""

    def __init__(self, stats: ChannelStats):
        self.stats = stats

    def compute_color(self, source, x, y):
        c = source.get_pixel(x, y)
        s = self.stats
        return Color(stretch_channel(c.r, s.min_r, s.max_r),
                     stretch_channel(c.g, s.min_g, s.max_g),
                     stretch_channel(c.b, s.min_b, s.max_b),
                     OPAQUE)

    def __repr__(self):
        return f"ContrastStretchFilter({self.stats!r})"


class ContrastStretch:
    """Controller running the statistics pass and then the mapping pass."""

    def process(self, source, progress=None, is_cancelled=None):
        stats = compute_channel_stats(source, progress, is_cancelled)
        if stats is ABORTED:
            return ABORTED
        if stats.is_degenerate():
            logger.debug("Constant channel in image, passing it through unchanged")
        return process_image(source, ContrastStretchFilter(stats), progress, is_cancelled)

    def __repr__(self):
        return "ContrastStretch()"


def contrast_stretch(source, progress=None, is_cancelled=None):
    """Stretch source to the full channel range. Returns a new image or ABORTED."""
    return ContrastStretch().process(source, progress, is_cancelled)
