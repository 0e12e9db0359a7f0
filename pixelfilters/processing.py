"""
Generic per-pixel processing loop with progress reporting and cooperative cancellation.
"""
import logging
import threading

from .image import Image

logger = logging.getLogger(__name__)


class _Aborted:
    """Result of a run that observed cancellation. Falsy, so ``if result:`` works."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "ABORTED"

    def __reduce__(self):
        return (_Aborted, ())


ABORTED = _Aborted()


class CancellationFlag:
    """Thread-safe flag a host sets and the loop polls; callable as the cancellation query."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    def reset(self):
        self._event.clear()

    @property
    def cancelled(self):
        return self._event.is_set()

    def __call__(self):
        return self._event.is_set()


def progress_percent(i, total):
    """Whole percentage of i out of total, floored."""
    return (i * 100) // total


def process_image(source: Image, transform, progress=None, is_cancelled=None):
    """
    Run transform over every pixel of source, column by column.

    Args:
        source: image to read; never modified
        transform: object with ``compute_color(source, x, y)``
        progress: optional callable receiving an int percentage per column
        is_cancelled: optional callable polled once per column

    Returns:
        New image of identical size, or ABORTED if cancellation was observed.
    """
    width, height = source.width, source.height
    result = Image.new(width, height)
    logger.debug("Running %s over %dx%d image", type(transform).__name__, width, height)

    for i in range(width):
        if progress is not None:
            progress(progress_percent(i, width))
        if is_cancelled is not None and is_cancelled():
            logger.info("%s aborted at column %d/%d", type(transform).__name__, i, width)
            return ABORTED
        for j in range(height):
            result.set_pixel(i, j, transform.compute_color(source, i, j))

    return result
