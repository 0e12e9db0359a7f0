"""
Run independent filter invocations over several images in parallel using joblib.
"""
import logging

from joblib import Parallel, delayed

from .registry import create_filter

logger = logging.getLogger(__name__)


def _run_one(image, filter_factory):
    # A fresh filter per image, so nothing is shared between workers
    return filter_factory().process(image)


def apply_filter_batch(images, filter_factory, n_jobs=-1, prefer="processes"):
    """
    Apply a filter to every image, one invocation per image.

    Args:
        images: sequence of Image
        filter_factory: zero-argument callable building a filter, or a filter name
        n_jobs: joblib worker count, -1 uses all cores
        prefer: joblib backend hint, "processes" or "threads"

    Returns:
        List of results (Image or ABORTED) in input order.
    """
    if isinstance(filter_factory, str):
        name = filter_factory
        filter_factory = lambda: create_filter(name)

    images = list(images)
    logger.debug("Batch of %d images, n_jobs=%s, prefer=%s", len(images), n_jobs, prefer)
    return Parallel(n_jobs=n_jobs, prefer=prefer)(
        delayed(_run_one)(image, filter_factory) for image in images
    )
