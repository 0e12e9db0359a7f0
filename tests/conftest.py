import numpy as np
import pytest

from pixelfilters.image import Image


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_image(rng):
    """7x5 image with random RGB and alpha."""
    return Image(rng.integers(0, 256, size=(5, 7, 4), dtype=np.uint8))


@pytest.fixture
def scenario_image():
    return Image.from_colors([
        [(10, 20, 30, 255), (200, 100, 50, 255)],
        [(0, 0, 0, 255), (255, 255, 255, 255)],
    ])
