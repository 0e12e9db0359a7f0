import numpy as np
import pytest

from pixelfilters.color import Color
from pixelfilters.image import Image, load_image, save_image


def test_dimensions_and_access(scenario_image):
    assert scenario_image.width == 2
    assert scenario_image.height == 2
    assert scenario_image.size == (2, 2)
    # (x, y) addressing over row-major storage
    assert scenario_image.get_pixel(1, 0) == Color(200, 100, 50, 255)
    assert scenario_image.get_pixel(0, 1) == Color(0, 0, 0, 255)


def test_rgb_array_gets_opaque_alpha():
    img = Image(np.zeros((2, 3, 3), dtype=np.uint8))
    assert img.pixels.shape == (2, 3, 4)
    assert (img.pixels[:, :, 3] == 255).all()


@pytest.mark.parametrize("pixels", [
    np.zeros((2, 2), dtype=np.uint8),
    np.zeros((2, 2, 2), dtype=np.uint8),
    np.zeros((2, 2, 4), dtype=float),
    np.full((1, 1, 4), 300),
])
def test_rejects_bad_pixel_arrays(pixels):
    with pytest.raises(ValueError):
        Image(pixels)


def test_new_and_set_pixel():
    img = Image.new(3, 2)
    assert img.size == (3, 2)
    img.set_pixel(2, 1, Color(1, 2, 3, 4))
    assert img.get_pixel(2, 1) == Color(1, 2, 3, 4)
    assert img.get_pixel(0, 0) == Color(0, 0, 0, 0)


def test_equality_and_copy(random_image):
    dup = random_image.copy()
    assert dup == random_image
    dup.pixels[0, 0, 0] = (int(dup.pixels[0, 0, 0]) + 1) % 256
    assert dup != random_image


def test_from_colors_empty():
    img = Image.from_colors([])
    assert img.size == (0, 0)


def test_png_round_trip(tmp_path, random_image):
    path = tmp_path / "img.png"
    save_image(random_image, path)
    assert load_image(path) == random_image


def test_jpeg_save_drops_alpha(tmp_path, random_image):
    path = tmp_path / "img.jpg"
    save_image(random_image, path)
    loaded = load_image(path)
    assert loaded.size == random_image.size
    assert (loaded.pixels[:, :, 3] == 255).all()
