import numpy as np
import pytest

from pixelfilters.color import Color
from pixelfilters.image import Image
from pixelfilters.processing import ABORTED
from pixelfilters.stretch import (ChannelStats, ContrastStretch, ContrastStretchFilter,
                                  compute_channel_stats, contrast_stretch, stretch_channel)


@pytest.fixture
def low_contrast():
    return Image.from_colors([
        [(50, 10, 77), (100, 20, 77)],
        [(150, 30, 77), (250, 40, 77)],
    ])


def test_channel_stats(low_contrast):
    stats = compute_channel_stats(low_contrast)
    assert stats == ChannelStats(50, 10, 77, 250, 40, 77)
    assert stats.minimum == (50, 10, 77)
    assert stats.maximum == (250, 40, 77)
    assert stats.is_degenerate()


def test_stats_of_empty_image_keep_seeds():
    stats = compute_channel_stats(Image.new(0, 0))
    assert stats.minimum == (256, 256, 256)
    assert stats.maximum == (-1, -1, -1)


def test_stretch_channel():
    assert stretch_channel(50, 50, 250) == 0
    assert stretch_channel(250, 50, 250) == 255
    # (100 - 50) * 255 / 200 = 63.75
    assert stretch_channel(100, 50, 250) == 63
    assert stretch_channel(10, 50, 250) == 0
    assert stretch_channel(77, 77, 77) == 77


def test_stretch_maps_extremes(low_contrast):
    result = contrast_stretch(low_contrast)
    assert result.get_pixel(0, 0) == Color(0, 0, 77, 255)
    assert result.get_pixel(1, 0) == Color(63, 85, 77, 255)
    assert result.get_pixel(0, 1) == Color(127, 170, 77, 255)
    assert result.get_pixel(1, 1) == Color(255, 255, 77, 255)


def test_stretch_random_image_spans_full_range(random_image):
    result = contrast_stretch(random_image)
    px = result.pixels[:, :, :3].reshape(-1, 3)
    assert (px.min(axis=0) == 0).all()
    assert (px.max(axis=0) == 255).all()
    assert result.size == random_image.size


def test_constant_image_passes_through():
    img = Image(np.full((3, 4, 4), 90, dtype=np.uint8))
    result = contrast_stretch(img)
    assert (result.pixels[:, :, :3] == 90).all()


def test_filter_uses_given_stats():
    stats = ChannelStats(0, 0, 0, 100, 200, 255)
    img = Image.from_colors([[(50, 50, 50)]])
    assert ContrastStretchFilter(stats).compute_color(img, 0, 0) == Color(127, 63, 50, 255)


def test_controller_reuse_does_not_leak_stats(low_contrast, random_image):
    controller = ContrastStretch()
    controller.process(low_contrast)
    assert controller.process(random_image) == ContrastStretch().process(random_image)


def test_progress_restarts_for_second_pass(low_contrast):
    seen = []
    contrast_stretch(low_contrast, progress=seen.append)
    assert seen == [0, 50, 0, 50]


def test_cancel_before_start(low_contrast):
    assert contrast_stretch(low_contrast, is_cancelled=lambda: True) is ABORTED
    assert compute_channel_stats(low_contrast, is_cancelled=lambda: True) is ABORTED


def test_cancel_during_mapping_pass(low_contrast):
    polls = []

    def is_cancelled():
        polls.append(1)
        return len(polls) == 4

    assert contrast_stretch(low_contrast, is_cancelled=is_cancelled) is ABORTED
    assert len(polls) == 4
