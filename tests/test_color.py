from pixelfilters.color import BLACK, Color, OPAQUE, clamp, clamp_channel


def test_clamp_saturates():
    assert clamp(-5, 0, 10) == 0
    assert clamp(15, 0, 10) == 10
    assert clamp(7, 0, 10) == 7


def test_clamp_channel_truncates_then_clamps():
    assert clamp_channel(12.9) == 12
    assert clamp_channel(300.7) == 255
    assert clamp_channel(-3.2) == 0
    assert clamp_channel(255) == 255


def test_color_defaults_to_opaque():
    assert Color(1, 2, 3).a == OPAQUE
    assert Color(1, 2, 3).rgb == (1, 2, 3)


def test_color_clamped():
    assert Color.clamped(-10, 128.6, 999) == Color(0, 128, 255, 255)


def test_black_is_opaque():
    assert BLACK == Color(0, 0, 0, 255)
