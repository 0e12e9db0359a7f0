"""
Filter lookup by name, used by the CLI, batch runner and benchmark.
"""
from . import kernels
from .filters import (BlurFilter, ColorCorrectionFilter, ConvolutionFilter, EdgeDetectFilter,
                      GaussianFilter, GrayscaleFilter, InvertFilter, SharpenFilter, ShiftFilter,
                      WaveFilter)
from .stretch import ContrastStretch


def _gaussian(radius=kernels.DEFAULT_GAUSSIAN_RADIUS, sigma=kernels.DEFAULT_GAUSSIAN_SIGMA, **_):
    return GaussianFilter(radius, sigma)


def _correction(reference=None, exact=False, **_):
    if reference is None:
        raise ValueError("Color correction needs a reference color")
    return ColorCorrectionFilter(reference, exact=exact)


def _preset(factory):
    def build(normalize=False, **_):
        kernel = factory()
        return ConvolutionFilter(kernel.normalized() if normalize else kernel)
    return build


FILTERS = {
    "invert": lambda **_: InvertFilter(),
    "grayscale": lambda **_: GrayscaleFilter(),
    "blur": lambda **_: BlurFilter(),
    "gaussian": _gaussian,
    "sharpen": lambda **_: SharpenFilter(),
    "edge": lambda **_: EdgeDetectFilter(),
    "laplacian": _preset(kernels.laplacian),
    "emboss": _preset(kernels.emboss),
    "correction": _correction,
    "stretch": lambda **_: ContrastStretch(),
    "wave": lambda **_: WaveFilter(),
    "shift": lambda **_: ShiftFilter(),
}

FILTER_NAMES = tuple(FILTERS)


def create_filter(name, **options):
    """
    Build a fresh filter by name.

    Options a filter does not use are ignored: ``radius``/``sigma`` (gaussian),
    ``reference``/``exact`` (correction), ``normalize`` (laplacian, emboss).
    The result has ``process(source, progress=None, is_cancelled=None)``.
    """
    try:
        factory = FILTERS[name]
    except KeyError:
        raise ValueError(f"Unknown filter {name!r}, expected one of {', '.join(FILTER_NAMES)}") from None
    return factory(**options)
