"""
Per-pixel and convolution image filters driven by a cancellable processing loop.
"""
from .color import Color, OPAQUE, clamp, clamp_channel
from .image import Image, load_image, save_image
from .kernels import Kernel, KernelError, KERNEL_PRESETS
from .processing import ABORTED, CancellationFlag, process_image
from .filters import (PixelTransform, InvertFilter, GrayscaleFilter, ConvolutionFilter, BlurFilter,
                      GaussianFilter, SharpenFilter, EdgeDetectFilter, ColorCorrectionFilter,
                      WaveFilter, ShiftFilter)
from .stretch import ChannelStats, ContrastStretch, ContrastStretchFilter, compute_channel_stats, contrast_stretch
from .registry import FILTER_NAMES, create_filter

__version__ = "1.0.0"
