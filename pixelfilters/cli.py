"""
Command-line interface: apply a filter to an image file, or benchmark filters.
"""
import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor

from . import kernels
from .benchmark import benchmark_filters, compare_convolution, plot_results, save_results
from .image import load_image, save_image
from .processing import ABORTED, CancellationFlag
from .registry import FILTER_NAMES, create_filter

logger = logging.getLogger(__name__)


def parse_reference(text):
    parts = text.split(',')
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"Expected R,G,B, got {text!r}")
    try:
        return tuple(int(p) for p in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected integer channels, got {text!r}") from None


def build_parser():
    parser = argparse.ArgumentParser(
        prog='pixelfilters',
        description='Apply per-pixel and convolution filters to images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pixelfilters apply place.png out.png --filter gaussian --radius 2 --sigma 1.5
  pixelfilters apply place.png out.png --filter correction --reference 200,180,160
  pixelfilters bench place.png --filters invert blur sharpen --plot bench.png
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-error output')
    sub = parser.add_subparsers(dest='command', required=True)

    apply = sub.add_parser('apply', help='Filter one image')
    apply.add_argument('input', help='Input image path')
    apply.add_argument('output', help='Output image path')
    apply.add_argument('--filter', '-f', choices=FILTER_NAMES, default='invert')
    apply.add_argument('--radius', type=int, default=kernels.DEFAULT_GAUSSIAN_RADIUS,
                       help='Gaussian radius (default: %(default)s)')
    apply.add_argument('--sigma', type=float, default=kernels.DEFAULT_GAUSSIAN_SIGMA,
                       help='Gaussian sigma (default: %(default)s)')
    apply.add_argument('--reference', type=parse_reference, default=None,
                       help='Reference color R,G,B for color correction')
    apply.add_argument('--exact', action='store_true',
                       help='Color correction with float ratio instead of integer division')
    apply.add_argument('--normalize', action='store_true',
                       help='Normalize laplacian/emboss kernels to sum to 1')

    bench = sub.add_parser('bench', help='Time filters on one image')
    bench.add_argument('input', help='Input image path')
    bench.add_argument('--filters', nargs='+', choices=FILTER_NAMES,
                       default=['invert', 'grayscale', 'blur', 'sharpen', 'wave', 'shift'])
    bench.add_argument('--runs', type=int, default=3)
    bench.add_argument('--kernel', choices=sorted(kernels.KERNEL_PRESETS), default=None,
                       help='Also compare per-pixel and vectorized convolution for this kernel')
    bench.add_argument('--json', default=None, help='Write results to this JSON file')
    bench.add_argument('--plot', default=None, help='Write a bar chart to this image file')
    return parser


def setup_logging(args):
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def run_apply(args):
    img = load_image(args.input)
    f = create_filter(args.filter, radius=args.radius, sigma=args.sigma,
                      reference=args.reference, exact=args.exact, normalize=args.normalize)

    if not args.quiet:
        print(f"Processing image: {img.width}x{img.height} pixels with {f!r}")

    def report(percent):
        if not args.quiet:
            print(f"\rProgress: {percent:3d}%", end='', flush=True)

    # Filter runs on a worker thread so Ctrl-C can request cancellation
    flag = CancellationFlag()
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(f.process, img, report, flag)
        try:
            result = future.result()
        except KeyboardInterrupt:
            flag.cancel()
            result = future.result()

    if not args.quiet:
        print()
    if result is ABORTED:
        print("Aborted", file=sys.stderr)
        return 130

    save_image(result, args.output)
    if not args.quiet:
        print(f"Saved: {args.output}")
    return 0


def run_bench(args):
    img = load_image(args.input)
    if not args.quiet:
        print(f"Image size: {img.width}x{img.height} pixels")
        print(f"Number of runs: {args.runs}")
        print("=" * 70)

    results = benchmark_filters(img, args.filters, n_runs=args.runs, verbose=not args.quiet)

    if args.kernel:
        cmp = compare_convolution(img, kernels.KERNEL_PRESETS[args.kernel]())
        if not args.quiet:
            print("\n" + "=" * 70)
            print("VERIFICATION")
            print("=" * 70)
            print(f"Per-pixel:  {cmp['per_pixel_seconds']:.4f}s")
            print(f"Vectorized: {cmp['vectorized_seconds']:.4f}s  ({cmp['speedup']:.2f}x speedup)")
            print(f"Max difference: {cmp['max_difference']}")

    if args.json:
        save_results(results, args.json)
    if args.plot:
        plot_results(results, args.plot)
        if not args.quiet:
            print(f"Saved: {args.plot}")
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args)

    try:
        if args.command == 'apply':
            return run_apply(args)
        return run_bench(args)
    except (OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
