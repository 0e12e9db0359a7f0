"""
Benchmark filters on an image and compare the per-pixel and vectorized convolution engines.
"""
import json
import time
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from .filters import ConvolutionFilter
from .registry import create_filter


def time_filter(image, name, n_runs=3, **options):
    """Run a named filter n_runs times. Returns (last_result, list_of_seconds)."""
    times = []
    result = None
    for _ in range(n_runs):
        f = create_filter(name, **options)
        start = time.perf_counter()
        result = f.process(image)
        times.append(time.perf_counter() - start)
    return result, times


def benchmark_filters(image, names, n_runs=3, verbose=False, **options):
    """Time every named filter on image and return one summary dict per filter."""
    results = []
    for name in names:
        _, times = time_filter(image, name, n_runs=n_runs, **options)
        entry = {
            'filter': name,
            'image_width': image.width,
            'image_height': image.height,
            'n_runs': n_runs,
            'mean_seconds': float(np.mean(times)),
            'std_seconds': float(np.std(times)),
        }
        results.append(entry)
        if verbose:
            print(f"{name:<12} {entry['mean_seconds']:.4f} ± {entry['std_seconds']:.4f} seconds")
    return results


def compare_convolution(image, kernel):
    """
    Run the per-pixel and vectorized engines on the same kernel.

    Returns a dict with both timings, the speedup and the max channel difference.
    """
    f = ConvolutionFilter(kernel)

    t0 = time.perf_counter()
    slow = f.process(image)
    t1 = time.perf_counter()
    fast = f.process_fast(image)
    t2 = time.perf_counter()

    diff = int(np.abs(slow.pixels.astype(int) - fast.pixels.astype(int)).max()) if image.pixels.size else 0
    per_pixel, vectorized = t1 - t0, t2 - t1
    return {
        'kernel_width': f.kernel.width,
        'kernel_height': f.kernel.height,
        'per_pixel_seconds': per_pixel,
        'vectorized_seconds': vectorized,
        'speedup': per_pixel / vectorized if vectorized > 0 else float('inf'),
        'max_difference': diff,
    }


def save_results(results, json_path):
    with open(json_path, 'w') as f:
        json.dump({'results': results}, f, indent=2)


def plot_results(results, output_path):
    """Bar chart of mean execution time per filter, saved to output_path."""
    names = [r['filter'] for r in results]
    means_ms = [r['mean_seconds'] * 1000 for r in results]
    stds_ms = [r['std_seconds'] * 1000 for r in results]

    fig, ax = plt.subplots(figsize=(max(6, len(names) * 0.9), 5))
    x = np.arange(len(names))
    bars = ax.bar(x, means_ms, yerr=stds_ms, color='#2E86AB', alpha=0.8, capsize=3)

    for bar in bars:
        height = bar.get_height()
        ax.text(bar.get_x() + bar.get_width() / 2., height, f'{height:.1f}',
                ha='center', va='bottom', fontsize=7)

    if results:
        size = f"{results[0]['image_width']}x{results[0]['image_height']}"
        ax.set_title(f'Filter Execution Time - {size}', fontsize=12, fontweight='bold')
    ax.set_xticks(x)
    ax.set_xticklabels(names, rotation=30, ha='right')
    ax.set_ylabel('Time (ms)', fontsize=11, fontweight='bold')
    ax.grid(True, alpha=0.3, axis='y')

    fig.tight_layout()
    output_path = Path(output_path)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
