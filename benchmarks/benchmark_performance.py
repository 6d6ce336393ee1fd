"""
Performance benchmarks for attentionmap.

Run with: python benchmarks/benchmark_performance.py
"""

import time
import numpy as np
from attentionmap import StentifordModel


def benchmark_image_size(size, max_checks=100):
    """Time one scan of a random size x size image."""
    img = np.random.randint(0, 255, (size, size, 3), dtype=np.uint8)
    model = StentifordModel(max_checks=max_checks, rng=0)

    start = time.time()
    model.extract(img)
    elapsed = time.time() - start

    pixels = (size - 2 * model.radius) ** 2
    return {
        'size': size,
        'max_checks': max_checks,
        'pixels': pixels,
        'time': elapsed,
        'pixels_per_sec': pixels / elapsed if elapsed > 0 else 0,
    }


def main():
    print("attentionmap Performance Benchmarks")
    print("=" * 60)
    print()

    for size in (64, 128, 256):
        for max_checks in (25, 100):
            result = benchmark_image_size(size, max_checks)
            print(f"{size}x{size}, {max_checks} checks: "
                  f"{result['time']:.2f}s ({result['pixels_per_sec']:.0f} pixels/sec)")


if __name__ == '__main__':
    main()
