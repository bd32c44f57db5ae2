"""Benchmark ColorBalancer modes on CPU."""

import logging
import time

import numpy as np

from colorbal import BalanceMode, ColorBalancer, ImageData
from colorbal.processing import to_float32

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def create_test_image(n: int) -> np.ndarray:
    """Create a low-contrast planar uint8 image."""
    np.random.seed(42)
    return (np.random.rand(3, n) * 160 + 40).astype(np.uint8)


def benchmark(func, warmup=3, iterations=20):
    """Benchmark a function."""
    for _ in range(warmup):
        func()

    start = time.perf_counter()
    for _ in range(iterations):
        func()
    elapsed = time.perf_counter() - start

    return (elapsed / iterations) * 1000


def run_benchmarks():
    """Run balance benchmarks."""
    logger.info("=" * 70)
    logger.info("COLOR BALANCE CPU BENCHMARKS")
    logger.info("=" * 70)
    logger.info("")

    balancer = ColorBalancer()
    sizes = [100_000, 1_000_000, 4_000_000]

    for n in sizes:
        logger.info(f"\nImage size: {n:,} pixels")
        logger.info("-" * 70)

        rgb_u8 = create_test_image(n)
        rgb_f32 = to_float32(rgb_u8)
        nb = n // 100

        for mode in BalanceMode:
            rgb = rgb_u8 if mode in (BalanceMode.RGB, BalanceMode.INTENSITY) else rgb_f32

            def balance_op():
                balancer.balance_array(rgb, mode, nb, nb)

            ms = benchmark(balance_op, iterations=5 if mode is BalanceMode.INTENSITY else 20)
            throughput = (n / ms) * 1000 / 1e6
            logger.info(f"{mode.value:<15} {ms:8.2f} ms ({throughput:.1f}M px/sec)")

    logger.info("\nPalette images")
    logger.info("-" * 70)
    for levels in (16, 64, 256):
        image = ImageData.rgb_palette(levels)
        nb = image.size // 100
        for mode in (BalanceMode.RGB, BalanceMode.INTENSITY):

            def balance_op():
                balancer.balance_array(image.rgb, mode, nb, nb)

            ms = benchmark(balance_op, warmup=1, iterations=3)
            logger.info(f"{levels:>3} colors {image.width}x{image.height} {mode.value:<10} {ms:8.2f} ms")

    logger.info("")
    logger.info("=" * 70)


if __name__ == "__main__":
    run_benchmarks()
