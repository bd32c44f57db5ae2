"""Command-line interface: ``colorbal MODE SB SW IN OUT``.

Reads an image, balances it with the given mode and saturation
percentages, and writes the result. Exit status is 0 on success and 1 on
any failure.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from colorbal import __version__
from colorbal.config.values import BalanceMode, BalanceValues
from colorbal.image import ImageData

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    modes = ", ".join(m.value for m in BalanceMode)
    parser = argparse.ArgumentParser(
        prog="colorbal",
        description="Color balance by affine stretching with controlled saturation",
    )
    parser.add_argument("mode", help=f"Balance mode ({modes})")
    parser.add_argument("smin", type=float, help="Percentage of pixels saturated to min, in [0, 100)")
    parser.add_argument("smax", type=float, help="Percentage of pixels saturated to max, in [0, 100)")
    parser.add_argument("input", help="Input image")
    parser.add_argument("output", help="Output image (format from extension)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log timing and debug details")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    :param argv: Arguments (default: sys.argv[1:])
    :returns: Exit status
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        values = BalanceValues(mode=args.mode, saturation_low=args.smin, saturation_high=args.smax)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        image = ImageData.from_file(args.input)
    except OSError as e:
        logger.debug("read failed: %s", e)
        print("the image could not be properly read", file=sys.stderr)
        return 1

    start = time.perf_counter()
    image.balance(values)
    logger.debug("%s balance of %s took %.3fs", values.mode.value, image, time.perf_counter() - start)

    try:
        image.to_file(args.output)
    except (OSError, ValueError) as e:
        print(f"the image could not be written: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
