"""
Smooth a recorded landmark sequence.
Usage: python main.py <input.json> <output.json> [--config config/settings.yaml] [--method kalman]
"""
import argparse
import logging
import sys

from lmsmooth.analysis.smoothing import SMOOTHING_METHODS, create_smoother
from lmsmooth.core.config import load_config
from lmsmooth.core.pipeline import measure_jitter, smooth_sequence
from lmsmooth.lifecycle.schema import LandmarkSequence
from lmsmooth.lifecycle.schema.validator import LandmarkValidator

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Temporally smooth a landmark sequence file")
    parser.add_argument("input", help="Landmark sequence JSON")
    parser.add_argument("output", help="Where to write the smoothed sequence")
    parser.add_argument("--config", default="config/settings.yaml", help="YAML settings file")
    parser.add_argument("--method", choices=SMOOTHING_METHODS, default=None, help="Override smoothing method")
    parser.add_argument("--no-validate", action="store_true", help="Skip schema validation")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    config = load_config(args.config)
    if args.method:
        config.smoothing.method = args.method

    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.no_validate:
        LandmarkValidator().validate_file(args.input)

    sequence = LandmarkSequence.from_json(args.input)
    smoother = create_smoother(config.smoothing)
    logger.info(
        f"Smoothing {len(sequence.frames)} frames from {args.input} "
        f"with method '{config.smoothing.method}'"
    )

    smoothed = smooth_sequence(sequence, smoother)
    smoothed.to_json(args.output)

    logger.info(
        f"Jitter {measure_jitter(sequence.entity_frames):.4f} -> "
        f"{measure_jitter(smoothed.entity_frames):.4f}, saved to {args.output}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
