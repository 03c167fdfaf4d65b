"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Dict, List, Optional

from bodyscribe.builder import BodyModelBuilder
from bodyscribe.config import (
    DEFAULT_OUTPUT_FILENAME, HEAD_RESOLUTION, LIMB_HORIZONTAL_STEPS, LIMB_VERTICAL_STEPS,
    TORSO_HORIZONTAL_STEPS, TORSO_VERTICAL_STEPS,
)
from bodyscribe.exceptions import DegenerateResolutionError
from bodyscribe.generators import ResolutionSettings
from bodyscribe.io import ObjSerializer, load_measurements_json, save_obj_file
from bodyscribe.logging_config import setup_logging
from bodyscribe.model.measurements import missing_required_fields, normalize_measurements

logger = logging.getLogger("bodyscribe.cli")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bodyscribe",
        description="Generate a 3D body model (.obj) from body measurements",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m bodyscribe --measurements me.json --output out/me.obj
    python -m bodyscribe --set height=182 --set chest=101 --show
    python -m bodyscribe --measurements me.json --torso-horizontal 48 --limb-horizontal 24
        """
    )

    parser.add_argument('--measurements', type=str, help='JSON file with field name -> value')
    parser.add_argument(
        '--set',
        dest='overrides',
        action='append',
        default=[],
        metavar='FIELD=VALUE',
        help='Set or override one measurement (repeatable)'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=DEFAULT_OUTPUT_FILENAME,
        help=f'Output OBJ path (default: {DEFAULT_OUTPUT_FILENAME})'
    )

    parser.add_argument('--head-resolution', type=int, default=HEAD_RESOLUTION)
    parser.add_argument('--torso-vertical', type=int, default=TORSO_VERTICAL_STEPS)
    parser.add_argument('--torso-horizontal', type=int, default=TORSO_HORIZONTAL_STEPS)
    parser.add_argument('--limb-vertical', type=int, default=LIMB_VERTICAL_STEPS)
    parser.add_argument('--limb-horizontal', type=int, default=LIMB_HORIZONTAL_STEPS)

    parser.add_argument('--show', action='store_true', help='Open a 3D preview of the generated mesh')
    parser.add_argument('--verbose', action='store_true', help='Enable debug output')
    parser.add_argument('--log-file', type=str, help='Also write the log to this file')

    return parser.parse_args(argv)


def parse_overrides(overrides: List[str]) -> Dict[str, str]:
    """
    Raises:
        ValueError: If an override is not of the form FIELD=VALUE.
    """
    parsed = {}
    for item in overrides:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Invalid --set '{item}', expected FIELD=VALUE")
        parsed[name.strip()] = value.strip()
    return parsed


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    try:
        return run(args)
    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        return 130


def run(args: argparse.Namespace) -> int:
    """Generate and save one model; returns the process exit code."""
    try:
        measurements = load_measurements_json(args.measurements) if args.measurements else {}
        measurements.update(parse_overrides(args.overrides))
        resolution = ResolutionSettings(
            head=args.head_resolution,
            torso_vertical=args.torso_vertical,
            torso_horizontal=args.torso_horizontal,
            limb_vertical=args.limb_vertical,
            limb_horizontal=args.limb_horizontal,
        )
    except (FileNotFoundError, ValueError) as e:
        # DegenerateResolutionError is a ValueError
        level = "Resolution" if isinstance(e, DegenerateResolutionError) else "Configuration"
        logger.error(f"{level} error: {e}")
        return 1

    missing = missing_required_fields(measurements)
    if missing:
        logger.warning(f"Using defaults for required measurements: {', '.join(missing)}")

    builder = BodyModelBuilder(resolution)
    mesh = builder.build_mesh(normalize_measurements(measurements))
    document = ObjSerializer.serialize(mesh, measurements)

    try:
        output_path = save_obj_file(document, args.output)
    except OSError:
        return 1

    file_size = os.path.getsize(output_path) / 1024
    logger.info(f"File size: {file_size:.1f} KB")

    if args.show:
        from bodyscribe.view.preview import show_mesh
        show_mesh(mesh)

    return 0


if __name__ == "__main__":
    sys.exit(main())
