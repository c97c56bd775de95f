#!/usr/bin/env python3
"""Main entry point: print the device attribute snapshot as JSON."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from devinfo.di_container import ContainerBuilder
from devinfo.paths import get_config_path

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve device attributes")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json")
    parser.add_argument(
        "--no-location",
        action="store_true",
        help="Disable location listening (no location sources are read)",
    )
    parser.add_argument(
        "--prefetch-only",
        action="store_true",
        help="Resolve the snapshot without printing it",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    config_path = args.config or get_config_path()
    container = ContainerBuilder.build_container(config_path)

    device_info = container.get("device_info")
    if args.no_location:
        device_info.set_location_listening(False)

    logger.info("Resolving device attributes...")
    device_info.prefetch()
    if args.prefetch_only:
        return 0

    output = {"device": device_info.snapshot().to_dict()}
    if device_info.is_location_listening():
        location = device_info.get_most_recent_location()
        output["location"] = asdict(location) if location else None

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
