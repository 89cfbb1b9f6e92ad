#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Script: main.py
Location: src/sanitary_pipe_sizing/main.py

Description:
    Command line entry point for the sanitary pipe sizer. Reads a JSON
    document of drainage segments, runs one sizing pass and writes the
    sized segments and per-segment decisions back out as JSON.

Usage:
    python -m src.sanitary_pipe_sizing.main --input segments.json [--config sizing.json]
        [--output result.json] [--debug] [--trace] [--log-dir logs]

Input format:
    {"segments": [{"id": "s1", "endpoint_a": [0, 0, 10], "endpoint_b": [0, 0, 9],
                   "load_units": 40, "slope": null}, ...]}
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .config.sizing_config import SizingConfigError, load_sizing_config
from .core.segment import Segment
from .sizer import SanitaryPipeSizer
from .utils.logging_config import SanitarySizingLogger

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Size sanitary drainage pipes from DFU loads (IPC tables)"
    )
    parser.add_argument(
        "--input",
        required=True,
        help="JSON file with a 'segments' list"
    )
    parser.add_argument(
        "--config",
        help="JSON file with sizing config overrides (alternate tables, units)"
    )
    parser.add_argument(
        "--output",
        help="Write the sizing result JSON here instead of stdout"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace logging of every table entry scanned"
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Directory for log files (default: no log file)"
    )
    return parser.parse_args(argv)


def load_segments(path: str) -> List[Segment]:
    """
    Read segments from a JSON file.

    Accepts either {"segments": [...]} or a bare list.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    items = data.get("segments", []) if isinstance(data, dict) else data
    return [Segment.from_dict(item) for item in items]


def build_output(segments: List[Segment], result_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Combine sized segments and the result report."""
    return {
        "segments": [segment.to_dict() for segment in segments],
        "result": result_dict,
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run the sizer from the command line."""
    args = parse_arguments(argv)
    SanitarySizingLogger.configure(
        debug_mode=args.debug, log_dir=args.log_dir, trace_mode=args.trace
    )

    try:
        config = load_sizing_config(args.config)
    except SizingConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        segments = load_segments(args.input)
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        print(f"Error: could not read segments from {args.input}: {e}", file=sys.stderr)
        return 1

    logger.info(f"Loaded {len(segments)} segments from {args.input}")
    result = SanitaryPipeSizer(config).size(segments)
    output = json.dumps(build_output(segments, result.to_dict()), indent=2)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
    else:
        print(output)

    print(result.summary(), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
