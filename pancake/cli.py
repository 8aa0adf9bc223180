#!/usr/bin/env python3
"""
Command-line entry point for the pancake stack VM.

Assembles the given source file and runs it. Program output (``print``) goes
to stdout; diagnostics and logs go to stderr.
"""

import argparse
import os
import sys
from typing import List, Optional

import structlog

from .analysis import format_listing
from .assembler import load_program
from .core.errors import VMError
from .core.machine_state import MAX_MEMORY_SIZE
from .export import EXPORT_FORMATS, export_state
from .logging_config import DEFAULT_LOG_LEVEL, configure_logging
from .vm import VirtualMachine

logger = structlog.get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pancake",
        description="Runs the specified instruction file in the stack-based VM (pancake).",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("source", help="Path to the instruction file")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("PANCAKE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        choices=LOG_LEVELS,
        help="Logging level",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--trace", action="store_true", help="Log every executed instruction")
    parser.add_argument(
        "--max-memory",
        type=int,
        # String default: argparse runs type=int on it and reports bad values as usage errors
        default=os.environ.get("PANCAKE_MAX_MEMORY", str(MAX_MEMORY_SIZE)),
        help="Maximum number of memory cells",
    )
    parser.add_argument("--listing", action="store_true",
                        help="Print the resolved instruction listing instead of running")
    parser.add_argument("--dump-state", metavar="PATH",
                        help="Write the final machine state to PATH after a successful run")
    parser.add_argument("--dump-format", choices=EXPORT_FORMATS, default="json",
                        help="Format for --dump-state")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, assemble and run the program.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if (args.verbose or args.trace) else args.log_level
    configure_logging(log_level)

    try:
        program = load_program(args.source)

        if args.listing:
            print(format_listing(program))
            return 0

        vm = VirtualMachine(max_memory=args.max_memory, trace=args.trace)
        state = vm.run(program)

        if args.dump_state:
            export_state(state, args.dump_state, args.dump_format)

        return 0

    except KeyboardInterrupt:
        logger.info("Execution interrupted by user")
        return 130

    except VMError as e:
        logger.error("Program failed", error=str(e), kind=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
