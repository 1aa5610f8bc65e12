"""
Command-line interface for headless layout runs.

Usage:
    python -m spring_grid.cli --config configs/ring_layout.yaml --out output/
"""

import argparse
import sys
from pathlib import Path

from .utils.logger.logger import Logger
from .utils.logger.local_file_strategy import LocalFileStrategy
from .config.layout_config import load_config
from .runner import run_layout
from .exporters import ExportManager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spring-grid",
        description="Force-directed spring embedder layout on grid-encoded graphs"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        required=True,
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--out", "-o",
        type=Path,
        default=None,
        help="Output directory (overrides config)"
    )
    parser.add_argument(
        "--name", "-n",
        type=str,
        default=None,
        help="Run name (overrides config)"
    )
    parser.add_argument(
        "--ticks", "-t",
        type=int,
        default=None,
        help="Number of ticks (overrides config)"
    )
    parser.add_argument(
        "--backend", "-b",
        type=str,
        default=None,
        help="Compute backend: serial, numpy or threads (overrides config)"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write the debug log to this file"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress output except errors"
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.log_file is not None:
        Logger.set_log_storage_strategy(LocalFileStrategy(args.log_file))
    else:
        Logger.initialize()

    # Load and validate config
    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.ticks is not None:
        config.run.ticks = args.ticks
    if args.backend is not None:
        config.run.backend = args.backend.lower()
    is_valid, error = config.validate()
    if not is_valid:
        print(f"Error: Invalid configuration: {error}", file=sys.stderr)
        sys.exit(1)

    out_dir = args.out or Path(config.output.out_dir)
    run_name = args.name or config.output.run_name

    if not args.quiet:
        print("Running spring embedder layout...")
        print(f"  Graph: {config.graph.kind}")
        print(f"  Backend: {config.run.backend}")
        print(f"  Ticks: {config.run.ticks}")

    result = run_layout(config)
    paths = ExportManager().export(result, out_dir, run_name)

    if not args.quiet:
        last = result.records[-1] if result.records else None
        print()
        print("=" * 50)
        print("LAYOUT COMPLETE")
        print("=" * 50)
        print(f"  Nodes: {result.node_count}  Links: {result.link_count}")
        print(f"  Ticks run: {result.ticks_run} in {result.elapsed_s:.3f} s ({result.backend_name})")
        if last is not None:
            print(f"  Final mean displacement: {last.mean_displacement:.4f}")
            print(f"  Final max displacement: {last.max_displacement:.4f}")
        print()
        print("Output files:")
        for filename, path in paths.items():
            print(f"  {filename}: {path}")

    sys.exit(0)


if __name__ == "__main__":
    main()
