"""Command-line interface for the minimum-clicks Minesweeper solver."""

import argparse
import sys
import time
import json
from pathlib import Path
from typing import List, Optional, Tuple

from ..core.grid import Grid
from ..core.cases import TestCase, load_cases
from ..core.metrics import CaseMetrics


DEFAULT_INPUT = "A-large-practice.in"


class CLIClickCounter:
    """Solves every board in an input file and reports click counts."""

    def __init__(self, verbose: bool = False, show_grid: bool = False) -> None:
        """Initialize CLI interface.

        Args:
            verbose: Print progress and per-case statistics
            show_grid: Print each board before and after solving
        """
        self.verbose = verbose
        self.show_grid = show_grid

    def solve_case(self, case: TestCase) -> Tuple[int, CaseMetrics]:
        """Solve a single test case.

        Args:
            case: Parsed test case

        Returns:
            Tuple of (clicks, metrics)
        """
        grid = case.to_grid()

        if self.verbose:
            print(f"Solving case #{case.number} ({grid.size}x{grid.size}, {grid.mine_count} mines)")

        start_time = time.time()
        grid.compute_counts()

        if self.show_grid:
            print(f"\nCase #{case.number} before solving:")
            print(self._format_grid(grid))

        clicks = grid.solve()
        duration = time.time() - start_time

        if self.show_grid:
            print(f"\nCase #{case.number} after {clicks} clicks:")
            print(self._format_grid(grid))

        return clicks, CaseMetrics.from_grid(case.number, grid, duration)

    def solve_file(self, path: str) -> List[Tuple[TestCase, int, CaseMetrics]]:
        """Load every case from a file, then solve them in order.

        The whole file is parsed before anything is solved, so malformed
        input fails without producing any answers.

        Args:
            path: Input file path

        Returns:
            List of (case, clicks, metrics) tuples

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is malformed
        """
        cases = load_cases(path)

        if self.verbose:
            print(f"Loaded {len(cases)} test cases from {path}")

        results = []
        for case in cases:
            clicks, metrics = self.solve_case(case)
            results.append((case, clicks, metrics))
        return results

    def _format_grid(self, grid: Grid, max_size: int = 50) -> str:
        """Format grid for display, truncating if too large.

        Args:
            grid: Grid to format
            max_size: Maximum dimension to display

        Returns:
            Formatted grid string
        """
        if grid.size > max_size:
            return f"Grid too large to display ({grid.size}x{grid.size})"

        return str(grid)


def format_answer(number: int, clicks: int) -> str:
    """Format one answer line, e.g. 'Case #1: 4'."""
    return f"Case #{number}: {clicks}"


def print_case_metrics(metrics: CaseMetrics) -> None:
    """Print statistics for a solved case.

    Args:
        metrics: Metrics collected from the solved grid
    """
    print(f"  Grid size: {metrics.size}x{metrics.size}")
    print(f"  Mines: {metrics.mine_count} ({metrics.mine_density:.2%})")
    print(f"  Safe cells: {metrics.safe_count}")
    print(f"  Flood clicks: {metrics.flood_clicks}")
    print(f"  Single clicks: {metrics.single_clicks}")
    print(f"  Duration: {metrics.duration_seconds:.3f} seconds")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Count the minimum clicks needed to clear Minesweeper boards",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input format:
  First line: number of test cases T
  Each case: a line with the board size N, then N rows of N characters
  ('.' for an empty cell, '*' for a mine)

Examples:
  # Solve the default input file
  minesweep-cli

  # Solve a specific file and write answers to a file
  minesweep-cli A-small-practice.in --output A-small-practice.out

  # Show each board before and after solving
  minesweep-cli A-small-practice.in --show-grid

  # Dump per-case statistics as JSON
  minesweep-cli A-small-practice.in --json
        """,
    )

    parser.add_argument(
        "input",
        nargs="?",
        default=DEFAULT_INPUT,
        help=f"Input file with test cases (default: {DEFAULT_INPUT})",
    )

    parser.add_argument("-o", "--output", type=str, help="Write answers to this file instead of stdout")

    parser.add_argument("-v", "--verbose", action="store_true", help="Print progress and per-case statistics")

    parser.add_argument("--show-grid", action="store_true", help="Show each board before and after solving")

    parser.add_argument("--json", action="store_true", help="Print per-case statistics as JSON instead of answers")

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    input_path = Path(args.input)
    if not input_path.exists():
        errors.append(f"Input file '{args.input}' does not exist")
    elif not input_path.is_file():
        errors.append(f"Input path '{args.input}' is not a file")

    if args.output and Path(args.output).is_dir():
        errors.append(f"Output path '{args.output}' is a directory")

    if errors:
        print("Error: Invalid arguments:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        return False

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not validate_args(args):
        return 1

    cli = CLIClickCounter(verbose=args.verbose, show_grid=args.show_grid)

    try:
        results = cli.solve_file(args.input)

        if args.json:
            lines = [json.dumps([metrics.to_dict() for _, _, metrics in results], indent=2)]
        else:
            lines = [format_answer(case.number, clicks) for case, clicks, _ in results]

        if args.output:
            with open(args.output, "w") as f:
                for line in lines:
                    f.write(line + "\n")
            if args.verbose:
                print(f"Wrote {len(results)} answers to {args.output}")
        else:
            for line in lines:
                print(line)

        if args.verbose and not args.json:
            print("\nDetailed Statistics:")
            for case, clicks, metrics in results:
                print(format_answer(case.number, clicks))
                print_case_metrics(metrics)

        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
