"""Reading test cases from puzzle input files."""

from typing import Iterable, List, Tuple, Union
from pathlib import Path

from .grid import Grid, MINE_CHAR, EMPTY_CHAR


class TestCase:
    """One board from an input file."""

    __test__ = False  # not a pytest test class

    def __init__(self, number: int, size: int, rows: List[str]) -> None:
        """Initialize a test case.

        Args:
            number: 1-based position of the case in the file
            size: Declared board size
            rows: Board rows of '.' and '*'
        """
        self.number = number
        self.size = size
        self.rows = rows

    def to_grid(self) -> Grid:
        """Build a Grid for this case (counts not yet computed)."""
        return Grid.from_rows(self.rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TestCase):
            return False
        return (self.number, self.size, self.rows) == (other.number, other.size, other.rows)

    def __repr__(self) -> str:
        return f"TestCase(number={self.number}, size={self.size})"


def _parse_int(line: str, line_number: int, what: str) -> int:
    try:
        return int(line)
    except ValueError:
        raise ValueError(f"Line {line_number}: expected {what}, got {line!r}") from None


def parse_cases(lines: Iterable[str]) -> List[TestCase]:
    """Parse puzzle input.

    The first line holds the number of cases. Each case is a line with the
    board size N followed by N rows of N characters, each '.' or '*'.
    Anything after the last case is ignored.

    Args:
        lines: Input lines, with or without line endings

    Returns:
        Parsed cases in file order

    Raises:
        ValueError: On unparseable numbers, a short file, or bad rows
    """
    iterator = enumerate((line.rstrip() for line in lines), start=1)

    def next_line(what: str) -> Tuple[int, str]:
        try:
            return next(iterator)
        except StopIteration:
            raise ValueError(f"Unexpected end of input, expected {what}") from None

    line_number, line = next_line("number of test cases")
    total = _parse_int(line.strip(), line_number, "number of test cases")
    if total < 0:
        raise ValueError(f"Line {line_number}: number of test cases must not be negative")

    cases = []
    for number in range(1, total + 1):
        line_number, line = next_line(f"size of case #{number}")
        size = _parse_int(line.strip(), line_number, f"size of case #{number}")
        if size <= 0:
            raise ValueError(f"Line {line_number}: size of case #{number} must be positive, got {size}")

        rows = []
        for _ in range(size):
            line_number, row = next_line(f"row {len(rows) + 1} of case #{number}")
            if len(row) != size:
                raise ValueError(f"Line {line_number}: expected {size} cells, got {len(row)}")
            bad = set(row) - {MINE_CHAR, EMPTY_CHAR}
            if bad:
                raise ValueError(f"Line {line_number}: invalid cell characters {''.join(sorted(bad))!r}")
            rows.append(row)

        cases.append(TestCase(number, size, rows))

    return cases


def load_cases(path: Union[str, Path]) -> List[TestCase]:
    """Load and parse a puzzle input file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is malformed
    """
    with open(Path(path), "r") as f:
        return parse_cases(f)
