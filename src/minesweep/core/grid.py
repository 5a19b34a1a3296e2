"""Minesweeper board with adjacency counts and flood-fill reveal."""

from typing import Iterable, Iterator, List, Tuple
import numpy as np
import torch
import torch.nn.functional as F

# Count value stored for a mine cell
MINE = -1

MINE_CHAR = "*"
EMPTY_CHAR = "."


class Grid:
    """Represents a square Minesweeper board.

    Each cell holds a mine-adjacency count (or MINE) and a revealed flag,
    kept in two numpy arrays indexed as (row, col). Counts are filled in
    by compute_counts() and are only meaningful for non-mine cells.
    """

    def __init__(self, size: int) -> None:
        """Initialize an empty board.

        Args:
            size: Number of rows (and columns)

        Raises:
            ValueError: If size is not positive
        """
        if size <= 0:
            raise ValueError(f"Grid size must be positive, got {size}")

        self.size = size
        self._counts = np.zeros((size, size), dtype=np.int8)
        self._revealed = np.zeros((size, size), dtype=bool)

        # Coordinates of every click issued by solve(), in order
        self.click_history: List[Tuple[int, int]] = []
        self.flood_clicks = 0
        self.single_clicks = 0

        # Keep torch on a single thread
        torch.set_num_threads(1)

        self._torch_input = torch.zeros(1, 1, size, size, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Grid":
        """Build a board from rows of '.' and '*' characters.

        Args:
            rows: One string per row, each as long as the number of rows

        Returns:
            New Grid with mines placed and nothing revealed

        Raises:
            ValueError: If the rows are empty, not square, or contain
                characters other than '.' and '*'
        """
        rows = list(rows)
        if not rows:
            raise ValueError("Grid needs at least one row")

        grid = cls(len(rows))
        for row, line in enumerate(rows):
            if len(line) != grid.size:
                raise ValueError(f"Row {row} has {len(line)} cells, expected {grid.size}")
            for col, char in enumerate(line):
                if char == MINE_CHAR:
                    grid._counts[row, col] = MINE
                elif char != EMPTY_CHAR:
                    raise ValueError(f"Invalid cell {char!r} at row {row}, column {col}")

        return grid

    @classmethod
    def from_string(cls, text: str) -> "Grid":
        """Build a board from a newline separated block of rows.

        Blank lines and surrounding whitespace are ignored.
        """
        return cls.from_rows(line.strip() for line in text.splitlines() if line.strip())

    @property
    def shape(self) -> Tuple[int, int]:
        """Get board dimensions as (rows, cols)."""
        return (self.size, self.size)

    @property
    def counts(self) -> np.ndarray:
        """Get the adjacency count array (MINE for mine cells)."""
        return self._counts

    @property
    def revealed(self) -> np.ndarray:
        """Get the revealed flag array."""
        return self._revealed

    @property
    def mine_mask(self) -> np.ndarray:
        """Boolean array that is True on mine cells."""
        return self._counts == MINE

    @property
    def mine_count(self) -> int:
        """Number of mines on the board."""
        return int(np.sum(self.mine_mask))

    @property
    def safe_count(self) -> int:
        """Number of non-mine cells on the board."""
        return self.size * self.size - self.mine_count

    @property
    def revealed_count(self) -> int:
        """Number of revealed non-mine cells."""
        return int(np.sum(self._revealed & ~self.mine_mask))

    @property
    def is_solved(self) -> bool:
        """Whether every non-mine cell has been revealed."""
        return self.revealed_count == self.safe_count

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds")

    def is_mine(self, row: int, col: int) -> bool:
        """Check whether the cell at (row, col) holds a mine.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(row, col)
        return bool(self._counts[row, col] == MINE)

    def is_revealed(self, row: int, col: int) -> bool:
        """Check whether the cell at (row, col) has been revealed.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(row, col)
        return bool(self._revealed[row, col])

    def get_count(self, row: int, col: int) -> int:
        """Get the adjacency count of a cell.

        Args:
            row: Row coordinate
            col: Column coordinate

        Returns:
            Number of neighbouring mines (0-8), or MINE for a mine cell

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(row, col)
        return int(self._counts[row, col])

    def set_mine(self, row: int, col: int, mine: bool = True) -> None:
        """Place or remove a mine.

        Counts of other cells are not updated until compute_counts() runs.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(row, col)
        self._counts[row, col] = MINE if mine else 0

    def neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int]]:
        """Yield the up-to-8 neighbours of a cell, clamped at the board edges."""
        start_row, end_row = max(row - 1, 0), min(row + 1, self.size - 1)
        start_col, end_col = max(col - 1, 0), min(col + 1, self.size - 1)
        for nrow in range(start_row, end_row + 1):
            for ncol in range(start_col, end_col + 1):
                if nrow == row and ncol == col:
                    continue
                yield (nrow, ncol)

    def compute_counts(self) -> np.ndarray:
        """Fill in neighbouring mine counts for all non-mine cells.

        Every mine adds one to each of its non-mine neighbours. This is a
        3x3 convolution of the mine mask with zero padding, so cells past
        the board edge contribute nothing. Mine cells keep MINE.

        Returns:
            The updated count array
        """
        mines = self.mine_mask
        self._torch_input[0, 0] = torch.from_numpy(mines.astype(np.float32))
        neighbors = F.conv2d(self._torch_input, self._torch_kernel, padding=1)

        counts = neighbors[0, 0].numpy().astype(np.int8)
        counts[mines] = MINE
        self._counts[:] = counts
        return self._counts

    def reveal(self, row: int, col: int) -> int:
        """Reveal a cell and flood outwards from it.

        Already revealed cells are left alone. Otherwise the cell is marked
        revealed and, unless it is a mine, each neighbour is visited: zero
        count neighbours are flooded in turn, others are only marked
        revealed. Uses an explicit stack rather than recursion.

        Args:
            row: Row coordinate
            col: Column coordinate

        Returns:
            Number of cells newly revealed

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(row, col)

        newly_revealed = 0
        stack = [(row, col)]
        while stack:
            r, c = stack.pop()
            if self._revealed[r, c]:
                continue

            self._revealed[r, c] = True
            newly_revealed += 1

            if self._counts[r, c] == MINE:
                continue

            for nrow, ncol in self.neighbors(r, c):
                if self._revealed[nrow, ncol]:
                    continue
                if self._counts[nrow, ncol] == 0:
                    stack.append((nrow, ncol))
                else:
                    self._revealed[nrow, ncol] = True
                    newly_revealed += 1

        return newly_revealed

    def solve(self) -> int:
        """Reveal the whole board with as few clicks as possible.

        Pass 1 clicks every unrevealed zero cell, flooding each region.
        Pass 2 clicks every non-mine cell the floods did not reach. Both
        passes scan in row-major order. compute_counts() must have run.

        Returns:
            Number of clicks issued by this call
        """
        flood_clicks = 0
        for row in range(self.size):
            for col in range(self.size):
                if self._counts[row, col] == MINE or self._revealed[row, col]:
                    continue
                if self._counts[row, col] == 0:
                    flood_clicks += 1
                    self.click_history.append((row, col))
                    self.reveal(row, col)

        single_clicks = 0
        for row in range(self.size):
            for col in range(self.size):
                if self._counts[row, col] == MINE:
                    continue
                if not self._revealed[row, col]:
                    self._revealed[row, col] = True
                    single_clicks += 1
                    self.click_history.append((row, col))

        self.flood_clicks += flood_clicks
        self.single_clicks += single_clicks
        return flood_clicks + single_clicks

    @property
    def total_clicks(self) -> int:
        """Total clicks issued since construction or the last reset()."""
        return self.flood_clicks + self.single_clicks

    def reset(self) -> None:
        """Hide every cell and forget past clicks, keeping mines and counts."""
        self._revealed.fill(False)
        self.click_history.clear()
        self.flood_clicks = 0
        self.single_clicks = 0

    def to_rows(self) -> List[str]:
        """Convert the mine layout back to rows of '.' and '*'."""
        return [
            "".join(MINE_CHAR if cell == MINE else EMPTY_CHAR for cell in self._counts[row])
            for row in range(self.size)
        ]

    def render(self) -> str:
        """Render the board as the player sees it.

        Mines show as '*', revealed cells as their count and hidden cells
        as '-', each padded to three characters.
        """
        result = []
        for row in range(self.size):
            line = []
            for col in range(self.size):
                if self._counts[row, col] == MINE:
                    line.append(" * ")
                elif self._revealed[row, col]:
                    line.append(f" {self._counts[row, col]} ")
                else:
                    line.append(" - ")
            result.append("".join(line))
        return "\n".join(result)

    def __eq__(self, other: object) -> bool:
        """Check if two boards have the same mine layout."""
        if not isinstance(other, Grid):
            return False
        return self.size == other.size and np.array_equal(self.mine_mask, other.mine_mask)

    def __str__(self) -> str:
        """String representation of the board as the player sees it."""
        return self.render()
