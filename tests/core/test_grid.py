"""Tests for the Grid class."""

import numpy as np
import pytest
from minesweep.core.grid import Grid, MINE


def make_grid(text: str) -> Grid:
    """Build a grid from text and compute its counts."""
    grid = Grid.from_string(text)
    grid.compute_counts()
    return grid


class TestGrid:
    """Test cases for the Grid class."""

    def test_initialization(self):
        """Test grid initialization."""
        grid = Grid(4)
        assert grid.size == 4
        assert grid.shape == (4, 4)
        assert grid.mine_count == 0
        assert grid.safe_count == 16
        assert grid.revealed_count == 0
        assert grid.click_history == []

    def test_invalid_size(self):
        """Test that non-positive sizes are rejected."""
        with pytest.raises(ValueError):
            Grid(0)
        with pytest.raises(ValueError):
            Grid(-3)

    def test_from_string(self):
        """Test building a grid from text rows."""
        grid = Grid.from_string("..*\n...\n*..\n")
        assert grid.size == 3
        assert grid.mine_count == 2
        assert grid.is_mine(0, 2)
        assert grid.is_mine(2, 0)
        assert not grid.is_mine(1, 1)
        assert not grid.is_revealed(0, 0)

    def test_from_rows_wrong_length(self):
        """Test that non-square input is rejected."""
        with pytest.raises(ValueError):
            Grid.from_rows(["...", ".."])

    def test_from_rows_invalid_character(self):
        """Test that unknown cell characters are rejected."""
        with pytest.raises(ValueError):
            Grid.from_rows(["..", ".x"])

    def test_from_rows_empty(self):
        """Test that an empty board is rejected."""
        with pytest.raises(ValueError):
            Grid.from_rows([])

    def test_to_rows(self):
        """Test converting the mine layout back to rows."""
        rows = ["*..", ".*.", "..."]
        assert Grid.from_rows(rows).to_rows() == rows

    def test_out_of_bounds(self):
        """Test that coordinates outside the board raise IndexError."""
        grid = Grid(3)
        with pytest.raises(IndexError):
            grid.is_mine(3, 0)
        with pytest.raises(IndexError):
            grid.get_count(0, -1)
        with pytest.raises(IndexError):
            grid.reveal(5, 5)

    def test_neighbors_clamped(self):
        """Test neighbour enumeration at corners, edges and the middle."""
        grid = Grid(3)
        assert sorted(grid.neighbors(0, 0)) == [(0, 1), (1, 0), (1, 1)]
        assert len(list(grid.neighbors(0, 1))) == 5
        assert len(list(grid.neighbors(1, 1))) == 8
        assert (1, 1) not in list(grid.neighbors(1, 1))

    def test_neighbors_single_cell(self):
        """Test that a 1x1 board has no neighbours."""
        assert list(Grid(1).neighbors(0, 0)) == []

    def test_set_mine(self):
        """Test placing and removing mines."""
        grid = Grid(3)
        grid.set_mine(1, 1)
        assert grid.is_mine(1, 1)
        grid.set_mine(1, 1, False)
        assert not grid.is_mine(1, 1)

    def test_equality(self):
        """Test grid equality is based on the mine layout."""
        assert Grid.from_rows(["*.", ".."]) == Grid.from_rows(["*.", ".."])
        assert Grid.from_rows(["*.", ".."]) != Grid.from_rows([".*", ".."])
        assert Grid(2) != "not a grid"


class TestComputeCounts:
    """Test cases for adjacency counting."""

    def test_counts(self):
        """Test counts on a small board with two mines."""
        grid = make_grid("..*\n...\n*..")
        expected = np.array([[0, 1, MINE], [1, 2, 1], [MINE, 1, 0]])
        assert np.array_equal(grid.counts, expected)

    def test_mines_keep_marker(self):
        """Test that neighbouring mines are not counted up."""
        grid = make_grid("**\n**")
        assert np.all(grid.counts == MINE)

    def test_corner_surrounded_by_mines(self):
        """Test a lone empty corner on an otherwise mined board."""
        grid = make_grid(".***\n****\n****\n****")
        assert grid.get_count(0, 0) == 3
        assert grid.mine_count == 15

    def test_counts_in_range(self):
        """Test that every non-mine count stays within 0-8."""
        grid = make_grid("***\n*.*\n***")
        assert grid.get_count(1, 1) == 8

    def test_counts_match_brute_force(self):
        """Test convolution counts against a direct neighbour count."""
        rng = np.random.default_rng(42)
        size = 12
        grid = Grid(size)
        for row in range(size):
            for col in range(size):
                if rng.random() < 0.25:
                    grid.set_mine(row, col)
        grid.compute_counts()

        for row in range(size):
            for col in range(size):
                if grid.is_mine(row, col):
                    assert grid.get_count(row, col) == MINE
                    continue
                expected = sum(1 for r, c in grid.neighbors(row, col) if grid.is_mine(r, c))
                assert grid.get_count(row, col) == expected

    def test_recompute_is_stable(self):
        """Test that computing counts twice gives the same result."""
        grid = make_grid("*..\n...\n..*")
        first = grid.counts.copy()
        grid.compute_counts()
        assert np.array_equal(grid.counts, first)


class TestReveal:
    """Test cases for flood-fill reveal."""

    def test_reveal_zero_floods(self):
        """Test that revealing a zero cell opens its whole region."""
        grid = make_grid("....\n....\n....\n....")
        assert grid.reveal(0, 0) == 16
        assert grid.is_solved

    def test_reveal_is_idempotent(self):
        """Test that revealing a revealed cell changes nothing."""
        grid = make_grid("..*\n...\n*..")
        grid.reveal(0, 0)
        before = grid.revealed.copy()
        assert grid.reveal(0, 0) == 0
        assert grid.reveal(0, 1) == 0
        assert np.array_equal(grid.revealed, before)

    def test_reveal_stops_at_numbers(self):
        """Test that the flood marks numbered cells but does not expand them."""
        grid = make_grid("..*\n...\n*..")
        grid.reveal(0, 0)
        assert grid.is_revealed(0, 0)
        assert grid.is_revealed(0, 1)
        assert grid.is_revealed(1, 0)
        assert grid.is_revealed(1, 1)
        # Other zero region is untouched
        assert not grid.is_revealed(2, 2)
        assert not grid.is_revealed(1, 2)
        assert not grid.is_revealed(2, 1)

    def test_reveal_numbered_origin(self):
        """Test revealing a numbered cell expands into zero neighbours."""
        grid = make_grid("*..\n...\n...")
        grid.reveal(1, 1)
        assert grid.revealed_count == 8

    def test_reveal_mine_origin(self):
        """Test that revealing a mine does not spread."""
        grid = make_grid("*..\n...\n...")
        assert grid.reveal(0, 0) == 1
        assert grid.revealed_count == 0

    def test_large_board_no_recursion_limit(self):
        """Test that flooding a large empty board does not recurse."""
        grid = make_grid("\n".join(["." * 200] * 200))
        assert grid.reveal(100, 100) == 200 * 200


class TestSolve:
    """Test cases for counting clicks."""

    def test_all_mines(self):
        """Test that an all-mine board needs no clicks."""
        grid = make_grid("***\n***\n***")
        assert grid.solve() == 0
        assert grid.click_history == []

    def test_all_empty(self):
        """Test that an empty board clears in one click."""
        grid = make_grid(".....\n.....\n.....\n.....\n.....")
        assert grid.solve() == 1
        assert grid.is_solved

    def test_single_cell(self):
        """Test 1x1 boards."""
        assert make_grid(".").solve() == 1
        assert make_grid("*").solve() == 0

    def test_single_corner_mine(self):
        """Test one mine in a corner: one flood covers everything."""
        grid = make_grid("*...\n....\n....\n....")
        assert grid.solve() == 1
        assert grid.flood_clicks == 1
        assert grid.single_clicks == 0

    def test_single_centre_mine(self):
        """Test a mine in the middle of 3x3: every cell is numbered."""
        grid = make_grid("...\n.*.\n...")
        assert grid.solve() == 8
        assert grid.flood_clicks == 0
        assert grid.single_clicks == 8

    def test_flood_plus_isolated(self):
        """Test one flood click plus a click per isolated numbered cell."""
        grid = make_grid("*.*\n...\n*.*")
        assert grid.solve() == 5

        grid = make_grid(".....\n.....\n.....\n...*.\n..*.*")
        # (3, 4) and (4, 3) touch no zero cell
        assert grid.get_count(4, 3) == 3
        assert grid.get_count(3, 4) == 2
        assert grid.solve() == 3
        assert grid.flood_clicks == 1
        assert grid.single_clicks == 2

    def test_two_regions(self):
        """Test two separate zero regions need a click each."""
        grid = make_grid("..*\n...\n*..")
        assert grid.solve() == 2
        assert grid.click_history == [(0, 0), (2, 2)]
        assert grid.is_solved

    def test_solve_twice(self):
        """Test that a solved board needs no further clicks."""
        grid = make_grid("..*\n...\n*..")
        grid.solve()
        assert grid.solve() == 0
        assert grid.total_clicks == 2

    def test_reset(self):
        """Test that reset hides everything and allows solving again."""
        grid = make_grid("..*\n...\n*..")
        grid.solve()
        grid.reset()
        assert grid.revealed_count == 0
        assert grid.click_history == []
        assert grid.total_clicks == 0
        assert grid.solve() == 2


class TestRender:
    """Test cases for board rendering."""

    def test_render_hidden(self):
        """Test rendering before anything is revealed."""
        grid = make_grid("*.\n..")
        assert grid.render() == " *  - \n -  - "

    def test_render_solved(self):
        """Test rendering after solving shows counts."""
        grid = make_grid("*.\n..")
        grid.solve()
        assert str(grid) == " *  1 \n 1  1 "
