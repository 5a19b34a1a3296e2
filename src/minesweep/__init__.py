"""Minimum-clicks Minesweeper solver."""

__version__ = "0.1.0"

from .core.grid import Grid, MINE
from .core.cases import TestCase, parse_cases, load_cases
from .core.metrics import CaseMetrics

__all__ = ["Grid", "MINE", "TestCase", "parse_cases", "load_cases", "CaseMetrics"]
