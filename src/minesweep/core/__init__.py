"""Core board and solving logic."""

from .grid import Grid, MINE
from .cases import TestCase, parse_cases, load_cases
from .metrics import CaseMetrics

__all__ = ["Grid", "MINE", "TestCase", "parse_cases", "load_cases", "CaseMetrics"]
