"""Per-case statistics for solved boards."""

from typing import Any, Dict
from dataclasses import dataclass, asdict

from .grid import Grid


@dataclass
class CaseMetrics:
    """Statistics for a single solved test case."""

    # Case identification
    case_number: int
    size: int

    # Board contents
    mine_count: int = 0
    safe_count: int = 0

    # Solve outcome
    flood_clicks: int = 0
    single_clicks: int = 0
    total_clicks: int = 0
    solved: bool = False

    # Performance
    duration_seconds: float = 0.0

    @classmethod
    def from_grid(cls, case_number: int, grid: Grid, duration: float = 0.0) -> "CaseMetrics":
        """Collect metrics from a grid after solve() has run."""
        return cls(
            case_number=case_number,
            size=grid.size,
            mine_count=grid.mine_count,
            safe_count=grid.safe_count,
            flood_clicks=grid.flood_clicks,
            single_clicks=grid.single_clicks,
            total_clicks=grid.total_clicks,
            solved=grid.is_solved,
            duration_seconds=duration,
        )

    @property
    def mine_density(self) -> float:
        """Fraction of cells holding a mine."""
        return self.mine_count / (self.size * self.size)

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary."""
        return asdict(self)
