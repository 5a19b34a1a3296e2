"""Frontend interfaces for the solver."""

from .cli import CLIClickCounter

__all__ = ["CLIClickCounter"]
