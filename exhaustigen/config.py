"""Configuration classes for enumeration drivers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class EnumerationConfig:
    """Configuration for driving an exhaustive enumeration loop."""

    # Stop after this many runs; None enumerates the whole space
    max_runs: Optional[int] = None

    # Emit a progress record every N runs; 0 disables progress logging
    progress_interval: int = 10_000

    # Keep every run's choice trace on the result (memory grows with run count)
    record_paths: bool = False

    # Level applied to the exhaustigen loggers while `exhaust` runs; None keeps
    # the current level (WARNING unless changed)
    log_level: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_runs is not None and self.max_runs < 1:
            raise ValueError(f"max_runs must be >= 1 or None, got {self.max_runs}")
        if self.progress_interval < 0:
            raise ValueError(
                f"progress_interval must be >= 0, got {self.progress_interval}"
            )

    def should_report(self, run_index: int) -> bool:
        """Return True when progress should be logged after ``run_index`` runs."""
        if self.progress_interval == 0 or run_index == 0:
            return False
        return run_index % self.progress_interval == 0

    def limit_reached(self, runs: int) -> bool:
        """Return True when ``runs`` completed runs exhaust the run budget."""
        return self.max_runs is not None and runs >= self.max_runs


# Global configuration instance
DEFAULT_CONFIG = EnumerationConfig()
