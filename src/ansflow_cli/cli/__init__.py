"""CLI helpers exposed for other modules."""

from .ui import StepTracker, branch_table, finish_tracker

__all__ = ["StepTracker", "branch_table", "finish_tracker"]
