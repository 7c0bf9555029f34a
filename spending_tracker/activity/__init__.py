"""Activity logging package."""

from spending_tracker.activity.logger import ActivityLogger

__all__ = ["ActivityLogger"]
