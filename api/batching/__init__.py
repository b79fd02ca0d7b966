"""
Batching package for deferred selection writes.

Provides the add queue and the scheduler that drains it and commits
staged selection updates.
"""

from .add_queue import AddQueue
from .scheduler import BatchScheduler

__all__ = ["AddQueue", "BatchScheduler"]
