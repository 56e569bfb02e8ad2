"""
Utilities package - Common utilities for the orbital tutorial
"""

from .once_in_ms import OnceInMs
from .delayed_action import DelayedAction, DelayedActionScheduler

__all__ = [
    'OnceInMs',
    'DelayedAction',
    'DelayedActionScheduler'
]
