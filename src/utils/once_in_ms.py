"""
Interval throttle for work that should not run every frame
"""

import time
from typing import Callable


class OnceInMs:
    """
    Lets an action through at most once per interval.

    The frame loop asks every frame; the answer is yes only when a full
    interval has passed since the last yes.

    Example:
        reminder = OnceInMs(30000)
        ...
        if waiting_for_input and reminder.should_execute():
            logger.debug("Still waiting for the player")
    """

    def __init__(self, interval_ms: int, clock: Callable[[], float] = time.time):
        """
        Args:
            interval_ms: Minimum milliseconds between two executions
            clock: Time source in seconds
        """
        self.interval_ms = interval_ms
        self.interval = interval_ms / 1000.0
        self._clock = clock
        self.last_execution = 0.0

    def should_execute(self) -> bool:
        """
        Returns:
            True (and starts a new interval) if the current interval is over
        """
        now = self._clock()
        if now - self.last_execution < self.interval:
            return False
        self.last_execution = now
        return True

    def reset(self) -> None:
        """Make the next should_execute() succeed"""
        self.last_execution = 0.0

    def restart(self) -> None:
        """Begin a full interval now, e.g. when a new step starts waiting"""
        self.last_execution = self._clock()

    def elapsed_ms(self) -> float:
        return (self._clock() - self.last_execution) * 1000

    def remaining_ms(self) -> float:
        """Milliseconds until the next execution is allowed (negative when overdue)"""
        return self.interval_ms - self.elapsed_ms()
