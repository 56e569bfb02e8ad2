"""
Cancellable delayed actions for single-threaded frame loops
"""

import time
from typing import Callable, List, Optional


class DelayedAction:
    """
    One-shot callback that becomes due after a delay.

    Nothing runs in the background: the owner polls fire_if_due() from its
    frame loop, so the callback always executes on the loop's thread.

    Example:
        handle = DelayedAction(500, lambda: controller.enter_step(3))
        ...
        handle.fire_if_due()   # every frame
        handle.cancel()        # superseded, will never fire
    """

    def __init__(self,
                 delay_ms: float,
                 action: Callable[[], None],
                 clock: Callable[[], float] = time.time,
                 name: str = "DelayedAction"):
        """
        Args:
            delay_ms: Milliseconds from now until the action is due
            action: Zero-argument callback
            clock: Time source in seconds
            name: Label for debugging
        """
        self.delay_ms = delay_ms
        self.name = name
        self._action = action
        self._clock = clock
        self.due_at: float = clock() + delay_ms / 1000.0
        self.cancelled: bool = False
        self.fired: bool = False

    @property
    def pending(self) -> bool:
        """True while the action can still fire"""
        return not (self.cancelled or self.fired)

    def is_due(self) -> bool:
        return self.pending and self._clock() >= self.due_at

    def fire_if_due(self) -> bool:
        """
        Run the action if its delay has elapsed.

        Returns:
            True if the action ran during this call
        """
        if not self.is_due():
            return False
        self.fired = True
        self._action()
        return True

    def cancel(self) -> None:
        self.cancelled = True

    def remaining_ms(self) -> float:
        """Milliseconds until due (negative when overdue)"""
        return (self.due_at - self._clock()) * 1000

    def __str__(self) -> str:
        state = "pending" if self.pending else ("fired" if self.fired else "cancelled")
        return f"DelayedAction({self.name}, {state}, remaining={self.remaining_ms():.0f}ms)"


class DelayedActionScheduler:
    """
    Owns a set of DelayedAction handles and fires them in due order.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._actions: List[DelayedAction] = []

    def schedule(self, delay_ms: float, action: Callable[[], None], name: str = "DelayedAction") -> DelayedAction:
        """
        Schedule an action and return its cancellable handle.
        """
        handle = DelayedAction(delay_ms, action, clock=self._clock, name=name)
        self._actions.append(handle)
        return handle

    def poll(self) -> int:
        """
        Fire every due action, earliest first.

        Actions scheduled by a firing callback are not run in the same poll.

        Returns:
            Number of actions fired
        """
        due = sorted((a for a in self._actions if a.is_due()), key=lambda a: a.due_at)
        fired = 0
        for handle in due:
            # An earlier callback may have cancelled this one
            if handle.fire_if_due():
                fired += 1
        self._actions = [a for a in self._actions if a.pending]
        return fired

    def cancel_all(self) -> None:
        for handle in self._actions:
            handle.cancel()
        self._actions.clear()

    def pending_count(self) -> int:
        return sum(1 for a in self._actions if a.pending)

    def next_due(self) -> Optional[DelayedAction]:
        pending = [a for a in self._actions if a.pending]
        return min(pending, key=lambda a: a.due_at) if pending else None
