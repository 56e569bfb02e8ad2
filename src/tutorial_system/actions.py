"""
Action tokens and the per-tutorial action tracker
"""

import enum
from typing import FrozenSet, Iterable, Set, Union


class ActionToken(str, enum.Enum):
    """Recognized user actions (string valued so plain strings compare equal)"""
    PRESSED_ENTER_WELCOME = "pressedEnter_welcome"
    CONFIRMED = "confirmedStep"
    VIEWED_EARTH = "viewedEarth"
    VIEWED_SPACESHIP = "viewedSpaceship"
    USED_MOUSE_WHEEL = "usedMouseWheel"
    SWITCHED_FRAME = "switchedFrame"
    VIEWED_MOON = "viewedMoon"
    USED_THRUST = "usedThrust"
    PAUSED = "paused"
    ADJUSTED_VELOCITY = "adjustedVelocity"
    APPLIED_VELOCITY = "appliedVelocity"

    # Persistent: marks the whole flow finished
    COMPLETED_TUTORIAL = "completedTutorial"

    @property
    def is_persistent(self) -> bool:
        return self in PERSISTENT_ACTIONS

    def __str__(self) -> str:
        return self.value


PERSISTENT_ACTIONS: FrozenSet[ActionToken] = frozenset({ActionToken.COMPLETED_TUTORIAL})
STEP_SCOPED_ACTIONS: FrozenSet[ActionToken] = frozenset(
    token for token in ActionToken if token not in PERSISTENT_ACTIONS
)

Token = Union[ActionToken, str]


class ActionTracker:
    """
    Set of recognized action tokens for one tutorial instance.

    Input observers record tokens, the controller queries them in completion
    predicates and clears the step-scoped ones on every step entry.

    Example:
        tracker = ActionTracker()
        tracker.record(ActionToken.VIEWED_EARTH)
        tracker.has("viewedEarth")      # True
        tracker.clear_step_scoped()
        tracker.has("viewedEarth")      # False
    """

    def __init__(self):
        self._tokens: Set[str] = set()

    def record(self, token: Token) -> bool:
        """
        Record a token.

        Returns:
            True if the token was not present before
        """
        value = str(token)
        if value in self._tokens:
            return False
        self._tokens.add(value)
        return True

    def has(self, token: Token) -> bool:
        return str(token) in self._tokens

    def clear(self, tokens: Iterable[Token]) -> None:
        """Remove the given tokens (absent ones are ignored)"""
        for token in tokens:
            self._tokens.discard(str(token))

    def clear_step_scoped(self) -> None:
        """Drop everything except persistent tokens"""
        self.clear(STEP_SCOPED_ACTIONS)

    def clear_all(self) -> None:
        self._tokens.clear()

    def snapshot(self) -> FrozenSet[str]:
        return frozenset(self._tokens)

    def __contains__(self, token: object) -> bool:
        # str() first: enum members hash by name, not by value
        return isinstance(token, str) and str(token) in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def __str__(self) -> str:
        return f"ActionTracker({', '.join(sorted(self._tokens)) or 'empty'})"
