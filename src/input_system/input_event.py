"""
InputEvent - Immutable input event data with validated key codes
"""

import enum
import re
from dataclasses import dataclass

# Browser-style key codes, the vocabulary the tutorial rules are written in
_KEY_CODE_PATTERN = re.compile(
    r"^(Enter|Tab|Escape|Space|Backspace|"
    r"Digit[0-9]|Key[A-Z]|"
    r"ArrowUp|ArrowDown|ArrowLeft|ArrowRight|PageUp|PageDown|"
    r"F[1-9]|F1[0-2])$"
)

WHEEL_CODE = "Wheel"
QUIT_CODE = "Quit"


class InputKind(enum.Enum):
    """Category of a raw input event"""
    KEY = "key"
    WHEEL = "wheel"
    QUIT = "quit"


@dataclass(frozen=True)
class InputEvent:
    """
    Immutable snapshot of one raw input event.

    Usage:
        event = InputEvent.key("Digit4")
        event = InputEvent.wheel(-1)
        print(event.code, event.kind)
    """
    kind: InputKind
    code: str
    wheel_delta: int = 0

    def __post_init__(self):
        """Validate the kind/code combination after construction"""
        if not isinstance(self.kind, InputKind):
            raise TypeError("kind must be an InputKind")
        if not isinstance(self.code, str):
            raise TypeError("code must be a str")

        if self.kind is InputKind.KEY and not _KEY_CODE_PATTERN.match(self.code):
            raise ValueError(f"Unknown key code: {self.code!r}")
        if self.kind is InputKind.WHEEL and self.code != WHEEL_CODE:
            raise ValueError(f"Wheel events must use code {WHEEL_CODE!r}, got {self.code!r}")
        if self.kind is InputKind.QUIT and self.code != QUIT_CODE:
            raise ValueError(f"Quit events must use code {QUIT_CODE!r}, got {self.code!r}")

    @classmethod
    def key(cls, code: str) -> 'InputEvent':
        return cls(InputKind.KEY, code)

    @classmethod
    def wheel(cls, delta: int = 1) -> 'InputEvent':
        return cls(InputKind.WHEEL, WHEEL_CODE, wheel_delta=delta)

    @classmethod
    def quit(cls) -> 'InputEvent':
        return cls(InputKind.QUIT, QUIT_CODE)

    @property
    def is_key(self) -> bool:
        return self.kind is InputKind.KEY

    def __str__(self) -> str:
        if self.kind is InputKind.WHEEL:
            return f"InputEvent(wheel, delta={self.wheel_delta})"
        return f"InputEvent({self.kind.value}, {self.code})"
