"""
Input System Package

Device-independent input sources producing browser-style key events.
The terminal keyboard, a pygame window, or a scripted queue can drive
the tutorial interchangeably.
"""

from .input_event import InputEvent, InputKind
from .interfaces import IInputSource
from .keyboard_source import KeyboardInputSource, decode_terminal_input
from .scripted_source import ScriptedInputSource

__all__ = [
    "InputEvent",
    "InputKind",
    "IInputSource",
    "KeyboardInputSource",
    "ScriptedInputSource",
    "decode_terminal_input"
]
