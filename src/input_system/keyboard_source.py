"""
Terminal keyboard input source (works over SSH)
"""

import codecs
import os
import sys
import select
import termios
import tty
from typing import List, Optional, TextIO, Tuple

from .input_event import InputEvent
from .interfaces import IInputSource

# CSI sequences sent by common terminals for navigation keys
_CSI_SEQUENCES = {
    "\x1b[A": "ArrowUp",
    "\x1b[B": "ArrowDown",
    "\x1b[C": "ArrowRight",
    "\x1b[D": "ArrowLeft",
    "\x1b[5~": "PageUp",
    "\x1b[6~": "PageDown",
}

# Cursor keys in application mode (ESC O A..D)
_SS3_KEYS = {"A": "ArrowUp", "B": "ArrowDown", "C": "ArrowRight", "D": "ArrowLeft"}


def decode_terminal_input(data: str) -> List[InputEvent]:
    """
    Translate raw terminal bytes into input events.

    Terminals deliver no mouse wheel events here, so '+' and '-' stand in for
    wheel zoom in/out. Ctrl+C becomes a quit event. Unknown characters are
    dropped.

    Args:
        data: Characters read from the terminal in cbreak mode

    Returns:
        Decoded events in order
    """
    events: List[InputEvent] = []
    i = 0
    while i < len(data):
        char = data[i]

        if char == "\x1b":
            code, consumed = _match_escape(data, i)
            if code:
                events.append(InputEvent.key(code))
            i += consumed
            continue

        i += 1
        if char == "\x03":
            events.append(InputEvent.quit())
        elif char in ("\r", "\n"):
            events.append(InputEvent.key("Enter"))
        elif char == "\t":
            events.append(InputEvent.key("Tab"))
        elif char == " ":
            events.append(InputEvent.key("Space"))
        elif char == "\x7f":
            events.append(InputEvent.key("Backspace"))
        elif char in "+=":
            events.append(InputEvent.wheel(-1))
        elif char in "-_":
            events.append(InputEvent.wheel(1))
        elif char.isdigit():
            events.append(InputEvent.key(f"Digit{char}"))
        elif char.isascii() and char.isalpha():
            events.append(InputEvent.key(f"Key{char.upper()}"))
    return events


def _match_escape(data: str, start: int) -> Tuple[Optional[str], int]:
    """Return (key code, characters consumed) for an escape sequence at start"""
    introducer = data[start + 1:start + 2]

    if introducer == "[":
        # CSI: parameter bytes up to a final byte in '@'..'~'
        end = start + 2
        while end < len(data) and not "\x40" <= data[end] <= "\x7e":
            end += 1
        end = min(end + 1, len(data))
        return _CSI_SEQUENCES.get(data[start:end]), end - start

    if introducer == "O" and start + 2 < len(data):
        # SS3: application-mode cursor keys
        return _SS3_KEYS.get(data[start + 2]), 3

    return "Escape", 1


class KeyboardInputSource(IInputSource):
    """
    Reads keys from the controlling terminal (works over SSH).

    The terminal is switched to cbreak mode for the lifetime of the source so
    keys arrive without [ENTER] and without echo; cleanup() puts the saved
    attributes back.

    Example:
        source = KeyboardInputSource(logger=logger)
        source.setup()
        events = source.read_events()    # every frame, never blocks
        source.cleanup()
    """

    def __init__(self, logger, read_chunk: int = 64, stream: Optional[TextIO] = None):
        """
        Args:
            logger: ClassLogger instance
            read_chunk: Most bytes consumed per read_events() call
            stream: Terminal stream (stdin unless a test injects one)
        """
        self._logger = logger
        self._read_chunk = read_chunk
        self._stream = stream or sys.stdin
        self._saved_attributes = None
        self._active = False
        # Keeps a multi-byte character that straddles two reads intact
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def active(self) -> bool:
        return self._active

    def setup(self) -> None:
        """
        Raises:
            RuntimeError: If the stream is not an interactive terminal
        """
        try:
            is_terminal = self._stream.isatty()
        except (OSError, ValueError):
            is_terminal = False
        if not is_terminal:
            self._logger.error("❌ Keyboard input needs an interactive terminal (stdin is not a TTY)")
            raise RuntimeError("Keyboard input not available")

        try:
            self._saved_attributes = termios.tcgetattr(self._stream)
            # cbreak keeps output processing so the panel and log lines still render
            tty.setcbreak(self._stream.fileno())
        except (termios.error, OSError) as e:
            self._logger.error(f"❌ Could not switch terminal to cbreak mode: {e}")
            raise RuntimeError("Failed to configure terminal") from e

        self._active = True
        self._logger.info("⌨️  Keyboard input source initialized")
        self._logger.info("   [ENTER] confirm, [TAB] skip, [ESC] hide/show tutorial, [+/-] zoom, Ctrl+C quit")

    def _pending(self) -> bool:
        readable, _, _ = select.select([self._stream], [], [], 0)
        return bool(readable)

    def read_events(self) -> List[InputEvent]:
        """Decode whatever the terminal has buffered; empty when nothing is pending"""
        if not self._active:
            return []

        # Read the descriptor directly: a buffered text read would pull a whole
        # escape sequence into Python's buffer where select() cannot see it
        text = ""
        try:
            if self._pending():
                data = os.read(self._stream.fileno(), self._read_chunk)
                text = self._decoder.decode(data)
        except (OSError, ValueError) as e:
            # A broken read loses this frame's keys, not the session
            self._logger.warning(f"Keyboard input error: {e}")

        events = decode_terminal_input(text)
        for event in events:
            self._logger.debug(f"Keyboard: {event}")
        return events

    def cleanup(self) -> None:
        """Restore the terminal attributes saved by setup()"""
        if self._saved_attributes is not None:
            try:
                termios.tcsetattr(self._stream.fileno(), termios.TCSADRAIN, self._saved_attributes)
            except (termios.error, OSError) as e:
                self._logger.warning(f"Could not restore terminal settings: {e}")
            self._saved_attributes = None
        if self._active:
            self._active = False
            self._logger.info("Keyboard input source cleaned up")
