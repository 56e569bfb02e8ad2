"""
Scripted input source - replays a queue of events without any device
"""

from collections import deque
from typing import Deque, Iterable, List, Optional, Union

from .input_event import InputEvent
from .interfaces import IInputSource

# A frame of scripted input: one event, several events, or None for an idle frame
ScriptFrame = Union[None, InputEvent, Iterable[InputEvent]]


class ScriptedInputSource(IInputSource):
    """
    Mock input source that hands out one scripted frame per read_events() call.

    Used by tests and headless demos. Once the script runs out the source
    either stays idle or emits a quit event.

    Example:
        source = ScriptedInputSource([
            InputEvent.key("Enter"),
            None,                     # idle frame
            [InputEvent.key("Digit4"), InputEvent.key("Enter")],
        ], logger=logger)
    """

    def __init__(self, frames: Iterable[ScriptFrame] = (), logger=None, quit_when_exhausted: bool = False):
        """
        Args:
            frames: Frames to replay in order
            logger: Optional ClassLogger
            quit_when_exhausted: Emit a quit event after the last frame
        """
        self._frames: Deque[ScriptFrame] = deque(frames)
        self._logger = logger
        self._quit_when_exhausted = quit_when_exhausted
        self.frames_read = 0

    def push(self, *events: InputEvent) -> None:
        """Append one frame containing the given events"""
        self._frames.append(list(events))

    def push_idle(self, count: int = 1) -> None:
        """Append idle frames"""
        self._frames.extend([None] * count)

    @property
    def exhausted(self) -> bool:
        return not self._frames

    def setup(self) -> None:
        if self._logger:
            self._logger.info(f"🎬 Scripted input source initialized ({len(self._frames)} frames)")

    def read_events(self) -> List[InputEvent]:
        self.frames_read += 1
        if not self._frames:
            return [InputEvent.quit()] if self._quit_when_exhausted else []

        frame: Optional[ScriptFrame] = self._frames.popleft()
        if frame is None:
            return []
        if isinstance(frame, InputEvent):
            return [frame]
        return list(frame)

    def cleanup(self) -> None:
        self._frames.clear()
