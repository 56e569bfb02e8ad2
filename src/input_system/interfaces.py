"""
Abstract interfaces for input sources
"""

from abc import ABC, abstractmethod
from typing import List
from .input_event import InputEvent


class IInputSource(ABC):
    """
    Abstract interface for reading raw input events.

    Separates the concern of reading a device from interpreting the input.
    Allows different implementations: terminal keyboard, pygame window,
    scripted/mock, network, etc.
    """

    @abstractmethod
    def setup(self) -> None:
        """Initialize the source hardware/resources"""
        pass

    @abstractmethod
    def read_events(self) -> List[InputEvent]:
        """
        Drain every event that arrived since the previous call.

        Must not block: returns an empty list when nothing is pending.

        Returns:
            Events in arrival order
        """
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """
        Release any resources used by the source.

        Should be called before program exit (terminal modes, windows, etc.)
        """
        pass
