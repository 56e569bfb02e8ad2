"""
Render sink interface and payload
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RenderPayload:
    """Everything a sink needs to draw the tutorial panel for one step"""
    title: str
    message: str
    hint: str
    feedback: str = ""
    step_index: int = 0
    step_count: int = 0

    @property
    def progress_label(self) -> str:
        """Human readable position, e.g. 'Step 3/13'"""
        return f"Step {self.step_index + 1}/{self.step_count}"


class IRenderSink(ABC):
    """
    Abstract presentation target for the tutorial.

    Sinks are write-only: they never feed state back into the controller.
    Implementations: console, GUI overlay, recording mock, etc.
    """

    @abstractmethod
    def render(self, payload: RenderPayload) -> None:
        """
        Replace the displayed content.

        Called on every step entry and on every feedback/hint update.
        """
        pass

    @abstractmethod
    def set_visible(self, visible: bool) -> None:
        """Show or hide the whole panel"""
        pass

    def set_minimized(self, minimized: bool) -> None:
        """Collapse the panel to its title bar (override if supported)"""
        pass
