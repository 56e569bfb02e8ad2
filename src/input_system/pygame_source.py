"""
Pygame window input source
"""

from typing import Dict, List, Tuple

import pygame

from .input_event import InputEvent
from .interfaces import IInputSource


def _build_key_map() -> Dict[int, str]:
    """Map pygame key constants to browser-style key codes"""
    key_map = {
        pygame.K_RETURN: "Enter",
        pygame.K_KP_ENTER: "Enter",
        pygame.K_TAB: "Tab",
        pygame.K_ESCAPE: "Escape",
        pygame.K_SPACE: "Space",
        pygame.K_BACKSPACE: "Backspace",
        pygame.K_UP: "ArrowUp",
        pygame.K_DOWN: "ArrowDown",
        pygame.K_LEFT: "ArrowLeft",
        pygame.K_RIGHT: "ArrowRight",
        pygame.K_PAGEUP: "PageUp",
        pygame.K_PAGEDOWN: "PageDown",
    }
    for digit in range(10):
        key_map[getattr(pygame, f"K_{digit}")] = f"Digit{digit}"
    for letter in "abcdefghijklmnopqrstuvwxyz":
        key_map[getattr(pygame, f"K_{letter}")] = f"Key{letter.upper()}"
    for number in range(1, 13):
        key_map[getattr(pygame, f"K_F{number}")] = f"F{number}"
    return key_map


class PygameInputSource(IInputSource):
    """
    Reads keyboard and mouse wheel events from a small pygame window.

    The window only exists to receive focus and events; all tutorial text
    goes to the render sink.
    """

    def __init__(self, logger, window_size: Tuple[int, int] = (480, 120), caption: str = "Orbital Tutorial"):
        """
        Args:
            logger: ClassLogger instance for logging
            window_size: Width and height of the event window in pixels
            caption: Window title
        """
        self._logger = logger
        self._window_size = window_size
        self._caption = caption
        self._key_map = _build_key_map()
        self._initialized = False

    def setup(self) -> None:
        """Open the event window"""
        pygame.display.init()
        pygame.display.set_caption(self._caption)
        pygame.display.set_mode(self._window_size)
        self._initialized = True
        self._logger.info(f"🪟 Pygame input source initialized ({self._window_size[0]}x{self._window_size[1]} window)")

    def read_events(self) -> List[InputEvent]:
        """Translate queued pygame events"""
        if not self._initialized:
            return []

        events: List[InputEvent] = []
        try:
            for raw in pygame.event.get():
                if raw.type == pygame.QUIT:
                    events.append(InputEvent.quit())
                elif raw.type == pygame.KEYDOWN:
                    code = self._key_map.get(raw.key)
                    if code:
                        events.append(InputEvent.key(code))
                elif raw.type == pygame.MOUSEWHEEL:
                    events.append(InputEvent.wheel(-raw.y))
        except pygame.error as e:
            self._logger.warning(f"Pygame event error: {e}")
        return events

    def cleanup(self) -> None:
        """Close the window"""
        if self._initialized:
            pygame.display.quit()
            self._initialized = False
            self._logger.info("Pygame input source cleaned up")
