"""
Console render sink - prints the tutorial panel to a text stream
"""

import re
import sys
from typing import Optional, TextIO

from .interfaces import IRenderSink, RenderPayload

CONTINUE_HINT = "Press [ENTER] to continue"
SKIP_HINT_SUFFIX = "Press [TAB] to skip"

_BOLD_MARKER = re.compile(r"\*\*([^*]+)\*\*")


class ConsoleRenderSink(IRenderSink):
    """
    Draws the tutorial panel as a framed block of text.

    **text** markers in messages are highlighted (bold red) when colors are
    enabled and stripped otherwise.
    """

    COLORS = {
        'TITLE': '\033[96m',      # Cyan
        'TEXT': '\033[92m',       # Green
        'HIGHLIGHT': '\033[1;91m',  # Bold red
        'FEEDBACK': '\033[1;92m',   # Bold green
        'HINT': '\033[93m',       # Yellow
        'RESET': '\033[0m'
    }

    def __init__(self, stream: Optional[TextIO] = None, use_colors: bool = True, width: int = 64):
        """
        Args:
            stream: Output stream (stdout by default)
            use_colors: Emit ANSI colors
            width: Frame width in characters
        """
        self._stream = stream or sys.stdout
        self._use_colors = use_colors
        self._width = width
        self._visible = False
        self._minimized = False
        self._last_payload: Optional[RenderPayload] = None

    def _color(self, key: str, text: str) -> str:
        if not self._use_colors:
            return text
        return f"{self.COLORS[key]}{text}{self.COLORS['RESET']}"

    def format_message(self, text: str) -> str:
        """Replace **bold** markers with highlighted text"""
        if not self._use_colors:
            return _BOLD_MARKER.sub(r"\1", text)
        highlight = self.COLORS['HIGHLIGHT']
        resume = self.COLORS['TEXT']
        return _BOLD_MARKER.sub(lambda m: f"{highlight}{m.group(1)}{resume}", text)

    def format_hint(self, hint: str) -> str:
        """The plain continue hint always advertises the skip key"""
        if hint == CONTINUE_HINT:
            return f"{CONTINUE_HINT}\n{SKIP_HINT_SUFFIX}"
        return hint

    def render(self, payload: RenderPayload) -> None:
        self._last_payload = payload
        if self._visible:
            self._draw()

    def set_visible(self, visible: bool) -> None:
        was_visible = self._visible
        self._visible = visible
        if visible and not was_visible and self._last_payload:
            self._draw()

    def set_minimized(self, minimized: bool) -> None:
        self._minimized = minimized
        if self._visible and self._last_payload:
            self._draw()

    def _draw(self) -> None:
        payload = self._last_payload
        border = "=" * self._width
        lines = [
            "",
            border,
            self._color('TITLE', f"📖 TUTORIAL  {payload.progress_label}  {payload.title}"),
        ]
        if not self._minimized:
            lines.append("-" * self._width)
            message = self.format_message(payload.message)
            lines.append(self._color('TEXT', message))
            if payload.feedback:
                lines.append("")
                lines.append(self._color('FEEDBACK', payload.feedback))
            lines.append("-" * self._width)
            lines.append(self._color('HINT', self.format_hint(payload.hint)))
        lines.append(border)
        self._stream.write("\n".join(lines) + "\n")
        self._stream.flush()
