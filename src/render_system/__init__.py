"""
Render System Package

Presentation sinks for the tutorial panel. Sinks only display what the
controller pushes to them.
"""

from .interfaces import IRenderSink, RenderPayload
from .console_sink import ConsoleRenderSink, CONTINUE_HINT

__all__ = [
    "IRenderSink",
    "RenderPayload",
    "ConsoleRenderSink",
    "CONTINUE_HINT"
]
