import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from hybridLogger import HybridLogger
from render_system import IRenderSink
from tutorial_system import (
    GameContext, SimulatedGameHost, TutorialConfig, TutorialController,
    TutorialInputObserver, build_orbital_tutorial
)


class FakeClock:
    """Manually advanced time source (seconds)"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


class RecordingRenderSink(IRenderSink):
    """Keeps every payload and visibility change for assertions"""

    def __init__(self):
        self.payloads = []
        self.visibility = []
        self.minimized = []

    @property
    def last(self):
        return self.payloads[-1] if self.payloads else None

    @property
    def visible(self) -> bool:
        return bool(self.visibility) and self.visibility[-1]

    def render(self, payload) -> None:
        self.payloads.append(payload)

    def set_visible(self, visible: bool) -> None:
        self.visibility.append(visible)

    def set_minimized(self, minimized: bool) -> None:
        self.minimized.append(minimized)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def hybrid_logger(tmp_path):
    main_logger = HybridLogger("TutorialTests", log_dir=str(tmp_path / "logs"), console=False)
    yield main_logger
    main_logger.cleanup()


@pytest.fixture
def logger(hybrid_logger):
    return hybrid_logger.get_class_logger("Test", logging.DEBUG)


@pytest.fixture
def sink():
    return RecordingRenderSink()


@pytest.fixture
def context():
    return GameContext.with_default_scene()


@pytest.fixture
def config():
    return TutorialConfig()


@pytest.fixture
def controller(context, sink, logger, config, clock):
    return TutorialController(
        registry=build_orbital_tutorial(),
        context=context,
        render_sink=sink,
        logger=logger,
        config=config,
        clock=clock
    )


@pytest.fixture
def observer(controller, logger):
    return TutorialInputObserver(controller, logger)


@pytest.fixture
def host(context, logger):
    return SimulatedGameHost(context, logger)


def advance(controller, clock, ms: float, frame_ms: float = 16.0) -> None:
    """Tick the controller in frame-sized steps until ms have passed"""
    elapsed = 0.0
    while elapsed < ms:
        clock.advance_ms(frame_ms)
        elapsed += frame_ms
        controller.tick(frame_ms / 1000.0)


def goto_step(controller, step_id: str) -> None:
    """Start the tutorial and jump straight to a step"""
    controller.start()
    controller.enter_step(controller.registry.index_of(step_id))
