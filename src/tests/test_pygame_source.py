import pygame

from input_system import InputKind
from input_system.pygame_source import PygameInputSource


def test_translates_queued_events(monkeypatch, logger):
    queued = [
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN),
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_4),
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_UP),
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LSHIFT),
        pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=1),
        pygame.event.Event(pygame.QUIT),
    ]
    monkeypatch.setattr(pygame.event, "get", lambda: queued)

    source = PygameInputSource(logger=logger)
    source._initialized = True
    events = source.read_events()

    assert [e.code for e in events] == ["Enter", "Digit4", "ArrowUp", "Wheel", "Quit"]
    assert events[3].wheel_delta == -1
    assert events[4].kind is InputKind.QUIT


def test_read_before_setup_returns_nothing(logger):
    assert PygameInputSource(logger=logger).read_events() == []


def test_pygame_errors_are_logged_not_raised(monkeypatch, logger):
    def broken():
        raise pygame.error("video system not initialized")

    monkeypatch.setattr(pygame.event, "get", broken)
    source = PygameInputSource(logger=logger)
    source._initialized = True
    assert source.read_events() == []
