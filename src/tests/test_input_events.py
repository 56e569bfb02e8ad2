import io
import os
import pty
import select

import pytest

from input_system import (
    InputEvent, InputKind, KeyboardInputSource, ScriptedInputSource, decode_terminal_input
)


def codes(data: str):
    return [event.code for event in decode_terminal_input(data)]


def test_key_codes_validated():
    assert InputEvent.key("Digit4").is_key
    assert InputEvent.key("ArrowUp").code == "ArrowUp"
    with pytest.raises(ValueError):
        InputEvent.key("Digit10")
    with pytest.raises(ValueError):
        InputEvent.key("keyw")
    with pytest.raises(TypeError):
        InputEvent("key", "Enter")


def test_wheel_and_quit_events():
    wheel = InputEvent.wheel(-1)
    assert wheel.kind is InputKind.WHEEL
    assert wheel.code == "Wheel"
    assert wheel.wheel_delta == -1
    assert not wheel.is_key
    assert InputEvent.quit().kind is InputKind.QUIT
    with pytest.raises(ValueError):
        InputEvent(InputKind.WHEEL, "Enter")


def test_decode_plain_keys():
    assert codes("\r\t 4w") == ["Enter", "Tab", "Space", "Digit4", "KeyW"]
    assert codes("\x7f") == ["Backspace"]


def test_decode_escape_sequences():
    assert codes("\x1b[A\x1b[D\x1b[5~\x1b[6~") == ["ArrowUp", "ArrowLeft", "PageUp", "PageDown"]
    assert codes("\x1b") == ["Escape"]
    assert codes("\x1bp") == ["Escape", "KeyP"]
    assert codes("\x1bOA\x1bOB") == ["ArrowUp", "ArrowDown"]


@pytest.mark.parametrize("sequence", [
    "\x1b[15~",     # F5
    "\x1b[F",       # End
    "\x1b[3~",      # Delete
    "\x1b[1;5A",    # Ctrl+Up
    "\x1b[Z",       # Shift+Tab
    "\x1bOP",       # F1
])
def test_decode_drops_unknown_escape_sequences(sequence):
    assert codes(sequence) == []
    assert codes(sequence + "q") == ["KeyQ"]


def test_decode_wheel_and_quit():
    events = decode_terminal_input("+-\x03")
    assert [e.kind for e in events] == [InputKind.WHEEL, InputKind.WHEEL, InputKind.QUIT]
    assert [e.wheel_delta for e in events[:2]] == [-1, 1]


def test_decode_drops_unknown_characters():
    assert codes("é!?") == []


def test_scripted_source_frames():
    source = ScriptedInputSource([
        InputEvent.key("Enter"),
        None,
        [InputEvent.key("Digit4"), InputEvent.key("Enter")],
    ], quit_when_exhausted=True)
    source.setup()

    assert [e.code for e in source.read_events()] == ["Enter"]
    assert source.read_events() == []
    assert [e.code for e in source.read_events()] == ["Digit4", "Enter"]
    assert source.exhausted
    assert source.read_events()[0].kind is InputKind.QUIT
    assert source.frames_read == 4


def test_scripted_source_push():
    source = ScriptedInputSource()
    source.push(InputEvent.key("KeyP"), InputEvent.key("ArrowUp"))
    source.push_idle(2)
    assert len(source.read_events()) == 2
    assert source.read_events() == []
    assert source.read_events() == []
    assert source.read_events() == []


def test_keyboard_source_requires_terminal(logger):
    source = KeyboardInputSource(logger=logger, stream=io.StringIO("k"))
    with pytest.raises(RuntimeError):
        source.setup()
    assert not source.active
    assert source.read_events() == []
    source.cleanup()


@pytest.fixture
def terminal():
    """(writer fd, reader stream) pair backed by a pseudo terminal"""
    master, slave = pty.openpty()
    stream = os.fdopen(slave, "r")
    yield master, stream
    stream.close()
    os.close(master)


def wait_readable(stream):
    select.select([stream], [], [], 1.0)


def test_keyboard_source_reads_whole_escape_sequence(terminal, logger):
    master, stream = terminal
    source = KeyboardInputSource(logger=logger, stream=stream)
    source.setup()

    os.write(master, b"\x1b[A")
    wait_readable(stream)
    first = [e.code for e in source.read_events()]
    second = [e.code for e in source.read_events()]
    source.cleanup()

    assert first == ["ArrowUp"]
    assert second == []


def test_keyboard_source_mixed_keys_and_utf8(terminal, logger):
    master, stream = terminal
    source = KeyboardInputSource(logger=logger, stream=stream)
    source.setup()

    os.write(master, "4é\x1b[6~\r".encode("utf-8"))
    wait_readable(stream)
    events = source.read_events()
    source.cleanup()

    assert [e.code for e in events] == ["Digit4", "PageDown", "Enter"]
    assert not source.active
