import io

from render_system import CONTINUE_HINT, ConsoleRenderSink, RenderPayload


def make_payload(**overrides):
    values = dict(title="YOUR TARGET: THE MOON", message="There it is: the **Moon**.",
                  hint="Press [5] to focus on the Moon", step_index=6, step_count=13)
    values.update(overrides)
    return RenderPayload(**values)


def test_hidden_sink_draws_nothing():
    stream = io.StringIO()
    sink = ConsoleRenderSink(stream=stream, use_colors=False)
    sink.render(make_payload())
    assert stream.getvalue() == ""


def test_becoming_visible_draws_last_payload():
    stream = io.StringIO()
    sink = ConsoleRenderSink(stream=stream, use_colors=False)
    sink.render(make_payload())
    sink.set_visible(True)

    output = stream.getvalue()
    assert "Step 7/13" in output
    assert "YOUR TARGET: THE MOON" in output
    assert "There it is: the Moon." in output
    assert "**" not in output


def test_continue_hint_advertises_skip():
    stream = io.StringIO()
    sink = ConsoleRenderSink(stream=stream, use_colors=False)
    sink.set_visible(True)
    sink.render(make_payload(hint=CONTINUE_HINT, feedback="✓ Moon targeted!"))

    output = stream.getvalue()
    assert "Press [ENTER] to continue\nPress [TAB] to skip" in output
    assert "✓ Moon targeted!" in output


def test_minimized_shows_title_only():
    stream = io.StringIO()
    sink = ConsoleRenderSink(stream=stream, use_colors=False)
    sink.set_visible(True)
    sink.set_minimized(True)
    sink.render(make_payload())

    last_block = stream.getvalue().split("\n\n")[-1]
    assert "YOUR TARGET: THE MOON" in last_block
    assert "There it is" not in last_block


def test_colors_highlight_bold_markers():
    sink = ConsoleRenderSink(stream=io.StringIO(), use_colors=True)
    formatted = sink.format_message("the **Moon**")
    assert "**" not in formatted
    assert "\033[1;91mMoon" in formatted
