from conftest import advance, goto_step

from render_system import CONTINUE_HINT
from tutorial_system import ActionToken
from tutorial_system.tutorial_controller import SKIP_FEEDBACK


def test_start_resets_to_first_step(controller, sink, context):
    controller.tracker.record(ActionToken.VIEWED_EARTH)
    controller.tracker.record(ActionToken.COMPLETED_TUTORIAL)
    controller.start()

    assert controller.is_active
    assert controller.current_step_index == 0
    assert not controller.is_transitioning
    assert not controller.is_paused
    assert not controller.step_completed
    assert len(controller.tracker) == 0
    assert sink.visible
    assert sink.last.title == "WELCOME TO ORBITAL MECHANICS"
    assert sink.last.feedback == ""
    assert sink.last.progress_label == "Step 1/13"
    assert context.camera_distance == 25000


def test_tick_is_noop_while_inactive(controller, clock):
    controller.tracker.record(ActionToken.PRESSED_ENTER_WELCOME)
    advance(controller, clock, 1000)
    assert not controller.is_active
    assert controller.current_step_index == 0


def test_exactly_one_transition_per_satisfied_step(controller, clock, sink):
    controller.start()
    controller.tracker.record(ActionToken.PRESSED_ENTER_WELCOME)

    controller.tick(0.016)
    assert controller.is_transitioning
    assert controller.has_pending_transition

    # Predicate still true, but no second transition is scheduled
    for _ in range(10):
        controller.tick(0.016)
    assert controller.current_step_index == 0

    advance(controller, clock, 520)
    assert controller.current_step_id == "physics_panel"
    assert not controller.is_transitioning

    advance(controller, clock, 2000)
    assert controller.current_step_id == "physics_panel"
    titles = [p.title for p in sink.payloads]
    assert titles.count("PHYSICS SIMULATION CONTROLS") == 1


def test_transition_waits_for_debounce(controller, clock):
    controller.start()
    controller.tracker.record(ActionToken.PRESSED_ENTER_WELCOME)
    controller.tick(0.016)

    clock.advance_ms(499)
    controller.tick(0.016)
    assert controller.current_step_index == 0

    clock.advance_ms(2)
    controller.tick(0.016)
    assert controller.current_step_index == 1


def test_step_scoped_actions_cleared_on_entry(controller):
    goto_step(controller, "camera_numbers")
    controller.tracker.record(ActionToken.VIEWED_EARTH)
    controller.tracker.record(ActionToken.CONFIRMED)
    controller.tracker.record(ActionToken.COMPLETED_TUTORIAL)

    controller.enter_step(controller.current_step_index + 1)

    assert controller.tracker.snapshot() == frozenset({"completedTutorial"})
    assert not controller.step_completed


def test_confirm_from_previous_step_does_not_leak(controller, clock):
    goto_step(controller, "physics_panel")
    controller.tracker.record(ActionToken.CONFIRMED)
    advance(controller, clock, 600)

    assert controller.current_step_id == "camera_numbers"
    advance(controller, clock, 2000)
    assert controller.current_step_id == "camera_numbers"


def test_enter_step_past_end_ends_tutorial(controller, sink):
    controller.start()
    controller.enter_step(13)
    assert not controller.is_active
    assert not sink.visible


def test_camera_setup_suppressed_while_planning(controller, context):
    controller.start()
    context.is_paused = True
    context.velocity_adjustment.set(0, 0, 1.5)
    context.camera_distance = 777

    controller.enter_step(controller.registry.index_of("view_spaceship"))

    assert context.camera_distance == 777
    assert context.camera_follow_target is None


def test_camera_setup_suppressed_after_collision(controller, context):
    controller.start()
    context.recent_collision_time = 1.0
    context.camera_distance = 3000

    controller.enter_step(controller.registry.index_of("complete"))

    assert context.camera_distance == 3000


def test_camera_setup_runs_when_guard_allows(controller, context):
    controller.start()
    controller.enter_step(controller.registry.index_of("view_spaceship"))
    assert context.camera_follow_target is context.spaceship
    assert context.camera_distance == 20


def test_skip_records_completion_and_ends(controller, context, sink):
    controller.start()
    controller.skip()

    assert not controller.is_active
    assert controller.tracker.has(ActionToken.COMPLETED_TUTORIAL)
    assert context.tutorial_mode is False
    assert not sink.visible


def test_skip_cancels_pending_transition(controller, clock, sink):
    controller.start()
    controller.tracker.record(ActionToken.PRESSED_ENTER_WELCOME)
    controller.tick(0.016)
    assert controller.has_pending_transition

    controller.skip()
    rendered = len(sink.payloads)
    advance(controller, clock, 2000)

    assert not controller.is_active
    assert controller.current_step_index == 0
    assert len(sink.payloads) == rendered


def test_end_cancels_pending_transition(controller, clock):
    controller.start()
    controller.tracker.record(ActionToken.PRESSED_ENTER_WELCOME)
    controller.tick(0.016)
    controller.end()

    advance(controller, clock, 1000)
    assert controller.current_step_index == 0
    assert not controller.is_transitioning


def test_request_skip_announces_then_skips(controller, clock, sink):
    controller.start()
    controller.request_skip()
    assert sink.last.feedback == SKIP_FEEDBACK
    assert controller.is_active

    advance(controller, clock, 900)
    assert controller.is_active

    advance(controller, clock, 200)
    assert not controller.is_active
    assert controller.tracker.has(ActionToken.COMPLETED_TUTORIAL)


def test_request_skip_twice_schedules_once(controller, clock, context):
    controller.start()
    controller.request_skip()
    controller.request_skip()
    advance(controller, clock, 1100)
    assert not controller.is_active


def test_pause_freezes_progress_without_losing_it(controller, clock, sink):
    controller.start()
    controller.pause()
    assert not sink.visible

    controller.tracker.record(ActionToken.PRESSED_ENTER_WELCOME)
    advance(controller, clock, 1000)
    assert controller.current_step_index == 0

    controller.resume()
    assert sink.visible
    advance(controller, clock, 600)
    assert controller.current_step_index == 1


def test_resume_requires_active(controller, sink):
    controller.pause()
    controller.resume()
    assert controller.is_paused


def test_mark_step_completed_once(controller, sink):
    goto_step(controller, "camera_numbers")

    assert controller.mark_step_completed(ActionToken.VIEWED_EARTH, "✓ Well done! Earth in view.")
    assert controller.step_completed
    assert controller.hint == CONTINUE_HINT
    assert sink.last.feedback == "✓ Well done! Earth in view."

    assert not controller.mark_step_completed(ActionToken.VIEWED_EARTH, "again")
    assert sink.last.feedback == "✓ Well done! Earth in view."


def test_feedback_expires(controller, clock, sink):
    controller.start()
    controller.show_feedback("hello")
    assert controller.feedback == "hello"

    advance(controller, clock, 2600)
    assert controller.feedback == ""
    assert sink.last.feedback == ""


def test_feedback_cleared_on_step_entry(controller):
    controller.start()
    controller.show_feedback("hello")
    controller.enter_step(1)
    assert controller.feedback == ""


def test_toggle_minimize(controller, sink):
    controller.start()
    controller.toggle_minimize()
    controller.toggle_minimize()
    assert sink.minimized == [True, False]
    assert not controller.is_minimized


def test_on_complete_runs_before_next_step(controller, context, clock):
    goto_step(controller, "complete")
    controller.tracker.record(ActionToken.COMPLETED_TUTORIAL)
    controller.tick(0.016)
    assert context.tutorial_mode is False
    assert controller.is_active

    advance(controller, clock, 600)
    assert not controller.is_active


def test_reentrant_tick_is_ignored(controller, clock, monkeypatch):
    controller.start()
    step = controller.current_step
    calls = []

    def check(ctx, tracker):
        calls.append(True)
        controller.tick(0.016)
        return False

    monkeypatch.setattr(step, "check_completion", check)
    controller.tick(0.016)
    assert len(calls) == 1


def test_restart_after_end(controller, clock):
    goto_step(controller, "view_moon")
    controller.end()
    controller.start()
    assert controller.current_step_index == 0
    assert controller.is_active
