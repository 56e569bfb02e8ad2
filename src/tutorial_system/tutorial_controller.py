"""
Tutorial step controller - the step state machine
"""

import time
from typing import Callable, Optional, TYPE_CHECKING

from render_system import CONTINUE_HINT, RenderPayload
from utils import DelayedAction, DelayedActionScheduler, OnceInMs

from .actions import ActionToken, ActionTracker, Token
from .camera_guard import CameraGuard
from .config import TutorialConfig

if TYPE_CHECKING:
    from render_system.interfaces import IRenderSink
    from tutorial_system.game_context import GameContext
    from tutorial_system.steps import StepRegistry, TutorialStep
    from hybridLogger import ClassLogger

SKIP_FEEDBACK = "🚀 Skipping tutorial - Good luck, genius!"


class TutorialController:
    """
    Drives the tutorial through its registry, one step at a time.

    Responsibilities:
    - Track the current step and its lifecycle flags
    - Evaluate the active step's completion predicate once per tick
    - Debounce transitions (exactly one per satisfied step)
    - Run camera directives on step entry unless the camera guard objects
    - Push title/message/hint/feedback to the render sink

    All state changes happen on the caller's thread. Delayed work (the
    transition debounce, feedback expiry, delayed skip) is polled at the
    start of tick(), and start()/end() cancel whatever is still pending.
    """

    def __init__(self,
                 registry: 'StepRegistry',
                 context: 'GameContext',
                 render_sink: 'IRenderSink',
                 logger: 'ClassLogger',
                 config: Optional[TutorialConfig] = None,
                 camera_guard: Optional[CameraGuard] = None,
                 clock: Callable[[], float] = time.time):
        """
        Initialize the controller (inactive until start()).

        Args:
            registry: Ordered steps
            context: Shared game state passed to every step
            render_sink: Presentation target
            logger: ClassLogger for transitions and recognitions
            config: Timing configuration (defaults if omitted)
            camera_guard: Guard for camera directives (built from config if omitted)
            clock: Time source in seconds
        """
        self.registry = registry
        self.context = context
        self.logger = logger
        self.config = config or TutorialConfig()
        self.camera_guard = camera_guard or CameraGuard(
            velocity_epsilon_sq=self.config.velocity_epsilon_sq,
            logger=logger
        )
        self.tracker = ActionTracker()
        self._sink = render_sink
        self._clock = clock

        # Tutorial state
        self.current_step_index: int = 0
        self.is_active: bool = False
        self.is_paused: bool = False
        self.is_transitioning: bool = False
        self.step_completed: bool = False
        self.is_minimized: bool = False
        self.step_started_at: float = 0.0

        # Displayed text that can change within a step
        self._hint: str = ""
        self._feedback: str = ""

        # Deferred work
        self._scheduler = DelayedActionScheduler(clock=clock)
        self._pending_transition: Optional[DelayedAction] = None
        self._feedback_expiry: Optional[DelayedAction] = None
        self._pending_skip: Optional[DelayedAction] = None
        self._ticking = False

        self._stall_monitor = OnceInMs(self.config.stall_reminder_ms, clock=clock)

        self.logger.info(f"TutorialController initialized: {len(registry)} steps, "
                         f"{self.config.transition_delay_ms}ms transition delay")

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def step_count(self) -> int:
        return len(self.registry)

    @property
    def current_step(self) -> Optional['TutorialStep']:
        return self.registry.get(self.current_step_index)

    @property
    def current_step_id(self) -> Optional[str]:
        step = self.current_step
        return step.step_id if step else None

    @property
    def hint(self) -> str:
        return self._hint

    @property
    def feedback(self) -> str:
        return self._feedback

    @property
    def has_pending_transition(self) -> bool:
        return self._pending_transition is not None and self._pending_transition.pending

    def seconds_on_step(self) -> float:
        return self._clock() - self.step_started_at

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def start(self) -> None:
        """Reset to step 0 and activate"""
        self._cancel_pending()
        self.current_step_index = 0
        self.tracker.clear_all()
        self.is_active = True
        self.is_paused = False
        self.is_transitioning = False
        self._sink.set_visible(True)

        self.logger.info("🎓 Tutorial started")
        self.enter_step(0)

    def end(self) -> None:
        """Deactivate and hide. Any pending transition is superseded."""
        self._cancel_pending()
        was_active = self.is_active
        self.is_active = False
        self.is_transitioning = False
        self._sink.set_visible(False)

        if was_active:
            self.logger.info(f"✅ Tutorial ended on step {self.current_step_index + 1}/{self.step_count}")

    def skip(self) -> None:
        """Finish immediately regardless of the current step"""
        self.tracker.record(ActionToken.COMPLETED_TUTORIAL)
        self.context.tutorial_mode = False
        self.logger.info(f"⏭ Tutorial skipped at step '{self.current_step_id}'")
        self.end()

    def request_skip(self) -> None:
        """Announce the skip, then skip after the configured delay"""
        if not self.is_active:
            return
        if self._pending_skip is not None and self._pending_skip.pending:
            return
        self.show_feedback(SKIP_FEEDBACK)
        self._pending_skip = self._scheduler.schedule(self.config.skip_delay_ms, self.skip, name="skip")

    def pause(self) -> None:
        """Hide the panel without touching step progress (e.g. menu opened)"""
        self.is_paused = True
        self._sink.set_visible(False)

    def resume(self) -> None:
        if self.is_active:
            self.is_paused = False
            self._sink.set_visible(True)

    def toggle_pause(self) -> None:
        if self.is_paused:
            self.resume()
        else:
            self.pause()

    def toggle_minimize(self) -> None:
        self.is_minimized = not self.is_minimized
        self._sink.set_minimized(self.is_minimized)
        self.logger.debug("📦 Tutorial minimized" if self.is_minimized else "📖 Tutorial expanded")

    # ------------------------------------------------------------------ #
    # Frame update
    # ------------------------------------------------------------------ #

    def tick(self, delta_time: float) -> None:
        """
        Per-frame update.

        Fires due delayed actions, then checks the active step. A satisfied
        step schedules exactly one transition; later ticks are no-ops until
        it has run. Re-entrant calls are ignored.

        Args:
            delta_time: Seconds since the previous frame
        """
        if self._ticking:
            return
        self._ticking = True
        try:
            self._scheduler.poll()

            if not self.is_active or self.is_paused or self.is_transitioning:
                return

            step = self.current_step
            if step is None:
                return

            if step.check_completion(self.context, self.tracker):
                self._begin_transition(step)
            elif self._stall_monitor.should_execute():
                self.logger.debug(f"Step '{step.step_id}' still waiting for input "
                                  f"({self.seconds_on_step():.0f}s)")
        finally:
            self._ticking = False

    def _begin_transition(self, step: 'TutorialStep') -> None:
        self.is_transitioning = True
        self.logger.info(f"Step '{step.step_id}' complete after {self.seconds_on_step():.1f}s")

        step.on_complete(self.context)

        next_index = self.current_step_index + 1
        self._pending_transition = self._scheduler.schedule(
            self.config.transition_delay_ms,
            lambda: self._finish_transition(next_index),
            name=f"transition->{next_index}"
        )

    def _finish_transition(self, next_index: int) -> None:
        self._pending_transition = None
        self.enter_step(next_index)
        self.is_transitioning = False

    def enter_step(self, index: int) -> None:
        """
        Make `index` the active step; past the end this ends the tutorial.

        Step-scoped actions are cleared before anything else can observe the
        new step.
        """
        step = self.registry.get(index)
        if step is None:
            self.end()
            return

        self.current_step_index = index
        self.step_started_at = self._clock()
        self.step_completed = False
        self.tracker.clear_step_scoped()
        self._clear_feedback()
        self._hint = step.hint

        self.logger.info(f"📖 Tutorial Step {index + 1}/{self.step_count}: {step.step_id}")

        if step.has_camera_setup and self.camera_guard.allows_camera_setup(self.context):
            step.camera_setup(self.context)

        self._stall_monitor.restart()
        self._render()

    # ------------------------------------------------------------------ #
    # Called by input observers
    # ------------------------------------------------------------------ #

    def mark_step_completed(self, action: Token, feedback: str) -> bool:
        """
        Record the current step's own action and switch to "awaiting confirm".

        Returns:
            False if the step was already completed (nothing changes)
        """
        if not self.is_active or self.step_completed:
            return False
        self.tracker.record(action)
        self.step_completed = True
        self.logger.info(f"Recognized '{action}' on step '{self.current_step_id}'")
        self.show_feedback(feedback)
        self.update_hint(CONTINUE_HINT)
        return True

    def record_action(self, action: Token) -> None:
        if self.tracker.record(action):
            self.logger.debug(f"Action recorded: {action}")

    def show_feedback(self, message: str) -> None:
        """Show a one-line notification that expires on its own"""
        if self._feedback_expiry is not None:
            self._feedback_expiry.cancel()
        self._feedback = message
        self._feedback_expiry = self._scheduler.schedule(
            self.config.feedback_duration_ms, self._expire_feedback, name="feedback-expiry"
        )
        self._render()

    def update_hint(self, hint: str) -> None:
        self._hint = hint
        self._render()

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _expire_feedback(self) -> None:
        self._feedback_expiry = None
        self._feedback = ""
        self._render()

    def _clear_feedback(self) -> None:
        if self._feedback_expiry is not None:
            self._feedback_expiry.cancel()
            self._feedback_expiry = None
        self._feedback = ""

    def _cancel_pending(self) -> None:
        self._scheduler.cancel_all()
        self._pending_transition = None
        self._feedback_expiry = None
        self._pending_skip = None

    def _render(self) -> None:
        step = self.current_step
        if step is None or not self.is_active:
            return
        self._sink.render(RenderPayload(
            title=step.title,
            message=step.get_message(self.context),
            hint=self._hint,
            feedback=self._feedback,
            step_index=self.current_step_index,
            step_count=self.step_count
        ))
