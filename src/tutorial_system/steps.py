"""
Tutorial step base class, concrete steps and the step registry
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import FrozenSet, Iterator, Optional, Sequence, Tuple, TYPE_CHECKING

from .actions import ActionToken

if TYPE_CHECKING:
    from tutorial_system.actions import ActionTracker
    from tutorial_system.game_context import GameContext


@dataclass(frozen=True)
class KeyActionRule:
    """
    Recognition rule: while its step is active, any of `keys` records `action`.

    Attributes:
        keys: Key codes that trigger the rule
        action: Token recorded on recognition
        feedback: One-time feedback line shown on recognition
        requires_game_paused: Only recognized while the game is paused
        camera_distance: Camera distance applied on recognition (None = leave alone)
    """
    keys: FrozenSet[str]
    action: ActionToken
    feedback: str
    requires_game_paused: bool = False
    camera_distance: Optional[float] = None

    def matches(self, key_code: str, ctx: 'GameContext') -> bool:
        if key_code not in self.keys:
            return False
        return ctx.is_paused or not self.requires_game_paused


def _keys(*codes: str) -> FrozenSet[str]:
    return frozenset(codes)


class TutorialStep(ABC):
    """
    Abstract base class for all tutorial steps.

    Each step is one instructional unit with its own:
    - Presentation payload (title, message, hint)
    - Camera directive applied on entry (optional)
    - Completion predicate evaluated every frame
    - Key recognition rules active only while the step is current

    Steps are stateless: everything they read or write lives in the
    GameContext and ActionTracker passed in.
    """

    step_id: str = ""
    title: str = ""
    message: str = ""
    hint: str = ""
    action_rules: Tuple[KeyActionRule, ...] = ()
    enter_feedback: Optional[str] = None

    def get_message(self, ctx: 'GameContext') -> str:
        """Message text for the current context (override for dynamic text)"""
        return self.message

    def camera_setup(self, ctx: 'GameContext') -> None:
        """Camera directive run on step entry (override if needed)"""
        pass

    @property
    def has_camera_setup(self) -> bool:
        return type(self).camera_setup is not TutorialStep.camera_setup

    @abstractmethod
    def check_completion(self, ctx: 'GameContext', tracker: 'ActionTracker') -> bool:
        """
        Completion predicate. Must not mutate ctx or tracker.

        Returns:
            True once the step's goal is met
        """
        pass

    def on_complete(self, ctx: 'GameContext') -> None:
        """One-shot side effect when the step is satisfied (override if needed)"""
        pass

    def enter_action(self, ctx: 'GameContext', step_completed: bool) -> Optional[ActionToken]:
        """
        Token the confirm key ([ENTER]) records on this step.

        Default: confirm only after the step's own action was recognized.
        """
        return ActionToken.CONFIRMED if step_completed else None

    def rule_for(self, key_code: str, ctx: 'GameContext') -> Optional[KeyActionRule]:
        for rule in self.action_rules:
            if rule.matches(key_code, ctx):
                return rule
        return None

    @property
    def recognized_actions(self) -> FrozenSet[ActionToken]:
        return frozenset(rule.action for rule in self.action_rules)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.step_id!r})"


class ConfirmStep(TutorialStep):
    """Step that advances once the player confirms with [ENTER]"""

    def check_completion(self, ctx: 'GameContext', tracker: 'ActionTracker') -> bool:
        return tracker.has(ActionToken.CONFIRMED)


class WelcomeStep(TutorialStep):
    """
    Welcome and solar system overview.

    Transitions:
    - [ENTER] -> physics_panel
    """

    step_id = "welcome"
    title = "WELCOME TO ORBITAL MECHANICS"
    message = (
        "You are commanding a spacecraft in our solar system.\n\n"
        "Your mission: **Transfer from Earth orbit to the Moon.**\n\n"
        "But there's a problem: your fuel is **limited**.\n"
        "Direct flight won't work. You'll need to use **gravity** wisely.\n\n"
        "First, let's get familiar with the controls."
    )
    hint = "Press [ENTER] to continue\nPress [TAB] to skip (I'm a genius!)"

    def camera_setup(self, ctx: 'GameContext') -> None:
        # Wide view of the solar system
        ctx.camera_distance = 25000
        ctx.camera_follow_target = None
        ctx.camera_look_at_point.set(0, 0, 0)
        ctx.camera_yaw = 0
        ctx.camera_pitch = math.pi / 4

    def check_completion(self, ctx: 'GameContext', tracker: 'ActionTracker') -> bool:
        return tracker.has(ActionToken.PRESSED_ENTER_WELCOME)

    def enter_action(self, ctx: 'GameContext', step_completed: bool) -> Optional[ActionToken]:
        return ActionToken.PRESSED_ENTER_WELCOME


class PhysicsPanelStep(ConfirmStep):
    """Introduces timescale and substeps. [ENTER] advances directly."""

    step_id = "physics_panel"
    title = "PHYSICS SIMULATION CONTROLS"
    message = (
        "Before we begin, let's learn about the simulation controls.\n\n"
        "Look at the **right side panel** and open **\"Physics\"**.\n\n"
        "**Timescale**: Controls simulation speed\n"
        "• Higher = faster simulation (good for long journeys)\n"
        "• Lower = slower, more precise control\n\n"
        "**Substeps**: Simulation precision per frame\n"
        "• Higher = more accurate physics (use for close approaches)\n"
        "• Lower = faster performance"
    )
    hint = "Open \"Physics\" on the right, then press [ENTER]"

    def camera_setup(self, ctx: 'GameContext') -> None:
        ctx.camera_distance = 25000
        ctx.camera_follow_target = None

    def enter_action(self, ctx: 'GameContext', step_completed: bool) -> Optional[ActionToken]:
        return ActionToken.CONFIRMED


class CameraNumbersStep(ConfirmStep):
    """Number keys focus celestial bodies; [4] (Earth) completes the step."""

    step_id = "camera_numbers"
    title = "NAVIGATION: CELESTIAL BODIES"
    message = (
        "Use **number keys** to view different celestial bodies:\n\n"
        "[1] Sun      [2] Mercury   [3] Venus\n"
        "[4] Earth    [5] Moon      [6] Mars\n"
        "[7] Phobos   [8] Jupiter   [9] Spaceship\n"
        "[0] Halley's Comet\n\n"
        "[H] Return to solar system overview"
    )
    hint = "Try pressing [4] to view Earth"
    action_rules = (
        KeyActionRule(_keys("Digit4"), ActionToken.VIEWED_EARTH,
                      "✓ Well done! Earth in view.", camera_distance=40),
    )


class ViewSpaceshipStep(ConfirmStep):
    """Close-up of the player's spacecraft."""

    step_id = "view_spaceship"
    title = "YOUR SPACECRAFT"
    message = (
        "This is your spacecraft.\n\n"
        "The **red trail** shows where you've been.\n"
        "The **yellow line** (when visible) shows your predicted trajectory.\n\n"
        "Now let's focus on your spacecraft."
    )
    hint = "Press [9] to focus on your spaceship"
    action_rules = (
        KeyActionRule(_keys("Digit9"), ActionToken.VIEWED_SPACESHIP, "✓ Spaceship locked!"),
    )

    def camera_setup(self, ctx: 'GameContext') -> None:
        if ctx.spaceship:
            ctx.follow(ctx.spaceship, distance=20)


class CameraMouseStep(ConfirmStep):
    """Wheel zoom and arrow-key rotation."""

    step_id = "camera_mouse"
    title = "CAMERA CONTROL"
    message = (
        "Control the camera view:\n\n"
        "**Mouse Wheel**: Zoom in/out\n"
        "**Arrow Keys**: Rotate camera angle\n\n"
        "You can also use:\n"
        "[C] Quick zoom to spaceship\n"
        "[Z] Zoom out (wide view)"
    )
    hint = "Try zooming with your mouse wheel"
    action_rules = (
        KeyActionRule(_keys("Wheel"), ActionToken.USED_MOUSE_WHEEL, "✓ Nice! Camera zoom working."),
    )


class ReferenceFramesStep(ConfirmStep):
    """[F] cycles reference frames."""

    step_id = "reference_frames"
    title = "REFERENCE FRAMES"
    message = (
        "In space, motion is relative.\n\n"
        "Press **[F]** to cycle through reference frames:\n"
        "• **Sun Frame** (inertial)\n"
        "• **Earth Frame** (rotating with Earth)\n"
        "• **Moon Frame** (rotating with Moon)\n\n"
        "This helps visualize your motion relative to your target."
    )
    hint = "Press [F] to switch reference frame"
    action_rules = (
        KeyActionRule(_keys("KeyF"), ActionToken.SWITCHED_FRAME,
                      "✓ Well done! Reference frame switched.", camera_distance=20),
    )

    def camera_setup(self, ctx: 'GameContext') -> None:
        if ctx.earth_body:
            ctx.follow(ctx.earth_body, distance=20)


class ViewMoonStep(ConfirmStep):
    """Shows the target: the Moon checkpoint."""

    step_id = "view_moon"
    title = "YOUR TARGET: THE MOON"
    message = (
        "There it is: the **Moon**.\n\n"
        "You'll see a **glowing checkpoint** near the Moon.\n"
        "That's your destination.\n\n"
        "Notice the distance. A direct flight would consume too much fuel.\n"
        "You'll need a more elegant solution."
    )
    hint = "Press [5] to focus on the Moon"
    action_rules = (
        KeyActionRule(_keys("Digit5"), ActionToken.VIEWED_MOON, "✓ Moon targeted!"),
    )


class ThrustControlsStep(ConfirmStep):
    """
    Directional thrusters.

    [9] is recognized here as well as on view_spaceship; only the active step
    consumes it.
    """

    step_id = "thrust_controls"
    title = "THRUST CONTROLS"
    message = (
        "Your spacecraft has directional thrusters:\n\n"
        "**[W]** Forward    **[S]** Backward\n"
        "**[A]** Left       **[D]** Right\n"
        "**[Space]** Up     **[V]** Down\n\n"
        "**[Shift]** Boost (2.5x thrust, higher fuel consumption)\n\n"
        "Watch your **fuel gauge** (top-left panel)."
    )
    hint = "Try pressing [W] to activate thrusters (optional: press [9] for ship view)"
    action_rules = (
        KeyActionRule(_keys("Digit9"), ActionToken.VIEWED_SPACESHIP, "✓ Spaceship locked!"),
        KeyActionRule(_keys("KeyW", "KeyA", "KeyS", "KeyD", "Space", "KeyV"), ActionToken.USED_THRUST,
                      "✓ Thrust engaged! Watch your fuel."),
    )

    def camera_setup(self, ctx: 'GameContext') -> None:
        # Leave the camera alone if the player chose another body (e.g. the Moon)
        if ctx.camera_follow_target is None or ctx.camera_follow_target is ctx.spaceship:
            ctx.camera_distance = 20


class PausePlanningStep(ConfirmStep):
    """[P] pauses the simulation for planning."""

    step_id = "pause_planning"
    title = "ORBITAL PLANNING"
    message = (
        "The **[P]** key is your most important tool.\n\n"
        "Press **[P]** to **PAUSE** the simulation.\n\n"
        "While paused, you can:\n"
        "• View your predicted trajectory (yellow line)\n"
        "• Plan velocity changes without wasting fuel\n"
        "• Adjust your velocity vector using arrow keys\n"
        "• Adjust **Physics Timescale** and **Steps** on the right panel"
    )
    hint = "Press [P] to pause"
    action_rules = (
        KeyActionRule(_keys("KeyP"), ActionToken.PAUSED,
                      "✓ Good! Simulation paused. Yellow line shows your trajectory."),
    )


class VelocityAdjustmentStep(ConfirmStep):
    """Arrow keys plan a velocity change while paused."""

    step_id = "velocity_adjustment"
    title = "PLANNING MODE: VELOCITY ADJUSTMENT"
    message = (
        "Good! The simulation is **PAUSED**.\n\n"
        "While paused, use **arrow keys** to adjust your velocity:\n\n"
        "**[↑]** Increase Z velocity (forward in view)\n"
        "**[↓]** Decrease Z velocity\n"
        "**[←]** Decrease X velocity (left)\n"
        "**[→]** Increase X velocity (right)\n"
        "**[PgUp/PgDn]** Adjust Y velocity (up/down)\n\n"
        "The **yellow line** shows your predicted path.\n"
        "Try adjusting to see how it changes."
    )
    hint = "Use arrow keys to adjust trajectory, then press [ENTER]"
    action_rules = (
        KeyActionRule(_keys("ArrowUp", "ArrowDown", "ArrowLeft", "ArrowRight", "PageUp", "PageDown"),
                      ActionToken.ADJUSTED_VELOCITY, "✓ Excellent! Trajectory adjusted.",
                      requires_game_paused=True),
    )

    def camera_setup(self, ctx: 'GameContext') -> None:
        # Planning happens paused
        if not ctx.is_paused:
            ctx.is_paused = True


class ApplyVelocityStep(TutorialStep):
    """
    Apply the planned burn or resume without it.

    Completes when the burn is applied with [ENTER] while paused, or as soon as
    the game is no longer paused for any reason.
    """

    step_id = "apply_velocity"
    title = "APPLYING VELOCITY CHANGES"
    message = (
        "When you're happy with your planned trajectory:\n\n"
        "Press **[Enter]** to **APPLY** the velocity change\n"
        "Press **[P]** again to **RESUME** without applying\n\n"
        "The velocity adjustment will consume fuel based on the\n"
        "**Tsiolkovsky rocket equation** (realistic physics!)."
    )
    hint = "Press [Enter] to apply, or [P] to resume simulation"
    enter_feedback = "✓ Velocity change applied!"

    def check_completion(self, ctx: 'GameContext', tracker: 'ActionTracker') -> bool:
        return not ctx.is_paused or tracker.has(ActionToken.APPLIED_VELOCITY)

    def enter_action(self, ctx: 'GameContext', step_completed: bool) -> Optional[ActionToken]:
        if step_completed:
            return ActionToken.CONFIRMED
        return ActionToken.APPLIED_VELOCITY if ctx.is_paused else None


class PlanTransferStep(TutorialStep):
    """Free planning until the Moon checkpoint is collected."""

    step_id = "plan_transfer"
    title = "YOUR MISSION: EARTH TO MOON"
    message = (
        "Now it's time to plan your transfer.\n\n"
        "**Strategy:**\n"
        "1. Press [P] to pause\n"
        "2. Adjust velocity to aim toward the Moon\n"
        "3. Use minimal fuel, let gravity do the work\n"
        "4. Press [Enter] to apply the burn\n"
        "5. Coast to the Moon checkpoint\n\n"
        "The **checkpoint** is the glowing octahedron near the Moon.\n\n"
        "Remember: You can pause **[P]** anytime to replan!"
    )
    hint = "Reach the Moon checkpoint to complete the tutorial"

    def camera_setup(self, ctx: 'GameContext') -> None:
        # Keep the player's target, only pull back from extreme zoom-out
        if ctx.camera_distance > 1000:
            ctx.camera_distance = 200

    def check_completion(self, ctx: 'GameContext', tracker: 'ActionTracker') -> bool:
        return ctx.tutorial_completed


class CompleteStep(TutorialStep):
    """Wrap-up. [ENTER] finishes the tutorial and leaves tutorial mode."""

    step_id = "complete"
    title = "READY FOR FREE FLIGHT"
    message = (
        "**TUTORIAL COMPLETE!**\n\n"
        "You've learned the essentials:\n"
        "✓ Camera navigation\n"
        "✓ Reference frames\n"
        "✓ Trajectory planning\n"
        "✓ Orbital mechanics\n\n"
        "The Mars mission is now active!\n\n"
        "**Next Steps:**\n"
        "• Navigate to Mars and maintain orbit for 60 seconds\n"
        "• Press [ESC] to access the menu\n"
        "• Use [F5]/[F9] for quick save/load\n"
        "• Experiment with gravity assists!\n\n"
        "Press [ENTER] when ready to begin free flight."
    )
    hint = "Press [ENTER] to start free flight"

    def camera_setup(self, ctx: 'GameContext') -> None:
        if ctx.spaceship:
            ctx.camera_follow_target = ctx.spaceship
        ctx.camera_distance = 200

    def check_completion(self, ctx: 'GameContext', tracker: 'ActionTracker') -> bool:
        return tracker.has(ActionToken.COMPLETED_TUTORIAL)

    def on_complete(self, ctx: 'GameContext') -> None:
        ctx.tutorial_mode = False

    def enter_action(self, ctx: 'GameContext', step_completed: bool) -> Optional[ActionToken]:
        return ActionToken.COMPLETED_TUTORIAL


class StepRegistry:
    """
    Immutable ordered sequence of tutorial steps.

    get() returns None past the end; the controller treats that as the
    terminal signal rather than an error.
    """

    def __init__(self, steps: Sequence[TutorialStep]):
        self._steps: Tuple[TutorialStep, ...] = tuple(steps)

        seen = set()
        for step in self._steps:
            if not step.step_id:
                raise ValueError(f"{step!r} has no step_id")
            if step.step_id in seen:
                raise ValueError(f"Duplicate step id: {step.step_id!r}")
            seen.add(step.step_id)

    def get(self, index: int) -> Optional[TutorialStep]:
        if 0 <= index < len(self._steps):
            return self._steps[index]
        return None

    def index_of(self, step_id: str) -> int:
        """
        Raises:
            KeyError: If no step has this id
        """
        for index, step in enumerate(self._steps):
            if step.step_id == step_id:
                return index
        raise KeyError(step_id)

    @property
    def step_ids(self) -> Tuple[str, ...]:
        return tuple(step.step_id for step in self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[TutorialStep]:
        return iter(self._steps)


def build_orbital_tutorial() -> StepRegistry:
    """Earth-to-Moon tutorial in play order"""
    return StepRegistry([
        WelcomeStep(),
        PhysicsPanelStep(),
        CameraNumbersStep(),
        ViewSpaceshipStep(),
        CameraMouseStep(),
        ReferenceFramesStep(),
        ViewMoonStep(),
        ThrustControlsStep(),
        PausePlanningStep(),
        VelocityAdjustmentStep(),
        ApplyVelocityStep(),
        PlanTransferStep(),
        CompleteStep(),
    ])
