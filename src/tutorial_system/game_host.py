"""
Simulated game host - the game's own input handling over GameContext
"""

from typing import Dict, Optional, Tuple, TYPE_CHECKING

from input_system import InputEvent, InputKind
from .game_context import GameContext, SceneObject

if TYPE_CHECKING:
    from hybridLogger import ClassLogger

MIN_CAMERA_DISTANCE = 5.0
MAX_CAMERA_DISTANCE = 50000.0
WHEEL_NOTCH = 100.0                  # Pixel delta of one wheel notch

COLLISION_LOCK_S = 1.0               # Camera lock after an impact

# Velocity planning keys -> (axis, sign)
VELOCITY_KEYS: Dict[str, Tuple[str, int]] = {
    "ArrowUp": ("z", -1),
    "ArrowDown": ("z", 1),
    "ArrowLeft": ("x", -1),
    "ArrowRight": ("x", 1),
    "PageUp": ("y", 1),
    "PageDown": ("y", -1),
}

# Focus keys -> (context attribute, camera distance)
FOCUS_KEYS: Dict[str, Tuple[str, float]] = {
    "Digit4": ("earth_body", 40),
    "Digit5": ("moon_body", 10),
    "Digit9": ("spaceship", 20),
}

CHECKPOINT_KEY = "KeyK"
COLLISION_KEY = "KeyX"


class SimulatedGameHost:
    """
    Stand-in for the game's input manager.

    Mutates the shared context the way the game does, so tutorial predicates
    and the camera guard see realistic state:
    - [P] toggles the simulation pause (pausing clears the planned burn)
    - Arrows / PageUp / PageDown plan a burn while paused
    - [Backspace] resets the planned burn, [ENTER] applies it and resumes
    - Number keys, [C], [Z], [H] and the wheel drive the camera
    - [K] collects the Moon checkpoint, [X] simulates a collision
    """

    def __init__(self,
                 context: GameContext,
                 logger: 'ClassLogger',
                 collision_cooldown_s: float = 2.0,
                 delta_v_step: float = 0.5):
        self.context = context
        self.logger = logger
        self.collision_cooldown_s = collision_cooldown_s
        self.delta_v_step = delta_v_step
        self.burns_applied = 0

    def handle_event(self, event: InputEvent) -> bool:
        """
        Apply one input event to the context.

        Returns:
            True if the event changed game state
        """
        if event.kind == InputKind.QUIT:
            return False

        if event.kind == InputKind.WHEEL:
            self._zoom(event.wheel_delta)
            return True

        code = event.code
        ctx = self.context

        if code == "KeyP":
            self.toggle_pause()
            return True

        if ctx.is_paused and ctx.spaceship is not None:
            if code in VELOCITY_KEYS:
                axis, sign = VELOCITY_KEYS[code]
                self._adjust_velocity(axis, sign * self.delta_v_step)
                return True
            if code == "Backspace":
                ctx.velocity_adjustment.set(0, 0, 0)
                self.logger.debug("Velocity adjustment reset")
                return True
            if code == "Enter":
                self.apply_velocity_change()
                return True

        if code in FOCUS_KEYS:
            attr, distance = FOCUS_KEYS[code]
            return self._focus(getattr(ctx, attr), distance)

        if code == "KeyC":
            ctx.camera_distance = 100
            if ctx.spaceship:
                ctx.follow(ctx.spaceship)
            self.logger.debug("Camera focused on spaceship")
            return True

        if code == "KeyZ":
            ctx.camera_distance = 5000
            self.logger.debug("Camera zoomed out")
            return True

        if code == "KeyH":
            ctx.camera_look_at_point.set(0, 0, 0)
            ctx.camera_follow_target = None
            ctx.camera_distance = 20000
            self.logger.debug("Camera looking at the Sun (center)")
            return True

        if code == CHECKPOINT_KEY:
            self.collect_checkpoint()
            return True

        if code == COLLISION_KEY:
            self.register_collision()
            return True

        return False

    def update(self, delta_time: float) -> None:
        """Per-frame decay of the collision cooldown"""
        ctx = self.context
        if ctx.recent_collision_time > 0:
            ctx.recent_collision_time = max(0.0, ctx.recent_collision_time - delta_time)

    def toggle_pause(self) -> None:
        ctx = self.context
        ctx.is_paused = not ctx.is_paused
        if ctx.is_paused:
            ctx.velocity_adjustment.set(0, 0, 0)
            self.logger.info("⏸ PAUSED - arrow keys adjust velocity, [ENTER] applies")
        else:
            self.logger.info("▶ RESUMED")

    def apply_velocity_change(self) -> None:
        """Apply the planned burn, resume, and protect the camera for a moment"""
        ctx = self.context
        adjustment = ctx.velocity_adjustment
        if adjustment.length_sq() > 0:
            self.burns_applied += 1
            self.logger.info(f"✓ Applied ΔV {adjustment} (|ΔV|={adjustment.length():.3f})")

        ctx.is_paused = False
        adjustment.set(0, 0, 0)
        ctx.recent_collision_time = max(ctx.recent_collision_time, self.collision_cooldown_s)

    def collect_checkpoint(self) -> None:
        if not self.context.tutorial_completed:
            self.context.tutorial_completed = True
            self.logger.info("🏁 Moon checkpoint reached")

    def register_collision(self) -> None:
        self.context.recent_collision_time = COLLISION_LOCK_S
        self.logger.warning("💥 Collision - camera locked")

    def _adjust_velocity(self, axis: str, amount: float) -> None:
        ctx = self.context
        adjustment = ctx.velocity_adjustment
        setattr(adjustment, axis, getattr(adjustment, axis) + amount)

        if ctx.camera_follow_target is not ctx.spaceship:
            ctx.camera_follow_target = ctx.spaceship
        self.logger.debug(f"ΔV adjustment: {adjustment} (|ΔV|={adjustment.length():.3f})")

    def _focus(self, body: Optional[SceneObject], distance: float) -> bool:
        if body is None:
            return False
        self.context.follow(body, distance=distance)
        self.logger.debug(f"Camera focused on {body.name} ({distance:.0f} units)")
        return True

    def _zoom(self, wheel_delta: int) -> None:
        ctx = self.context
        speed = max(1.0, ctx.camera_distance * 0.001)
        distance = ctx.camera_distance + wheel_delta * WHEEL_NOTCH * speed
        ctx.camera_distance = max(MIN_CAMERA_DISTANCE, min(MAX_CAMERA_DISTANCE, distance))
        self.logger.debug(f"Camera distance: {ctx.camera_distance:.0f}")
