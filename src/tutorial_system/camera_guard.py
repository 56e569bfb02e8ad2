"""
Non-interruption guard for step camera directives
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from tutorial_system.game_context import GameContext

DEFAULT_VELOCITY_EPSILON_SQ = 1e-3


class CameraGuard:
    """
    Decides whether a step's camera directive may run on step entry.

    A directive is suppressed while the player is planning a burn (game paused
    with a non-trivial pending velocity adjustment) or during the cooldown
    after a collision or an applied burn. Evaluated once per step entry,
    never continuously.
    """

    def __init__(self, velocity_epsilon_sq: float = DEFAULT_VELOCITY_EPSILON_SQ, logger=None):
        """
        Args:
            velocity_epsilon_sq: Squared velocity-adjustment magnitude above which
                the player counts as mid-maneuver
            logger: Optional ClassLogger for suppression messages
        """
        self.velocity_epsilon_sq = velocity_epsilon_sq
        self._logger = logger

    def is_adjusting_velocity(self, ctx: 'GameContext') -> bool:
        adjustment = ctx.velocity_adjustment
        return bool(
            ctx.is_paused
            and adjustment is not None
            and adjustment.length_sq() > self.velocity_epsilon_sq
        )

    @staticmethod
    def had_recent_collision(ctx: 'GameContext') -> bool:
        return ctx.recent_collision_time > 0

    def suppression_reason(self, ctx: 'GameContext') -> Optional[str]:
        """
        Returns:
            Why camera directives are blocked right now, or None if allowed
        """
        if self.is_adjusting_velocity(ctx):
            return f"velocity adjustment in progress (|dv|²={ctx.velocity_adjustment.length_sq():.4f})"
        if self.had_recent_collision(ctx):
            return f"collision cooldown ({ctx.recent_collision_time:.2f}s left)"
        return None

    def allows_camera_setup(self, ctx: 'GameContext') -> bool:
        reason = self.suppression_reason(ctx)
        if reason and self._logger:
            self._logger.debug(f"Camera directive suppressed: {reason}")
        return reason is None
