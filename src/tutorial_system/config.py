"""
Tutorial system configuration
"""

from dataclasses import dataclass, field
from typing import Tuple

INPUT_SOURCES = ("keyboard", "pygame", "scripted")


@dataclass
class InputConfig:
    """Input source configuration"""
    source: str = "keyboard"
    window_size: Tuple[int, int] = (480, 120)  # pygame event window


@dataclass
class TutorialConfig:
    """Main tutorial system configuration"""

    input_config: InputConfig = field(default_factory=InputConfig)

    # Timing configuration
    frame_duration_ms: float = 16.67       # ~60 FPS
    transition_delay_ms: int = 500         # Debounce between completion and next step
    feedback_duration_ms: int = 2500       # How long a feedback line stays visible
    skip_delay_ms: int = 1000              # Delay between [TAB] and the actual skip

    # Camera guard
    velocity_epsilon_sq: float = 1e-3      # Squared magnitude counted as "planning a burn"

    # Monitoring
    stall_reminder_ms: int = 30000         # Debug reminder while a step waits for input
    memory_log_interval_ms: int = 60000

    # Simulated host
    collision_cooldown_s: float = 2.0      # Camera protection after applying a burn

    # Computed properties
    @property
    def target_fps(self) -> float:
        """Target FPS derived from frame duration"""
        return 1000.0 / self.frame_duration_ms

    def validate(self) -> None:
        """Basic validation of configuration"""
        if self.frame_duration_ms <= 0:
            raise ValueError("Frame duration must be positive")

        if self.transition_delay_ms < 0:
            raise ValueError(f"Transition delay must not be negative, got {self.transition_delay_ms}")

        if self.feedback_duration_ms <= 0:
            raise ValueError(f"Feedback duration must be positive, got {self.feedback_duration_ms}")

        if self.skip_delay_ms < 0:
            raise ValueError(f"Skip delay must not be negative, got {self.skip_delay_ms}")

        if self.velocity_epsilon_sq < 0:
            raise ValueError(f"Velocity epsilon must not be negative, got {self.velocity_epsilon_sq}")

        if self.collision_cooldown_s < 0:
            raise ValueError(f"Collision cooldown must not be negative, got {self.collision_cooldown_s}")

        if self.input_config.source not in INPUT_SOURCES:
            raise ValueError(
                f"Unknown input source {self.input_config.source!r} (expected one of {', '.join(INPUT_SOURCES)})"
            )

        width, height = self.input_config.window_size
        if width <= 0 or height <= 0:
            raise ValueError(f"Window size must be positive, got {width}x{height}")
