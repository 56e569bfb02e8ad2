"""
Tutorial System - Step state machine for the orbital mechanics onboarding flow

This module provides the ordered step registry, action tracking, the
transition controller with its camera guard, and the frame loop that
hosts them.
"""

from .actions import ActionToken, ActionTracker, PERSISTENT_ACTIONS, STEP_SCOPED_ACTIONS
from .camera_guard import CameraGuard
from .config import TutorialConfig, InputConfig
from .game_context import GameContext, SceneObject, Vector3
from .game_host import SimulatedGameHost
from .input_observer import TutorialInputObserver
from .steps import TutorialStep, KeyActionRule, StepRegistry, build_orbital_tutorial
from .tutorial_controller import TutorialController
from .tutorial_manager import TutorialManager

__all__ = [
    # Actions
    "ActionToken",
    "ActionTracker",
    "PERSISTENT_ACTIONS",
    "STEP_SCOPED_ACTIONS",
    # Steps
    "TutorialStep",
    "KeyActionRule",
    "StepRegistry",
    "build_orbital_tutorial",
    # Core
    "CameraGuard",
    "TutorialController",
    "TutorialInputObserver",
    "TutorialManager",
    # Game state
    "GameContext",
    "SceneObject",
    "Vector3",
    "SimulatedGameHost",
    # Configuration
    "TutorialConfig",
    "InputConfig"
]
