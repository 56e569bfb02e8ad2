#!/usr/bin/env python3
"""
Orbital Mechanics Tutorial

Runs the Earth-to-Moon onboarding flow in a terminal. Keys come from the
terminal itself or from a small pygame window; the tutorial panel is drawn
on the console and a simulated game host stands in for the real game.
"""

import sys
import logging
import signal
import argparse
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from hybridLogger import HybridLogger
from input_system import KeyboardInputSource, ScriptedInputSource, InputEvent
from render_system import ConsoleRenderSink
from tutorial_system import (
    GameContext, SimulatedGameHost, TutorialController, TutorialInputObserver,
    TutorialManager, build_orbital_tutorial
)
from tutorial_system.config import TutorialConfig, InputConfig, INPUT_SOURCES

# Unattended walk through every step (--input scripted)
DEMO_SCRIPT = (
    "Enter",                                # welcome
    "Enter",                                # physics_panel
    "Digit4", "Enter",                      # camera_numbers
    "Digit9", "Enter",                      # view_spaceship
    "Wheel", "Enter",                       # camera_mouse
    "KeyF", "Enter",                        # reference_frames
    "Digit5", "Enter",                      # view_moon
    "KeyW", "Enter",                        # thrust_controls
    "KeyP", "Enter",                        # pause_planning (the game applies an empty burn)
    "KeyP", "ArrowUp", "Enter",             # velocity_adjustment, apply_velocity
    "KeyK",                                 # plan_transfer
    "Enter",                                # complete
)
DEMO_IDLE_FRAMES = 75

# Global logger reference for signal handlers
_global_logger = None


def emergency_flush_and_log(sig=None, frame=None):
    """Emergency handler - flush logs before the process terminates"""
    if _global_logger:
        if sig:
            _global_logger.critical(f"⚠️  SIGNAL RECEIVED: {sig} - Process terminating")
        _global_logger.flush()

    if sig == signal.SIGTERM:
        sys.exit(1)
    if sig == signal.SIGINT:
        raise KeyboardInterrupt


def create_tutorial_config(source: str = "keyboard") -> TutorialConfig:
    """Create default configuration"""
    return TutorialConfig(
        input_config=InputConfig(source=source, window_size=(480, 120)),
        frame_duration_ms=16.67,  # ~60 FPS
        transition_delay_ms=500,
        feedback_duration_ms=2500,
        skip_delay_ms=1000
    )


def create_input_source(config: TutorialConfig, logger):
    """Build the input source named in the configuration"""
    source = config.input_config.source
    if source == "pygame":
        # Imported lazily so terminal-only runs do not initialize pygame
        from input_system.pygame_source import PygameInputSource
        return PygameInputSource(logger=logger, window_size=config.input_config.window_size)
    if source == "scripted":
        # Idle frames after every key let each transition delay elapse
        frames = []
        for code in DEMO_SCRIPT:
            frames.append(InputEvent.wheel(-1) if code == "Wheel" else InputEvent.key(code))
            frames.extend([None] * DEMO_IDLE_FRAMES)
        return ScriptedInputSource(frames, logger=logger, quit_when_exhausted=True)
    return KeyboardInputSource(logger=logger)


def create_tutorial_system(config: TutorialConfig, tutorial_logger) -> TutorialManager:
    """
    Create and wire the complete tutorial system.

    Args:
        config: TutorialConfig instance with all system configuration
        tutorial_logger: ClassLogger instance for logging initialization steps

    Returns:
        TutorialManager: Configured manager ready to run
    """
    config.validate()

    controller_logger = tutorial_logger.create_class_logger("TutorialController", logging.INFO)
    observer_logger = tutorial_logger.create_class_logger("InputObserver", logging.INFO)
    host_logger = tutorial_logger.create_class_logger("GameHost", logging.INFO)
    input_logger = tutorial_logger.create_class_logger("InputSource", logging.INFO)
    manager_logger = tutorial_logger.create_class_logger("TutorialManager", logging.INFO)

    try:
        context = GameContext.with_default_scene()
        registry = build_orbital_tutorial()

        controller = TutorialController(
            registry=registry,
            context=context,
            render_sink=ConsoleRenderSink(),
            logger=controller_logger,
            config=config
        )
        observer = TutorialInputObserver(controller, observer_logger)
        game_host = SimulatedGameHost(
            context,
            host_logger,
            collision_cooldown_s=config.collision_cooldown_s
        )

        manager = TutorialManager(
            input_source=create_input_source(config, input_logger),
            controller=controller,
            observer=observer,
            game_host=game_host,
            logger=manager_logger,
            frame_duration_ms=config.frame_duration_ms,
            memory_log_interval_ms=config.memory_log_interval_ms
        )

        tutorial_logger.info(f"Tutorial system initialized: {len(registry)} steps, "
                             f"input={config.input_config.source}")
        return manager

    except Exception as e:
        tutorial_logger.error(f"Failed to initialize tutorial system: {e}", exception=e)
        raise


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Orbital mechanics tutorial")
    parser.add_argument("--input", choices=INPUT_SOURCES, default="keyboard",
                        help="input source (default: keyboard)")
    parser.add_argument("--log-dir", default="logs", help="directory for log files")
    parser.add_argument("--verbose", action="store_true",
                        help="show info logs on the console (the log file always has them)")
    return parser.parse_args(argv)


def main(argv=None):
    """
    Main function - sets up and runs the tutorial.
    """
    args = parse_args(argv)

    main_logger = HybridLogger(
        "OrbitalTutorial",
        log_dir=args.log_dir,
        console_level=logging.DEBUG if args.verbose else logging.WARNING
    )
    tutorial_logger = main_logger.get_class_logger("Tutorial")

    # Set global logger for signal handlers
    global _global_logger
    _global_logger = tutorial_logger
    signal.signal(signal.SIGTERM, emergency_flush_and_log)
    signal.signal(signal.SIGINT, emergency_flush_and_log)

    tutorial_logger.info("🛰  ORBITAL MECHANICS TUTORIAL")

    config = create_tutorial_config(args.input)
    tutorial_logger.info(f"Timing: {config.frame_duration_ms}ms frame duration ({config.target_fps:.1f} FPS), "
                         f"{config.transition_delay_ms}ms transition delay")

    try:
        manager = create_tutorial_system(config, tutorial_logger)

        tutorial_logger.info("===========================")
        tutorial_logger.info("🚀 Starting tutorial...")

        manager.run_loop()

    except KeyboardInterrupt:
        tutorial_logger.info("⏹️  Tutorial stopped by user")
        tutorial_logger.flush()
    except Exception as e:
        tutorial_logger.error(f"Tutorial system error: {e}", exception=e)
        tutorial_logger.flush()
        raise
    finally:
        tutorial_logger.info("✅ Tutorial shut down")
        tutorial_logger.flush()
        main_logger.cleanup()


if __name__ == "__main__":
    main()
