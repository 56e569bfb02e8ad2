"""
Tutorial manager - orchestrates input, the simulated game and the tutorial controller
"""

import time
from typing import Callable, Optional, TYPE_CHECKING

from input_system import InputKind
from utils import OnceInMs

try:
    import psutil
    PSUTIL_AVAILABLE = True
except ImportError:
    PSUTIL_AVAILABLE = False

if TYPE_CHECKING:
    from input_system.interfaces import IInputSource
    from tutorial_system.tutorial_controller import TutorialController
    from tutorial_system.input_observer import TutorialInputObserver
    from tutorial_system.game_host import SimulatedGameHost
    from hybridLogger import ClassLogger


class TutorialManager:
    """
    Frame loop that drives the whole tutorial.

    Responsibilities:
    - Read input events once per frame
    - Dispatch each event to the tutorial observer, then the game host
    - Advance the game host and tick the controller
    - Maintain consistent frame timing

    The loop ends on a quit event or once the tutorial is no longer active.
    """

    def __init__(self,
                 input_source: 'IInputSource',
                 controller: 'TutorialController',
                 observer: 'TutorialInputObserver',
                 game_host: 'SimulatedGameHost',
                 logger: 'ClassLogger',
                 frame_duration_ms: float = 16.67,
                 memory_log_interval_ms: int = 60000,
                 clock: Callable[[], float] = time.time,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Initialize the tutorial manager.

        Args:
            input_source: Source of input events
            controller: Tutorial step controller
            observer: Translates events into tutorial actions
            game_host: Simulated game input handling
            logger: Logger for debugging and monitoring
            frame_duration_ms: Target frame duration in milliseconds
            memory_log_interval_ms: Interval between memory usage log lines
            clock: Time source in seconds
            sleep: Sleep function used for frame limiting
        """
        self.input_source = input_source
        self.controller = controller
        self.observer = observer
        self.game_host = game_host
        self.logger = logger
        self.target_frame_duration = frame_duration_ms / 1000.0
        self.running = False
        self.frames = 0

        self._clock = clock
        self._sleep = sleep
        self._last_frame: Optional[float] = None

        # Memory monitoring using OnceInMs
        self._memory_monitor = OnceInMs(memory_log_interval_ms, clock=clock)
        self._process = psutil.Process() if PSUTIL_AVAILABLE else None

        self.logger.info(f"TutorialManager initialized: {frame_duration_ms}ms frame duration")

    def run_loop(self) -> None:
        """
        Run the tutorial with automatic frame duration limiting.

        Sets up the input source, starts the tutorial and runs until it ends.
        """
        self.logger.info(f"Starting tutorial loop with {int(self.target_frame_duration * 1000)}ms frame duration")

        self.input_source.setup()
        self.running = True
        self.controller.start()

        try:
            while self.running:
                frame_start = self._clock()

                self.update()

                # Frame duration limiting
                frame_duration = self._clock() - frame_start
                sleep_time = self.target_frame_duration - frame_duration

                if sleep_time > 0:
                    self._sleep(sleep_time)

        except KeyboardInterrupt:
            self.logger.info("Tutorial stopped by user (Ctrl+C)")
            self.logger.flush()
        except Exception as e:
            self.logger.error(f"Tutorial loop error: {e}", exception=e)
            self.logger.flush()
            raise
        finally:
            self.stop()

    def update(self) -> None:
        """
        One frame: input, game host, controller.
        """
        now = self._clock()
        delta_time = 0.0 if self._last_frame is None else now - self._last_frame
        self._last_frame = now
        self.frames += 1

        if self._memory_monitor.should_execute():
            self._log_memory_usage()

        # 1. Input - tutorial first so it sees the state the key was pressed in
        for event in self.input_source.read_events():
            if event.kind == InputKind.QUIT:
                self.logger.info("Quit requested")
                self.running = False
                return
            self.observer.handle_event(event)
            self.game_host.handle_event(event)

        # 2. Simulation
        self.game_host.update(delta_time)

        # 3. Tutorial
        self.controller.tick(delta_time)

        if not self.controller.is_active:
            self.logger.info("Tutorial finished")
            self.running = False

    def stop(self) -> None:
        """Stop the loop and release the input source."""
        self.running = False
        self.controller.end()
        self.input_source.cleanup()
        self.logger.info(f"Tutorial stopped after {self.frames} frames")

    def _log_memory_usage(self) -> None:
        """Log current memory and CPU usage (process and system)"""
        if not PSUTIL_AVAILABLE:
            return

        try:
            mem_info = self._process.memory_info()
            process_mb = mem_info.rss / 1024 / 1024
            process_cpu_percent = self._process.cpu_percent(interval=None)

            sys_mem = psutil.virtual_memory()
            sys_total_mb = sys_mem.total / 1024 / 1024
            sys_used_mb = sys_mem.used / 1024 / 1024
            sys_cpu_percent = psutil.cpu_percent(interval=None)

            self.logger.info(
                f"💾 Memory - Process: {process_mb:.1f}MB | "
                f"System: {sys_used_mb:.0f}/{sys_total_mb:.0f}MB ({sys_mem.percent:.1f}%) | "
                f"⚙️  CPU - Process: {process_cpu_percent:.1f}% | System: {sys_cpu_percent:.1f}%"
            )
        except psutil.Error as e:
            self.logger.warning(f"Failed to log system usage: {e}")
