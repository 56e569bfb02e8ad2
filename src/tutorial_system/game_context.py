"""
Shared game state read and written by tutorial steps
"""

import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Vector3:
    """Minimal mutable 3D vector (camera targets, velocity adjustments)"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def set(self, x: float, y: float, z: float) -> 'Vector3':
        self.x, self.y, self.z = x, y, z
        return self

    def copy_from(self, other: 'Vector3') -> 'Vector3':
        return self.set(other.x, other.y, other.z)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"


@dataclass
class SceneObject:
    """Named object the camera can follow (spaceship, planets)"""
    name: str
    position: Vector3 = field(default_factory=Vector3)


@dataclass
class GameContext:
    """
    Explicit shared game state handed to every step.

    Owned by the game; the tutorial reads it in completion predicates and
    writes camera fields in camera directives. Scene objects may be None
    while the scene is still loading.
    """
    # Simulation
    is_paused: bool = False
    velocity_adjustment: Vector3 = field(default_factory=Vector3)
    recent_collision_time: float = 0.0     # Seconds of camera protection left

    # Camera
    camera_distance: float = 25000.0
    camera_follow_target: Optional[SceneObject] = None
    camera_look_at_point: Vector3 = field(default_factory=Vector3)
    camera_yaw: float = 0.0
    camera_pitch: float = math.pi / 4

    # Scene
    spaceship: Optional[SceneObject] = None
    earth_body: Optional[SceneObject] = None
    moon_body: Optional[SceneObject] = None

    # Mission flags
    tutorial_completed: bool = False       # Moon checkpoint collected
    tutorial_mode: bool = True

    def follow(self, target: SceneObject, distance: Optional[float] = None) -> None:
        """Point the camera at target and keep following it"""
        self.camera_follow_target = target
        self.camera_look_at_point.copy_from(target.position)
        if distance is not None:
            self.camera_distance = distance

    @property
    def follow_target_name(self) -> str:
        return self.camera_follow_target.name if self.camera_follow_target else "none"

    @classmethod
    def with_default_scene(cls) -> 'GameContext':
        """Context populated with the Earth-Moon scene used by the tutorial"""
        return cls(
            spaceship=SceneObject("Spaceship", Vector3(6.5, 0.0, 0.0)),
            earth_body=SceneObject("Earth", Vector3(0.0, 0.0, 0.0)),
            moon_body=SceneObject("Moon", Vector3(384.4, 0.0, 0.0)),
        )
