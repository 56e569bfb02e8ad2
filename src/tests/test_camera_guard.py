from tutorial_system import CameraGuard, GameContext


def test_allows_when_idle():
    guard = CameraGuard()
    ctx = GameContext.with_default_scene()
    assert guard.allows_camera_setup(ctx)
    assert guard.suppression_reason(ctx) is None


def test_blocks_while_planning_a_burn():
    guard = CameraGuard()
    ctx = GameContext.with_default_scene()
    ctx.is_paused = True
    ctx.velocity_adjustment.set(0.5, 0, 0)
    assert not guard.allows_camera_setup(ctx)
    assert "velocity adjustment" in guard.suppression_reason(ctx)


def test_tiny_adjustment_is_not_a_maneuver():
    guard = CameraGuard(velocity_epsilon_sq=1e-3)
    ctx = GameContext.with_default_scene()
    ctx.is_paused = True
    ctx.velocity_adjustment.set(0.01, 0.01, 0)
    assert guard.allows_camera_setup(ctx)


def test_unpaused_adjustment_does_not_block():
    guard = CameraGuard()
    ctx = GameContext.with_default_scene()
    ctx.velocity_adjustment.set(3, 0, 0)
    assert guard.allows_camera_setup(ctx)


def test_blocks_during_collision_cooldown():
    guard = CameraGuard()
    ctx = GameContext.with_default_scene()
    ctx.recent_collision_time = 0.25
    assert not guard.allows_camera_setup(ctx)
    assert "collision" in guard.suppression_reason(ctx)
