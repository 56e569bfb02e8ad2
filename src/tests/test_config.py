import pytest

from tutorial_system import InputConfig, TutorialConfig


def test_defaults_are_valid():
    config = TutorialConfig()
    config.validate()
    assert config.transition_delay_ms == 500
    assert config.skip_delay_ms == 1000
    assert config.target_fps == pytest.approx(60, abs=0.1)


@pytest.mark.parametrize("field, value", [
    ("frame_duration_ms", 0),
    ("transition_delay_ms", -1),
    ("feedback_duration_ms", 0),
    ("skip_delay_ms", -5),
    ("velocity_epsilon_sq", -0.1),
    ("collision_cooldown_s", -1.0),
])
def test_invalid_values_rejected(field, value):
    config = TutorialConfig(**{field: value})
    with pytest.raises(ValueError):
        config.validate()


def test_unknown_input_source_rejected():
    config = TutorialConfig(input_config=InputConfig(source="joystick"))
    with pytest.raises(ValueError, match="joystick"):
        config.validate()


def test_window_size_must_be_positive():
    config = TutorialConfig(input_config=InputConfig(source="pygame", window_size=(0, 100)))
    with pytest.raises(ValueError, match="Window size"):
        config.validate()
