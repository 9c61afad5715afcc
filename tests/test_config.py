"""Tests for GridConfig validation and change notification."""

import pytest

from liquidwarp.config import PARAM_RANGES, ConfigError, GridConfig


def test_defaults():
    """Defaults match the shipped tuning."""
    cfg = GridConfig()

    assert cfg.grid_size == 15
    assert cfg.area_of_effect == 0.13
    assert cfg.strength == 0.15
    assert cfg.relaxation == 0.9
    cfg.validate()


def test_config_error_is_value_error():
    """ConfigError can be caught as ValueError."""
    assert issubclass(ConfigError, ValueError)


@pytest.mark.parametrize("name,value", [
    ("grid_size", 0),
    ("grid_size", 501),
    ("area_of_effect", -0.1),
    ("area_of_effect", 2.5),
    ("strength", 3.0),
    ("relaxation", 1.01),
])
def test_validate_rejects_out_of_range(name, value):
    """Each tunable is bounded by PARAM_RANGES."""
    cfg = GridConfig(**{name: value})

    with pytest.raises(ConfigError):
        cfg.validate()


def test_validate_rejects_fractional_grid_size():
    """Grid size must be an integer."""
    with pytest.raises(ConfigError):
        GridConfig(grid_size=12.5).validate()


def test_ranges_cover_all_tunables():
    """Every tunable has a (lo, hi, step) entry."""
    assert set(PARAM_RANGES) == {"grid_size", "area_of_effect", "strength", "relaxation"}


def test_set_grid_size_notifies_listeners():
    """Listeners get the new size once per change."""
    cfg = GridConfig()
    seen = []
    cfg.on_grid_size_changed(seen.append)

    cfg.set_grid_size(40)
    cfg.set_grid_size(40)
    cfg.set_grid_size(3)

    assert seen == [40, 3]
    assert cfg.grid_size == 3


def test_set_grid_size_rejects_invalid_without_notifying():
    """A rejected size leaves config and listeners untouched."""
    cfg = GridConfig()
    seen = []
    cfg.on_grid_size_changed(seen.append)

    with pytest.raises(ConfigError):
        cfg.set_grid_size(0)
    with pytest.raises(ConfigError):
        cfg.set_grid_size(True)

    assert cfg.grid_size == 15
    assert seen == []


def test_listeners_do_not_affect_equality():
    """Registered callbacks are not part of the config's value."""
    a = GridConfig()
    a.on_grid_size_changed(lambda n: None)

    assert a == GridConfig()
