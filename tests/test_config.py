"""
Configuration objects and logging setup.
"""

import logging

import pytest

from config import AppConfig, LayoutConfig, TraversalConfig
from logging_config import setup_logging


# =============================================================================
# LAYOUT CONFIG
# =============================================================================

def test_layout_defaults_match_default_window():
    config = LayoutConfig()
    assert config == LayoutConfig.for_window(1600, 900)
    assert config.center_x == pytest.approx(1040.0)
    assert config.center_y == pytest.approx(450.0)
    assert (config.min_nodes, config.max_nodes) == (6, 12)
    assert config.min_node_distance == 120.0


def test_derived_distances():
    config = LayoutConfig()
    assert config.safe_min_distance == pytest.approx(132.0)
    assert config.grid_spacing == pytest.approx(180.0)
    assert config.random_offset_range == pytest.approx(36.0)
    assert config.max_connect_distance == pytest.approx(2 * config.max_radius)


def test_for_window_scales_region():
    config = LayoutConfig.for_window(800, 600, min_nodes=2)
    assert config.center_x == pytest.approx(520.0)
    assert config.left == pytest.approx(280.0)
    assert config.bottom == pytest.approx(510.0)
    assert config.min_nodes == 2


@pytest.mark.parametrize("options", [
    dict(min_nodes=0),
    dict(min_nodes=8, max_nodes=4),
    dict(left=500, right=100),
    dict(top=500, bottom=100),
    dict(min_radius=300, max_radius=100),
    dict(min_radius=0, max_radius=0),
    dict(min_node_distance=0),
    dict(safety_margin=-1),
    dict(random_offset_multiplier=-0.1),
    dict(ring_attempts=-1),
    dict(center_x=0, center_y=0, min_nodes=1, max_nodes=1),
    dict(center_y=10_000),
])
def test_invalid_layouts_are_rejected(options):
    with pytest.raises(ValueError):
        LayoutConfig(**options)


def test_with_overrides():
    base = LayoutConfig()
    small = base.with_overrides(min_nodes=2, max_nodes=3)
    assert (small.min_nodes, small.max_nodes) == (2, 3)
    assert (base.min_nodes, base.max_nodes) == (6, 12)

    with pytest.raises(ValueError, match="colour"):
        base.with_overrides(colour="red")
    with pytest.raises(ValueError):
        base.with_overrides(min_nodes=20)


# =============================================================================
# TRAVERSAL / APP CONFIG
# =============================================================================

def test_traversal_config_validation():
    assert TraversalConfig().step_delay == 1.0
    assert TraversalConfig(step_delay=0).step_delay == 0
    with pytest.raises(ValueError):
        TraversalConfig(step_delay=-0.5)
    with pytest.raises(ValueError):
        TraversalConfig(step_delay=float("nan"))


def test_app_config_from_env():
    config = AppConfig.from_env({
        "BFSVIZ_WIDTH": "800",
        "BFSVIZ_HEIGHT": "600",
        "BFSVIZ_SEED": "42",
        "BFSVIZ_STEP_DELAY": "0.5",
        "BFSVIZ_LOG_LEVEL": "debug",
        "BFSVIZ_PORT": "8080",
    })
    assert (config.width, config.height) == (800, 600)
    assert config.layout == LayoutConfig.for_window(800, 600)
    assert config.seed == 42
    assert config.traversal.step_delay == 0.5
    assert config.log_level == "DEBUG"
    assert config.port == 8080
    assert config.host == "0.0.0.0"


def test_app_config_from_empty_env():
    config = AppConfig.from_env({})
    assert config == AppConfig.for_window(1600, 900)
    assert config.seed is None


def test_app_config_from_env_rejects_garbage():
    with pytest.raises(ValueError):
        AppConfig.from_env({"BFSVIZ_WIDTH": "wide"})


# =============================================================================
# LOGGING
# =============================================================================

def test_setup_logging_writes_to_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    log_file = tmp_path / "viz.log"
    try:
        setup_logging("DEBUG", log_file=str(log_file))
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("engine.traversal").debug("hello from the controller")
        for handler in root.handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "Logging initialized." in text
        assert "engine.traversal - DEBUG - hello from the controller" in text
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
