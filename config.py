"""
config.py — Tunable Options
============================
Every named option the layout generator and the traversal controller
understand, as frozen dataclasses.  Nothing here is global: the app builds
one AppConfig at start-up and hands the pieces to whoever needs them.

    from config import AppConfig, LayoutConfig, TraversalConfig

Region values (centre, radius band, bounds) are stored in absolute canvas
units.  `LayoutConfig.for_window()` derives them from window ratios so the
graph always sits in the right-hand part of the canvas, leaving the left
strip free for the queue and info panels.
"""

import math
import os
from dataclasses import dataclass, field, fields, replace
from typing import Optional


# ---------------------------------------------------------------------------
# Window ratios — region placement relative to the canvas
# ---------------------------------------------------------------------------
CENTER_X_RATIO     = 0.65
CENTER_Y_RATIO     = 0.5
MIN_RADIUS_RATIO   = 0.15   # × height
MAX_RADIUS_RATIO   = 0.22   # × height
LEFT_RATIO         = 0.35
RIGHT_RATIO        = 0.95
TOP_RATIO          = 0.15
BOTTOM_RATIO       = 0.85

DEFAULT_WIDTH      = 1600
DEFAULT_HEIGHT     = 900
NODE_RADIUS        = 40.0
MIN_NODE_DISTANCE_MULTIPLIER = 3.0


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class LayoutConfig:
    """
    Attributes:
        min_nodes, max_nodes      : Inclusive range the target count is drawn from.
        center_x, center_y        : Where node 0 goes; also the ring centre.
        min_radius, max_radius    : Ring placement band around the centre.
        left, right, top, bottom  : Placement region; candidates are clamped into it.
        min_node_distance         : Base separation (feeds jitter + grid spacing).
        safety_margin             : Multiplier applied to the base for validity checks.
        grid_spacing_multiplier   : Grid cell = min_node_distance × this.
        random_offset_multiplier  : Ring jitter range = min_node_distance × this.
        ring/grid/random_attempts : Per-strategy retry budget for each node.
        node_radius               : Drawn circle radius, also the hit-test radius.
    """

    min_nodes:                int   = 6
    max_nodes:                int   = 12
    center_x:                 float = DEFAULT_WIDTH * CENTER_X_RATIO
    center_y:                 float = DEFAULT_HEIGHT * CENTER_Y_RATIO
    min_radius:               float = DEFAULT_HEIGHT * MIN_RADIUS_RATIO
    max_radius:               float = DEFAULT_HEIGHT * MAX_RADIUS_RATIO
    left:                     float = DEFAULT_WIDTH * LEFT_RATIO
    right:                    float = DEFAULT_WIDTH * RIGHT_RATIO
    top:                      float = DEFAULT_HEIGHT * TOP_RATIO
    bottom:                   float = DEFAULT_HEIGHT * BOTTOM_RATIO
    min_node_distance:        float = NODE_RADIUS * MIN_NODE_DISTANCE_MULTIPLIER
    safety_margin:            float = 1.1
    grid_spacing_multiplier:  float = 1.5
    random_offset_multiplier: float = 0.3
    ring_attempts:            int   = 50
    grid_attempts:            int   = 50
    random_attempts:          int   = 50
    node_radius:              float = NODE_RADIUS

    def __post_init__(self):
        if self.min_nodes < 1:
            raise ValueError(f"min_nodes must be >= 1, got {self.min_nodes}")
        if self.min_nodes > self.max_nodes:
            raise ValueError(
                f"min_nodes ({self.min_nodes}) is larger than max_nodes ({self.max_nodes})"
            )
        if self.left > self.right or self.top > self.bottom:
            raise ValueError("placement bounds are inverted")
        if not (self.left <= self.center_x <= self.right and self.top <= self.center_y <= self.bottom):
            raise ValueError(
                f"centre ({self.center_x}, {self.center_y}) lies outside the placement bounds"
            )
        if not 0 <= self.min_radius <= self.max_radius:
            raise ValueError(
                f"radius band [{self.min_radius}, {self.max_radius}] is invalid"
            )
        if self.max_radius <= 0:
            raise ValueError("max_radius must be positive")
        for name in ("min_node_distance", "safety_margin", "grid_spacing_multiplier", "node_radius"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.random_offset_multiplier < 0:
            raise ValueError("random_offset_multiplier must not be negative")
        for name in ("ring_attempts", "grid_attempts", "random_attempts"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    # -- derived values --
    @property
    def safe_min_distance(self) -> float:
        return self.min_node_distance * self.safety_margin

    @property
    def random_offset_range(self) -> float:
        return self.min_node_distance * self.random_offset_multiplier

    @property
    def grid_spacing(self) -> float:
        return self.min_node_distance * self.grid_spacing_multiplier

    @property
    def max_connect_distance(self) -> float:
        return self.max_radius * 2.0

    # -- constructors --
    @classmethod
    def for_window(cls, width: float, height: float, **overrides) -> "LayoutConfig":
        """Region derived from the window ratios; anything else via overrides."""
        region = dict(
            center_x=width * CENTER_X_RATIO,
            center_y=height * CENTER_Y_RATIO,
            min_radius=height * MIN_RADIUS_RATIO,
            max_radius=height * MAX_RADIUS_RATIO,
            left=width * LEFT_RATIO,
            right=width * RIGHT_RATIO,
            top=height * TOP_RATIO,
            bottom=height * BOTTOM_RATIO,
        )
        region.update(overrides)
        return cls(**region)

    def with_overrides(self, **options) -> "LayoutConfig":
        """Validated copy.  Unknown option names raise ValueError."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(f"Unknown layout option(s): {', '.join(unknown)}")
        return replace(self, **options)


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TraversalConfig:
    step_delay: float = 1.0     # seconds between auto-steps
    auto_step:  bool  = False

    def __post_init__(self):
        if self.step_delay < 0 or math.isnan(self.step_delay):
            raise ValueError(f"step_delay must be >= 0, got {self.step_delay}")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AppConfig:
    width:     int             = DEFAULT_WIDTH
    height:    int             = DEFAULT_HEIGHT
    layout:    LayoutConfig    = field(default_factory=LayoutConfig)
    traversal: TraversalConfig = field(default_factory=TraversalConfig)
    seed:      Optional[int]   = None
    log_level: str             = "INFO"
    host:      str             = "0.0.0.0"
    port:      int             = 5000

    @classmethod
    def for_window(cls, width: int, height: int, **kwargs) -> "AppConfig":
        return cls(width=width, height=height, layout=LayoutConfig.for_window(width, height), **kwargs)

    @classmethod
    def from_env(cls, environ=None) -> "AppConfig":
        """
        Reads BFSVIZ_WIDTH, BFSVIZ_HEIGHT, BFSVIZ_SEED, BFSVIZ_STEP_DELAY,
        BFSVIZ_LOG_LEVEL, BFSVIZ_HOST and BFSVIZ_PORT.  Missing keys fall back
        to the defaults; unparsable numbers raise ValueError.
        """
        env = os.environ if environ is None else environ
        width  = int(env.get("BFSVIZ_WIDTH", DEFAULT_WIDTH))
        height = int(env.get("BFSVIZ_HEIGHT", DEFAULT_HEIGHT))
        seed   = env.get("BFSVIZ_SEED")
        delay  = float(env.get("BFSVIZ_STEP_DELAY", TraversalConfig.step_delay))
        return cls.for_window(
            width,
            height,
            traversal=TraversalConfig(step_delay=delay),
            seed=int(seed) if seed not in (None, "") else None,
            log_level=env.get("BFSVIZ_LOG_LEVEL", "INFO").upper(),
            host=env.get("BFSVIZ_HOST", "0.0.0.0"),
            port=int(env.get("BFSVIZ_PORT", 5000)),
        )
