"""
Configuration for the growth engine and the simulation driver.

GrowthConfig holds the per-step parameters read by the phase functions.
SimulationConfig holds everything a driver needs to set up and run a
simulation, and is the single source of truth loaded from JSON.
"""

from dataclasses import dataclass, field, asdict
from typing import Tuple, Optional, Literal
from pathlib import Path
import json
import math
import operator

from .vector import Vector2D

SpawnShape = Literal['oval', 'rect', 'square']
SPAWN_SHAPES = ('oval', 'rect', 'square')


@dataclass
class GrowthConfig:
    # Rank of the node used by each phase: 0 = closest, 1 = second closest, ...
    attract_from_kn: int = 0
    kill_from_kn: int = 0

    influence_radius: float = 60.0
    kill_radius: float = 5.0
    step_len: float = 2.0

    # Added to every growth direction before renormalizing (gravity, wind, light)
    tropism: Vector2D = field(default_factory=Vector2D.zero)

    def __post_init__(self):
        self.tropism = Vector2D.coerce(self.tropism)
        for name in ('attract_from_kn', 'kill_from_kn'):
            value = getattr(self, name)
            if isinstance(value, bool):
                raise TypeError(f"{name} must be an integer, got {value!r}")
            try:
                rank = operator.index(value)
            except TypeError:
                raise TypeError(f"{name} must be an integer, got {value!r}") from None
            if rank < 0:
                raise ValueError(f"{name} must be non-negative, got {rank}")
            setattr(self, name, rank)
        for name in ('influence_radius', 'kill_radius', 'step_len'):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be finite and non-negative, got {value}")


@dataclass
class SimulationConfig:
    """
    Driver configuration. Growth parameters are flattened here so the JSON
    file stays a single flat object; use growth_config() to get the
    per-step view handed to the phase functions.
    """

    # ==================== GROWTH ====================
    attract_from_kn: int = 0
    kill_from_kn: int = 0
    influence_radius: float = 60.0
    kill_radius: float = 5.0
    step_len: float = 2.0
    tropism: Tuple[float, float] = (0.0, 0.0)

    # ==================== INITIAL STATE ====================
    root_pos: Tuple[float, float] = (0.0, 0.0)
    root_radius: float = 1.0
    num_attractors: int = 1000
    attractor_region: SpawnShape = 'oval'
    region_center: Tuple[float, float] = (0.0, 120.0)
    region_extents: Tuple[float, float] = (100.0, 100.0)  # radii for oval, half extents otherwise

    # ==================== SPAWNING ====================
    spawn_attractors: int = 100
    spawn_rect_half_extents: Tuple[float, float] = (40.0, 40.0)
    spawn_oval_radii: Tuple[float, float] = (40.0, 40.0)

    # ==================== RUN ====================
    max_iterations: int = 500
    stagnation_limit: int = 50  # Stop if nothing dies or grows for this many iterations
    log_interval: int = 50

    # ==================== OUTPUT ====================
    output_dir: str = 'outputs/sca2d'
    animate: bool = False
    show_attractors: bool = True
    profile: bool = False

    random_seed: Optional[int] = None

    def __post_init__(self):
        self.tropism = tuple(self.tropism)
        self.root_pos = tuple(self.root_pos)
        self.region_center = tuple(self.region_center)
        self.region_extents = tuple(self.region_extents)
        self.spawn_rect_half_extents = tuple(self.spawn_rect_half_extents)
        self.spawn_oval_radii = tuple(self.spawn_oval_radii)
        if self.attractor_region not in SPAWN_SHAPES:
            raise ValueError(
                f"attractor_region must be one of {SPAWN_SHAPES}, got {self.attractor_region!r}"
            )
        if self.num_attractors < 0 or self.spawn_attractors < 0:
            raise ValueError("attractor counts must be non-negative")
        # Fail at load time rather than on the first step
        self.growth_config()

    def growth_config(self) -> GrowthConfig:
        return GrowthConfig(
            attract_from_kn=self.attract_from_kn,
            kill_from_kn=self.kill_from_kn,
            influence_radius=self.influence_radius,
            kill_radius=self.kill_radius,
            step_len=self.step_len,
            tropism=Vector2D(*self.tropism),
        )

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    @property
    def tree_image_path(self) -> Path:
        return self.output_path / 'tree.png'

    @property
    def stats_image_path(self) -> Path:
        return self.output_path / 'stats.png'

    @property
    def animation_path(self) -> Path:
        return self.output_path / 'growth.gif'


def load_config(path: str = 'simulation.json') -> SimulationConfig:
    """Load config from JSON file, with defaults for missing fields."""
    config_path = Path(path)
    if not config_path.exists():
        return SimulationConfig()

    with open(config_path, 'r') as f:
        data = json.load(f)

    return SimulationConfig(**data)


def save_config(config: SimulationConfig, path: str = 'simulation.json'):
    """Save config to JSON file."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = asdict(config)

    with open(config_path, 'w') as f:
        json.dump(data, f, indent=2)

    print(f"Saved config to {config_path}")
