"""
Simulation - owns the tree, the attractors and the scratch influence buffer,
and advances them one step at a time.

Each step runs attraction -> growth -> kill. Growth ends when the iteration
budget runs out, when every attractor has been consumed, or when nothing has
died or grown for stagnation_limit consecutive steps.
"""

from typing import Callable, List, Optional
import numpy as np

from .attractor import AttractorSet
from .config import SimulationConfig, SpawnShape
from .influence import InfluenceBuffer
from .phases import attraction_phase, growth_phase, kill_phase
from .profiling import profiler, profile_block
from .tree import Tree
from .types import NodeId
from .vector import Vector2D


def sample_region(
    shape: SpawnShape,
    center: Vector2D,
    extents: Vector2D,
    count: int,
    rng: np.random.Generator
) -> AttractorSet:
    """Attractors sampled in the named shape; extents are radii for ovals, half extents otherwise."""
    if shape == 'oval':
        return AttractorSet.random_in_oval(center, extents, count, rng)
    if shape == 'rect':
        return AttractorSet.random_in_rect(center, extents, count, rng)
    if shape == 'square':
        half = max(extents.x, extents.y)
        return AttractorSet.random_in_rect(center, Vector2D(half, half), count, rng)
    raise ValueError(f"unknown spawn shape {shape!r}")


class Simulation:
    def __init__(self, config: SimulationConfig, rng: Optional[np.random.Generator] = None):
        self.config = config
        self.growth = config.growth_config()
        self.rng = rng if rng is not None else np.random.default_rng(config.random_seed)
        self.tree: Tree = Tree.empty()
        self.attractors = AttractorSet()
        self.acc = InfluenceBuffer.with_len(0)
        self.iteration = 0
        self.last_new_ids: List[NodeId] = []
        self._stagnation_counter = 0

        if config.profile:
            profiler.enable()

        self.reset()

    def reset(self):
        """Fresh root and a newly sampled attractor cloud; keeps the config."""
        cfg = self.config
        self.tree = Tree(Vector2D(*cfg.root_pos), cfg.root_radius)
        self.attractors = sample_region(
            cfg.attractor_region,
            Vector2D(*cfg.region_center),
            Vector2D(*cfg.region_extents),
            cfg.num_attractors,
            self.rng,
        )
        self.acc = InfluenceBuffer.with_len(len(self.tree))
        self.last_new_ids = []
        self.iteration = 0
        self._stagnation_counter = 0

    def clear(self):
        """Blank canvas: no nodes, no attractors."""
        self.tree = Tree.empty()
        self.attractors = AttractorSet()
        self.acc = InfluenceBuffer.with_len(0)
        self.last_new_ids = []
        self._stagnation_counter = 0

    # ==================== SPAWNING ====================
    def spawn_root(self, position: Vector2D, radius: Optional[float] = None) -> NodeId:
        radius = self.config.root_radius if radius is None else radius
        node_id = self.tree.add_free_node(Vector2D.coerce(position), radius)
        self.last_new_ids = [node_id]
        return node_id

    def spawn_attractors(self, center: Vector2D, shape: SpawnShape = 'oval') -> int:
        """Add a cluster of config.spawn_attractors around center; returns how many were added."""
        cfg = self.config
        extents = cfg.spawn_oval_radii if shape == 'oval' else cfg.spawn_rect_half_extents
        new_set = sample_region(
            shape, Vector2D.coerce(center), Vector2D(*extents), cfg.spawn_attractors, self.rng
        )
        self.attractors.extend(new_set)
        return len(new_set)

    # ==================== STEPPING ====================
    @property
    def alive_count(self) -> int:
        return self.attractors.alive_count

    @property
    def is_finished(self) -> bool:
        return (
            self.alive_count == 0
            or self._stagnation_counter >= self.config.stagnation_limit
        )

    def step(self) -> List[NodeId]:
        """Advance by one step. Returns the ids of the nodes created by it."""
        with profile_block('Simulation.step'):
            alive_before = self.alive_count

            attraction_phase(self.tree, self.attractors, self.growth, self.acc)
            new_ids = growth_phase(self.tree, self.acc, self.growth)
            kill_phase(self.tree, self.attractors, self.growth)

        if new_ids or self.alive_count != alive_before:
            self._stagnation_counter = 0
        else:
            self._stagnation_counter += 1

        self.last_new_ids = new_ids
        self.iteration += 1
        return new_ids

    def grow(self, callback: Optional[Callable[['Simulation', int], None]] = None) -> int:
        """
        Run the full growth loop until completion.
        Optional callback is called after each iteration with (simulation, iteration).
        Returns the total number of iterations.
        """
        print(f"Starting growth with {self.alive_count} attractors and {len(self.tree)} nodes...")

        while self.iteration < self.config.max_iterations and not self.is_finished:
            self.step()

            if callback:
                callback(self, self.iteration)

            if self.config.log_interval and self.iteration % self.config.log_interval == 0:
                print(f"  Iteration {self.iteration}: {len(self.tree)} nodes, "
                      f"{self.alive_count} attractors remaining")

        if self._stagnation_counter >= self.config.stagnation_limit:
            print(f"Growth stopped due to stagnation "
                  f"(nothing grew or died for {self.config.stagnation_limit} iterations)")
        print(f"Growth complete after {self.iteration} iterations")
        print(f"  Final nodes: {len(self.tree)}")
        print(f"  Remaining attractors: {self.alive_count}")

        return self.iteration
