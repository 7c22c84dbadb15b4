"""
The three phases that advance the simulation by one step.

    attraction_phase -> growth_phase -> kill_phase

Attraction rebuilds the influence buffer from the living attractors, growth
spends that snapshot to append new nodes, and kill consumes attractors that
the grown tree has reached. The phases are stateless; callers must run them
in this order every step. None of them use randomness.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from .attractor import Attractor, AttractorSet
from .config import GrowthConfig
from .influence import InfluenceBuffer
from .profiling import profile
from .tree import Tree
from .types import NodeId
from .vector import Vector2D

# Candidates closer than this to an existing sibling are dropped
CHILD_MERGE_DISTANCE = 0.1


def _pull(tree: Tree, attractor: Attractor, cfg: GrowthConfig) -> Optional[Tuple[NodeId, Vector2D]]:
    """Node the attractor pulls on and the unit direction toward it, if in range."""
    hit = tree.find_kth_nearest_nodes(attractor.position, cfg.attract_from_kn)
    if hit is None:
        return None
    node_id, d2 = hit
    if d2 >= cfg.influence_radius * cfg.influence_radius:
        return None
    direction = (attractor.position - tree.node(node_id).position).normalize()
    return node_id, direction


def _accumulate(tree: Tree, attractors: List[Attractor], cfg: GrowthConfig, acc: InfluenceBuffer):
    for a in attractors:
        pull = _pull(tree, a, cfg)
        if pull is None:
            a.owner = None
            continue
        node_id, direction = pull
        acc.add(node_id, direction)
        a.owner = node_id


@profile
def attraction_phase(tree: Tree, attractors: AttractorSet, cfg: GrowthConfig, acc: InfluenceBuffer):
    """
    Accumulate the pull of every living attractor onto its rank-k node.

    The buffer is resized and cleared to the tree's node count first. An
    attractor strictly inside influence_radius of its node adds the unit
    vector node->attractor to that node's slot and becomes owned by it;
    otherwise its owner is reset to None. Dead attractors are left untouched,
    and so is every attractor when the tree has no nodes.
    """
    acc.ensure_len(len(tree))
    if len(tree) == 0:
        return
    _accumulate(tree, attractors.living, cfg, acc)


@profile
def parallel_attraction_phase(
    tree: Tree,
    attractors: AttractorSet,
    cfg: GrowthConfig,
    acc: InfluenceBuffer,
    workers: int = 4
):
    """
    Same result as attraction_phase, with the living attractors split into
    contiguous chunks that accumulate into private buffers on a thread pool.

    Partial buffers are merged in chunk order, so repeated runs are
    deterministic. Counts and owners match the sequential phase exactly;
    direction sums may differ from it in the last bits because the
    additions are grouped differently.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    acc.ensure_len(len(tree))
    living = attractors.living
    if not living or len(tree) == 0:
        return

    chunk = -(-len(living) // workers)
    parts = [living[i:i + chunk] for i in range(0, len(living), chunk)]
    partials = [InfluenceBuffer.with_len(len(tree)) for _ in parts]

    with ThreadPoolExecutor(max_workers=len(parts)) as pool:
        futures = [
            pool.submit(_accumulate, tree, part, cfg, partial)
            for part, partial in zip(parts, partials)
        ]
        for future in futures:
            future.result()

    for partial in partials:
        acc.merge_from(partial)


@profile
def growth_phase(tree: Tree, acc: InfluenceBuffer, cfg: GrowthConfig) -> List[NodeId]:
    """
    Grow one child per influenced node toward its mean pull plus tropism.

    All candidates are computed against the tree as it was before the phase;
    they are committed afterwards in influenced-index order. A candidate is
    dropped if its parent already has a child within CHILD_MERGE_DISTANCE of
    it. Returns the new ids in creation order.
    """
    to_add = []

    for node_id in acc.influenced_indices():
        direction = acc.avg_dir(node_id)
        if not direction.is_zero:
            direction = direction.normalize()
        direction = (direction + cfg.tropism).normalize()

        parent = tree.node(node_id)
        new_pos = parent.position + direction * cfg.step_len

        if tree.has_child_near(node_id, new_pos, CHILD_MERGE_DISTANCE):
            continue

        to_add.append((node_id, new_pos, parent.radius))

    return [tree.add_child(p, pos, r) for p, pos, r in to_add]


@profile
def kill_phase(tree: Tree, attractors: AttractorSet, cfg: GrowthConfig):
    """Mark living attractors strictly inside kill_radius of their rank-k node as dead."""
    r2 = cfg.kill_radius * cfg.kill_radius
    for a in attractors.living:
        hit = tree.find_kth_nearest_nodes(a.position, cfg.kill_from_kn)
        if hit is not None and hit[1] < r2:
            a.kill()
