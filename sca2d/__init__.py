"""
2D Space Colonization growth engine.

A branching tree grows toward a cloud of attractor points: every attractor
pulls on one nearby node, each pulled node grows a child along the averaged
pull, and attractors the tree reaches are consumed.

Based on: "Modeling Trees with a Space Colonization Algorithm"
by Runions, Lane, and Prusinkiewicz (2007).
"""

from .vector import Vector2D
from .types import NodeId
from .config import GrowthConfig, SimulationConfig, load_config, save_config
from .tree import Tree, TreeNode
from .attractor import Attractor, AttractorSet
from .influence import InfluenceBuffer
from .phases import (
    CHILD_MERGE_DISTANCE,
    attraction_phase,
    parallel_attraction_phase,
    growth_phase,
    kill_phase,
)
from .simulation import Simulation

__all__ = [
    'Vector2D',
    'NodeId',
    'GrowthConfig',
    'SimulationConfig',
    'load_config',
    'save_config',
    'Tree',
    'TreeNode',
    'Attractor',
    'AttractorSet',
    'InfluenceBuffer',
    'CHILD_MERGE_DISTANCE',
    'attraction_phase',
    'parallel_attraction_phase',
    'growth_phase',
    'kill_phase',
    'Simulation',
]
