"""
Visualization utilities for the growth simulation.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.animation import FuncAnimation
from tqdm import tqdm
from typing import Optional, Tuple
from pathlib import Path

from .config import SimulationConfig
from .simulation import Simulation


def _segment_widths(sim: Simulation, branch_width: float) -> list:
    return [
        branch_width * node.radius
        for node in sim.tree
        if node.parent is not None
    ]


def _frame_limits(sim: Simulation, margin: float = 10.0):
    stacked = np.vstack([sim.tree.positions, sim.attractors.positions(alive_only=True)])
    if len(stacked) == 0:
        stacked = np.zeros((1, 2))
    lo = stacked.min(axis=0) - margin
    hi = stacked.max(axis=0) + margin
    return (lo[0], hi[0]), (lo[1], hi[1])


def visualize_tree(
    sim: Simulation,
    show_attractors: bool = False,
    branch_color: str = 'saddlebrown',
    new_node_color: str = 'red',
    branch_width: float = 1.0,
    attractor_color: str = 'green',
    attractor_size: float = 2.0,
    figsize: Tuple[int, int] = (10, 10),
    save_path: Optional[str] = None,
    show: bool = True
):
    """Visualize the current state of the simulation. World y points up."""
    fig, ax = plt.subplots(figsize=figsize)

    segments = sim.tree.segments()
    if segments:
        lc = LineCollection(segments, colors=branch_color,
                            linewidths=_segment_widths(sim, branch_width))
        ax.add_collection(lc)

    roots = sim.tree.roots()
    if roots:
        root_positions = np.array([sim.tree.node(r).position.to_tuple() for r in roots])
        ax.scatter(root_positions[:, 0], root_positions[:, 1], c=branch_color, s=12)

    if sim.last_new_ids:
        new_positions = np.array([sim.tree.node(i).position.to_tuple() for i in sim.last_new_ids])
        ax.scatter(new_positions[:, 0], new_positions[:, 1], c=new_node_color, s=6)

    if show_attractors:
        attractor_positions = sim.attractors.positions(alive_only=True)
        if len(attractor_positions) > 0:
            ax.scatter(
                attractor_positions[:, 0],
                attractor_positions[:, 1],
                c=attractor_color,
                s=attractor_size,
                alpha=0.5
            )

    xlim, ylim = _frame_limits(sim)
    ax.set_xlim(*xlim)
    ax.set_ylim(*ylim)
    ax.set_aspect('equal')
    ax.axis('off')

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor='white', edgecolor='none')
        print(f"Saved visualization to {save_path}")

    if show:
        plt.show()
    return fig, ax


def animate_growth(
    config: SimulationConfig,
    interval: int = 50,
    show_attractors: bool = True,
    branch_color: str = 'saddlebrown',
    branch_width: float = 1.0,
    figsize: Tuple[int, int] = (10, 10),
    save_path: Optional[str] = None,
    frame_skip: int = 1,
    show: bool = True
):
    """
    Grow a fresh simulation and animate it.

    frame_skip: Only record every Nth iteration. Higher = faster, fewer frames.
    Returns (simulation, animation).
    """
    if frame_skip < 1:
        raise ValueError(f"frame_skip must be at least 1, got {frame_skip}")

    sim = Simulation(config)
    frames_data = []

    def collect_frame():
        frames_data.append({
            'segments': sim.tree.segments(),
            'attractors': sim.attractors.positions(alive_only=True),
            'iteration': sim.iteration
        })

    collect_frame()
    with tqdm(total=config.max_iterations, desc="Growing") as pbar:
        while sim.iteration < config.max_iterations and not sim.is_finished:
            sim.step()
            pbar.update(1)
            if sim.iteration % frame_skip == 0:
                collect_frame()
    collect_frame()

    print(f"Collected {len(frames_data)} frames for animation")

    fig, ax = plt.subplots(figsize=figsize)
    xlim, ylim = _frame_limits(sim)
    ax.set_xlim(*xlim)
    ax.set_ylim(*ylim)
    ax.set_aspect('equal')
    ax.axis('off')

    branch_collection = LineCollection([], colors=branch_color, linewidths=branch_width)
    ax.add_collection(branch_collection)
    attractor_scatter = ax.scatter([], [], c='green', s=1, alpha=0.3) if show_attractors else None
    title = ax.set_title('Iteration: 0')

    def update(frame_idx):
        data = frames_data[frame_idx]
        branch_collection.set_segments(data['segments'])
        if attractor_scatter is not None:
            attractor_scatter.set_offsets(data['attractors'] if len(data['attractors']) else np.empty((0, 2)))
        title.set_text(f"Iteration: {data['iteration']}")
        return [branch_collection]

    anim = FuncAnimation(
        fig, update,
        frames=len(frames_data),
        interval=interval,
        blit=False,
        repeat=True
    )

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        print(f"Saving animation ({len(frames_data)} frames)...")
        anim.save(save_path, writer='pillow', fps=20)
        print(f"Saved animation to {save_path}")

    if show:
        plt.show()
    return sim, anim


def plot_growth_statistics(sim: Simulation, save_path: Optional[str] = None, show: bool = True):
    """Plot node depth and branching statistics of the grown tree."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    depths = [sim.tree.depth(node_id) for node_id in sim.tree.ids()]
    max_depth = max(depths) if depths else 0
    depth_counts = np.bincount(depths, minlength=max_depth + 1) if depths else np.zeros(1, dtype=int)
    axes[0].bar(range(len(depth_counts)), depth_counts, color='forestgreen', edgecolor='black')
    axes[0].set_xlabel('Tree Depth')
    axes[0].set_ylabel('Node Count')
    axes[0].set_title('Nodes per Depth Level')

    child_counts = [len(node.children) for node in sim.tree]
    max_children = max(child_counts) if child_counts else 0
    axes[1].hist(child_counts, bins=np.arange(max_children + 2) - 0.5,
                 color='saddlebrown', edgecolor='black')
    axes[1].set_xlabel('Children per Node')
    axes[1].set_ylabel('Count')
    axes[1].set_title('Branching Distribution')

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved statistics to {save_path}")

    if show:
        plt.show()
    return fig, axes
