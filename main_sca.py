"""
Main entry point for the 2D Space Colonization simulation.

Configuration is loaded from a JSON file (default: simulation.json, or the
optional positional path); missing fields and a missing file fall back to
SimulationConfig defaults.

Outputs (in config.output_dir):
- Final tree visualization (.png)
- Growth statistics (.png)
- Growth animation (.gif) when config.animate is set
"""

import argparse

from sca2d import Simulation, load_config
from sca2d.visualization import visualize_tree, animate_growth, plot_growth_statistics


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Grow a 2D space colonization tree.")
    parser.add_argument(
        'config',
        nargs='?',
        default='simulation.json',
        help='Path to the JSON simulation config (default: simulation.json)'
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = load_config(args.config)
    config.output_path.mkdir(parents=True, exist_ok=True)

    print(f"Running SCA from {args.config}")
    print(f"  Attractors: {config.num_attractors} in {config.attractor_region}")
    print(f"  Max iterations: {config.max_iterations}")
    print()

    if config.animate:
        animate_growth(
            config,
            show_attractors=config.show_attractors,
            save_path=str(config.animation_path),
            frame_skip=5
        )
        return

    sim = Simulation(config)
    sim.grow()

    visualize_tree(
        sim,
        show_attractors=config.show_attractors,
        save_path=str(config.tree_image_path)
    )
    plot_growth_statistics(sim, save_path=str(config.stats_image_path))


if __name__ == '__main__':
    main()
