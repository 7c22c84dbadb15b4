"""Tests for GrowthConfig, SimulationConfig and JSON loading."""

import json

import numpy as np
import pytest

from sca2d import GrowthConfig, SimulationConfig, Vector2D, load_config, save_config


class TestGrowthConfig:
    def test_defaults(self):
        cfg = GrowthConfig()
        assert cfg.attract_from_kn == 0
        assert cfg.kill_from_kn == 0
        assert cfg.influence_radius == 60.0
        assert cfg.kill_radius == 5.0
        assert cfg.step_len == 2.0
        assert cfg.tropism == Vector2D(0, 0)

    def test_defaults_do_not_share_tropism(self):
        a, b = GrowthConfig(), GrowthConfig()
        assert a.tropism is not b.tropism

    def test_tuple_tropism_is_coerced(self):
        assert GrowthConfig(tropism=(0.0, -0.7)).tropism == Vector2D(0, -0.7)

    @pytest.mark.parametrize("field", ['influence_radius', 'kill_radius', 'step_len'])
    def test_negative_lengths_rejected(self, field):
        with pytest.raises(ValueError):
            GrowthConfig(**{field: -1.0})

    def test_negative_rank_rejected(self):
        with pytest.raises(ValueError):
            GrowthConfig(kill_from_kn=-1)

    @pytest.mark.parametrize("value", [1.0, 1.5, '1', True])
    def test_non_integer_rank_rejected(self, value):
        with pytest.raises(TypeError):
            GrowthConfig(attract_from_kn=value)
        with pytest.raises(TypeError):
            GrowthConfig(kill_from_kn=value)

    def test_numpy_integer_rank_accepted(self):
        cfg = GrowthConfig(attract_from_kn=np.int64(2))
        assert cfg.attract_from_kn == 2
        assert type(cfg.attract_from_kn) is int

    @pytest.mark.parametrize("field", ['influence_radius', 'kill_radius', 'step_len'])
    @pytest.mark.parametrize("value", [float('nan'), float('inf')])
    def test_non_finite_lengths_rejected(self, field, value):
        with pytest.raises(ValueError):
            GrowthConfig(**{field: value})


class TestSimulationConfig:
    def test_growth_config(self):
        config = SimulationConfig(attract_from_kn=2, kill_radius=3.0, tropism=(0.5, 0.0))
        growth = config.growth_config()
        assert growth.attract_from_kn == 2
        assert growth.kill_radius == 3.0
        assert growth.tropism == Vector2D(0.5, 0)

    def test_unknown_region_rejected(self):
        with pytest.raises(ValueError):
            SimulationConfig(attractor_region='hexagon')

    def test_derived_paths(self):
        config = SimulationConfig(output_dir='out/run1')
        assert str(config.tree_image_path).replace('\\', '/') == 'out/run1/tree.png'
        assert config.animation_path.suffix == '.gif'


class TestJson:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(str(tmp_path / 'nope.json')) == SimulationConfig()

    def test_round_trip(self, tmp_path):
        path = tmp_path / 'cfg' / 'simulation.json'
        config = SimulationConfig(
            num_attractors=42,
            attractor_region='rect',
            tropism=(0.0, -0.7),
            random_seed=3,
        )
        save_config(config, str(path))
        assert load_config(str(path)) == config

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / 'simulation.json'
        path.write_text(json.dumps({'step_len': 4.0, 'region_center': [1, 2]}))
        config = load_config(str(path))
        assert config.step_len == 4.0
        assert config.region_center == (1, 2)
        assert config.kill_radius == SimulationConfig().kill_radius

    def test_unknown_field_rejected(self, tmp_path):
        path = tmp_path / 'simulation.json'
        path.write_text(json.dumps({'growth_step': 4.0}))
        with pytest.raises(TypeError):
            load_config(str(path))

    def test_float_rank_in_file_rejected_on_load(self, tmp_path):
        path = tmp_path / 'simulation.json'
        path.write_text(json.dumps({'attract_from_kn': 1.0}))
        with pytest.raises(TypeError):
            load_config(str(path))

    def test_nan_radius_in_file_rejected_on_load(self, tmp_path):
        path = tmp_path / 'simulation.json'
        path.write_text('{"influence_radius": NaN}')
        with pytest.raises(ValueError):
            load_config(str(path))
