"""Tests for the command-line entry point."""

from main_sca import parse_args


def test_config_path_defaults():
    assert parse_args([]).config == 'simulation.json'


def test_config_path_positional():
    assert parse_args(['runs/tall.json']).config == 'runs/tall.json'
