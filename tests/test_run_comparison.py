# file: tests/test_run_comparison.py

"""
Tests for the comparison experiment runner.

Test coverage:
    - YAML config loading and fallback
    - Parameter precedence (command line > config > defaults)
    - Output files
    - Error exit code
"""

import json
from pathlib import Path

import pandas as pd
import yaml

from experiments.run_comparison import (
    build_parser,
    load_config,
    resolve_parameters,
    run_experiment,
    main,
)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / 'config' / 'default_config.yaml'


class TestConfiguration:
    """Test config loading and parameter resolution."""

    def test_missing_config_returns_empty(self, tmp_path):
        assert load_config(str(tmp_path / 'missing.yaml')) == {}

    def test_load_config(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text(yaml.safe_dump({'comparison': {'iterations': 7}}))

        assert load_config(str(path)) == {'comparison': {'iterations': 7}}

    def test_defaults(self):
        params = resolve_parameters({}, build_parser().parse_args([]))

        assert params['data_length'] == 4
        assert params['flip_probability'] == 0.1
        assert params['iterations'] == 100
        assert params['polynomial'] == '1011'
        assert params['seed'] == 42
        assert params['plot'] is True

    def test_config_overrides_defaults(self):
        config = {'comparison': {'iterations': 500}, 'channel': {'flip_probability': 0.2}}
        params = resolve_parameters(config, build_parser().parse_args([]))

        assert params['iterations'] == 500
        assert params['flip_probability'] == 0.2
        assert params['data_length'] == 4

    def test_command_line_overrides_config(self):
        config = {'comparison': {'iterations': 500, 'polynomial': '1011'}}
        args = build_parser().parse_args(
            ['--iterations', '20', '--polynomial', '10011', '--seed', '3', '--no-plot']
        )
        params = resolve_parameters(config, args)

        assert params['iterations'] == 20
        assert params['polynomial'] == '10011'
        assert params['seed'] == 3
        assert params['plot'] is False

    def test_default_config_file_is_valid(self):
        with open(DEFAULT_CONFIG_PATH) as f:
            config = yaml.safe_load(f)

        params = resolve_parameters(config, build_parser().parse_args([]))
        assert params['polynomial'] == '1011'
        assert 0.0 <= params['flip_probability'] <= 1.0


class TestRunExperiment:
    """Test experiment outputs."""

    def _params(self, tmp_path, plot=False):
        return {
            'data_length': 4,
            'flip_probability': 0.1,
            'iterations': 50,
            'polynomial': '1011',
            'seed': 1,
            'output_dir': str(tmp_path / 'out'),
            'plot': plot,
        }

    def test_writes_csv_and_json(self, tmp_path):
        metrics = run_experiment(self._params(tmp_path))

        df = pd.read_csv(tmp_path / 'out' / 'comparison_results.csv')
        assert list(df['technique']) == ['parity', 'hamming', 'crc']

        with open(tmp_path / 'out' / 'metrics.json') as f:
            saved = json.load(f)
        assert saved == metrics
        assert saved['parameters']['iterations'] == 50

    def test_writes_chart(self, tmp_path):
        run_experiment(self._params(tmp_path, plot=True))
        assert (tmp_path / 'out' / 'comparison_chart.png').exists()

    def test_main_success(self, tmp_path):
        argv = [
            '--config', str(tmp_path / 'missing.yaml'),
            '--iterations', '10',
            '--output-dir', str(tmp_path / 'out'),
            '--no-plot',
        ]
        assert main(argv) == 0

    def test_main_invalid_parameters_exit_code(self, tmp_path):
        argv = [
            '--config', str(tmp_path / 'missing.yaml'),
            '--flip-probability', '1.5',
            '--output-dir', str(tmp_path / 'out'),
            '--no-plot',
        ]
        assert main(argv) == 1
