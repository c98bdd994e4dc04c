#!/usr/bin/env python3
"""
Error-Control Comparison Experiment

Runs the comparison harness for parity, Hamming(7,4) and CRC under one
channel configuration and saves the results:
1. Load configuration (YAML) and apply command-line overrides
2. Run the trials
3. Log a summary table (counts and percentages)
4. Save CSV, metrics JSON and a grouped bar chart
"""

import os
import sys
import argparse
import logging
import json
from typing import Any, Dict, List

import yaml
import pandas as pd
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

# Add repository root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.module1_bitstring import ErrorControlError
from src.module2_codecs import HAMMING_DATA_BITS
from src.module4_comparison import run_comparison, report_to_records


DEFAULT_CONFIG: Dict[str, Any] = {
    'system': {'random_seed': 42},
    'channel': {'flip_probability': 0.1},
    'comparison': {'data_length': 4, 'iterations': 100, 'polynomial': '1011'},
    'output': {'dir': 'results/comparison', 'plot': True},
}

OUTCOME_COLUMNS = ['detected', 'corrected', 'undetected']


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(verbose: bool = True):
    """Configure logging for the experiment script."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


# =============================================================================
# CONFIGURATION
# =============================================================================

def load_config(config_path: str) -> Dict:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        config: Configuration dictionary (empty if the file does not exist)
    """
    if os.path.exists(config_path):
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}
        logging.info(f"Loaded configuration from {config_path}")
    else:
        logging.warning(f"Config file not found: {config_path}, using defaults")
        config = {}

    return config


def resolve_parameters(config: Dict, args: argparse.Namespace) -> Dict[str, Any]:
    """
    Merge defaults, config file values and command-line overrides.

    Precedence: command line > config file > DEFAULT_CONFIG.
    """
    def section(name: str) -> Dict[str, Any]:
        merged = dict(DEFAULT_CONFIG.get(name, {}))
        merged.update(config.get(name) or {})
        return merged

    system = section('system')
    channel = section('channel')
    comparison = section('comparison')
    output = section('output')

    params = {
        'data_length': int(comparison['data_length']),
        'flip_probability': float(channel['flip_probability']),
        'iterations': int(comparison['iterations']),
        'polynomial': str(comparison['polynomial']),
        'seed': system.get('random_seed'),
        'output_dir': output['dir'],
        'plot': bool(output.get('plot', True)),
    }

    overrides = {
        'data_length': args.data_length,
        'flip_probability': args.flip_probability,
        'iterations': args.iterations,
        'polynomial': args.polynomial,
        'seed': args.seed,
        'output_dir': args.output_dir,
    }
    params.update({key: value for key, value in overrides.items() if value is not None})

    if args.no_plot:
        params['plot'] = False

    return params


# =============================================================================
# OUTPUT
# =============================================================================

def log_summary(records: List[Dict[str, Any]], iterations: int):
    """Log counts and percentages per technique."""
    logging.info(f"{'technique':<10} {'detected':>14} {'corrected':>14} {'undetected':>14}")
    for row in records:
        cells = [
            f"{row[key]:>5} ({round(row[f'{key}_rate'] * 100):>3}%)"
            for key in OUTCOME_COLUMNS
        ]
        logging.info(f"{row['technique']:<10} " + " ".join(f"{c:>14}" for c in cells))
    logging.info(f"(percentages of {iterations} trials)")


def save_results_csv(records: List[Dict[str, Any]], output_path: str):
    """Save per-technique results as CSV."""
    df = pd.DataFrame.from_records(records)
    df.to_csv(output_path, index=False)
    logging.info(f"Saved results to {output_path}")


def save_metrics_json(metrics: Dict, output_path: str):
    """Save run parameters and results as JSON."""
    with open(output_path, 'w') as f:
        json.dump(metrics, f, indent=2)
    logging.info(f"Saved metrics to {output_path}")


def plot_comparison(records: List[Dict[str, Any]], title: str, output_path: str):
    """Grouped bar chart of outcome counts per technique."""
    df = pd.DataFrame.from_records(records).set_index('technique')[OUTCOME_COLUMNS]

    ax = df.plot(kind='bar', figsize=(8, 4), rot=0)
    ax.set_xlabel("Technique")
    ax.set_ylabel("Trials")
    ax.set_title(title)
    ax.grid(True, axis='y')
    plt.tight_layout()

    plt.savefig(output_path, dpi=200)
    plt.close()
    logging.info(f"Saved plot to {output_path}")


# =============================================================================
# EXPERIMENT
# =============================================================================

def run_experiment(params: Dict[str, Any]) -> Dict:
    """
    Run the comparison and write all outputs.

    Args:
        params: Resolved parameters (see resolve_parameters)

    Returns:
        metrics: Dictionary with run parameters and per-technique records
    """
    os.makedirs(params['output_dir'], exist_ok=True)

    logging.info("=" * 70)
    logging.info("Running comparison")
    logging.info("=" * 70)
    logging.info(
        f"data_length={params['data_length']}, flip_probability={params['flip_probability']}, "
        f"iterations={params['iterations']}, polynomial={params['polynomial']}, "
        f"seed={params['seed']}"
    )
    if params['data_length'] != HAMMING_DATA_BITS:
        logging.warning(
            "Hamming(7,4) payloads are truncated/padded to 4 bits in comparison mode"
        )

    report = run_comparison(
        data_length=params['data_length'],
        flip_probability=params['flip_probability'],
        iterations=params['iterations'],
        polynomial=params['polynomial'],
        seed=params['seed'],
    )
    records = report_to_records(report)

    log_summary(records, report.iterations)

    save_results_csv(records, os.path.join(params['output_dir'], 'comparison_results.csv'))

    if params['plot']:
        title = (
            f"Outcomes over {report.iterations} trials "
            f"(p={report.flip_probability}, {report.data_length} data bits)"
        )
        plot_comparison(records, title, os.path.join(params['output_dir'], 'comparison_chart.png'))

    metrics = {
        'parameters': {
            'data_length': report.data_length,
            'flip_probability': report.flip_probability,
            'iterations': report.iterations,
            'polynomial': report.polynomial,
            'seed': report.seed,
        },
        'results': records,
    }
    save_metrics_json(metrics, os.path.join(params['output_dir'], 'metrics.json'))

    return metrics


# =============================================================================
# COMMAND-LINE INTERFACE
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Compare parity, Hamming(7,4) and CRC over a noisy channel',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Defaults from config/default_config.yaml
  python experiments/run_comparison.py

  # Noisier channel, longer payloads, more trials
  python experiments/run_comparison.py \\
      --flip-probability 0.2 --data-length 8 --iterations 1000
        """
    )

    parser.add_argument('--config', type=str, default='config/default_config.yaml',
                        help='Path to configuration YAML file (default: config/default_config.yaml)')
    parser.add_argument('--data-length', type=int, default=None,
                        help='Payload bits per trial')
    parser.add_argument('--flip-probability', type=float, default=None,
                        help='Per-bit flip probability in [0, 1]')
    parser.add_argument('--iterations', type=int, default=None,
                        help='Number of trials')
    parser.add_argument('--polynomial', type=str, default=None,
                        help='CRC generator polynomial as a bitstring (e.g. 1011)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory to save results')
    parser.add_argument('--no-plot', action='store_true',
                        help='Skip the bar chart')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable verbose logging')

    return parser


def main(argv=None) -> int:
    """Main entry point for the comparison experiment."""
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)

    config = load_config(args.config)
    params = resolve_parameters(config, args)

    try:
        run_experiment(params)
    except ErrorControlError as e:
        logging.error(f"Comparison failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
