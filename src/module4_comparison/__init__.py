# file: src/module4_comparison/__init__.py

"""
Module 4: Comparison Harness

Statistical comparison of parity, Hamming(7,4) and CRC under one channel
configuration. Produces raw counts only; rates are derived by the caller.

Public API:
    - run_comparison(data_length, flip_probability, iterations, polynomial, rng, seed)
          -> ComparisonReport
    - outcome_rates(result, iterations) -> dict
    - report_to_records(report) -> list of dict
"""

from .harness import (
    TECHNIQUES,
    AggregateResult,
    ComparisonReport,
    classify_detection,
    classify_hamming,
    run_trial,
    run_comparison,
)
from .metrics import (
    outcome_rates,
    bit_error_rate,
    code_rate,
    redundancy_overhead,
    technique_code_bits,
    report_to_records,
)

__all__ = [
    "TECHNIQUES",
    "AggregateResult",
    "ComparisonReport",
    "classify_detection",
    "classify_hamming",
    "run_trial",
    "run_comparison",
    "outcome_rates",
    "bit_error_rate",
    "code_rate",
    "redundancy_overhead",
    "technique_code_bits",
    "report_to_records",
]
