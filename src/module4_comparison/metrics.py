# file: src/module4_comparison/metrics.py

"""
Comparison metrics.

The harness only stores raw counts; everything derived (rates, bit error
rate, code rate, redundancy overhead, flat records for tables) lives here.
"""

from typing import Any, Dict, List

from ..module1_bitstring.bitstring import hamming_distance
from ..module2_codecs.hamming import HAMMING_CODE_BITS, HAMMING_DATA_BITS
from .harness import AggregateResult, ComparisonReport


def outcome_rates(result: AggregateResult, iterations: int) -> Dict[str, float]:
    """
    Convert outcome counts into fractions of all trials.

    Args:
        result: Counters for one technique
        iterations: Number of trials the counters cover

    Returns:
        Dictionary with the same keys as AggregateResult.as_dict(), each
        value count / iterations in [0.0, 1.0]

    Example:
        >>> rates = outcome_rates(AggregateResult(detected=25, clean=75), 100)
        >>> assert rates['detected'] == 0.25
    """
    if iterations <= 0:
        raise ValueError(f"iterations must be > 0, got {iterations}")

    return {key: count / iterations for key, count in result.as_dict().items()}


def bit_error_rate(original: str, received: str) -> float:
    """
    Fraction of differing bits between two equal-length bitstrings.

    BER = (number of bit errors) / (total number of bits)

    Example:
        >>> bit_error_rate('0000', '0100')
        0.25
    """
    if len(original) == 0 and len(received) == 0:
        return 0.0
    return hamming_distance(original, received) / len(original)


def code_rate(data_bits: int, code_bits: int) -> float:
    """Code rate k / n, e.g. 4/7 for Hamming(7,4)."""
    if data_bits <= 0 or code_bits < data_bits:
        raise ValueError(f"Invalid code dimensions: data_bits={data_bits}, code_bits={code_bits}")
    return data_bits / code_bits


def redundancy_overhead(data_bits: int, code_bits: int) -> float:
    """
    Redundancy overhead as a percentage.

    Overhead = ((code_bits - data_bits) / data_bits) * 100
    """
    if data_bits <= 0:
        raise ValueError(f"data_bits must be > 0, got {data_bits}")
    if code_bits < data_bits:
        raise ValueError(f"code_bits {code_bits} < data_bits {data_bits}")

    return ((code_bits - data_bits) / data_bits) * 100.0


def technique_code_bits(technique: str, data_length: int, polynomial: str) -> Dict[str, int]:
    """Payload and codeword sizes of a technique as run by the harness."""
    if technique == 'parity':
        return {'data_bits': data_length, 'code_bits': data_length + 1}
    if technique == 'hamming':
        return {'data_bits': HAMMING_DATA_BITS, 'code_bits': HAMMING_CODE_BITS}
    if technique == 'crc':
        return {'data_bits': data_length, 'code_bits': data_length + len(polynomial) - 1}
    raise ValueError(f"Unknown technique: {technique}")


def report_to_records(report: ComparisonReport) -> List[Dict[str, Any]]:
    """
    Flatten a ComparisonReport into one row per technique.

    Each row holds the counts, their rates (suffix ``_rate``) and the code
    dimensions; suitable for a pandas DataFrame or a JSON dump.
    """
    records = []

    for technique, result in report.results.items():
        sizes = technique_code_bits(technique, report.data_length, report.polynomial)
        rates = outcome_rates(result, report.iterations)

        row: Dict[str, Any] = {'technique': technique}
        row.update(result.as_dict())
        row.update({f"{key}_rate": value for key, value in rates.items()})
        row.update(sizes)
        row['redundancy_overhead'] = redundancy_overhead(sizes['data_bits'], sizes['code_bits'])
        records.append(row)

    return records
