# file: src/module4_comparison/harness.py

"""
Comparison Harness

Runs repeated independent trials of parity, Hamming(7,4) and CRC over the
same noisy channel and tallies, per technique, how often corruption was
detected, corrected, or slipped through.

Pipeline (per trial):
    random payload (shared by all techniques)
    → encode with each codec
    → transmit each codeword independently
    → receiver-side check
    → classify into detected / corrected / undetected (or clean)

Comparison-mode quirk:
    Hamming(7,4) only accepts 4 bits, so its payload is the shared payload
    truncated or right-padded with '0' to 4 bits. Hamming's ground truth is
    that normalized payload, not the original one, so its statistics are
    not strictly comparable when data_length != 4.
"""

import logging
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Optional

import numpy as np

from ..module1_bitstring.bitstring import generate_random_bits, make_rng, normalize_length
from ..module1_bitstring.errors import InvalidParameterError
from ..module2_codecs.crc import DEFAULT_POLYNOMIAL, crc_encode, crc_verify, validate_polynomial
from ..module2_codecs.hamming import DATA_POSITIONS, HAMMING_DATA_BITS, hamming_decode, hamming_encode
from ..module2_codecs.parity import parity_encode, parity_verify
from ..module3_channel.channel import ChannelOutcome, transmit

logger = logging.getLogger(__name__)

TECHNIQUES = ('parity', 'hamming', 'crc')

# Trial classifications
DETECTED = 'detected'
CORRECTED = 'corrected'
UNDETECTED = 'undetected'
CLEAN = 'clean'


@dataclass(frozen=True)
class AggregateResult:
    """Outcome counters for one technique across all trials."""
    detected: int = 0
    corrected: int = 0
    undetected: int = 0
    clean: int = 0  # Trials counted in none of the three buckets

    @property
    def total(self) -> int:
        return self.detected + self.corrected + self.undetected + self.clean

    def as_dict(self) -> Dict[str, int]:
        return {
            DETECTED: self.detected,
            CORRECTED: self.corrected,
            UNDETECTED: self.undetected,
            CLEAN: self.clean,
        }


@dataclass(frozen=True)
class ComparisonReport(Mapping):
    """
    Harness output: per-technique counters plus the run parameters.

    Behaves as a read-only mapping technique name -> AggregateResult.
    ``seed`` is None unless the run built its own generator from a seed.
    """
    data_length: int
    flip_probability: float
    iterations: int
    polynomial: str
    seed: Optional[int] = None
    results: Mapping = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'results', MappingProxyType(dict(self.results)))

    def __getitem__(self, technique: str) -> AggregateResult:
        return self.results[technique]

    def __iter__(self) -> Iterator[str]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)


def classify_detection(verified: bool, payload_changed: bool) -> str:
    """
    Classify a trial for a detect-only code (parity, CRC).

    A failed check with an intact payload (only check bits hit) is clean:
    nothing the receiver cares about was damaged.
    """
    if payload_changed and not verified:
        return DETECTED
    if payload_changed:
        return UNDETECTED
    return CLEAN


def classify_hamming(payload: str, outcome: ChannelOutcome) -> str:
    """
    Classify a Hamming(7,4) trial.

    A correction that lands on the wrong bit (two or more flips) still counts
    as detected: the decoder noticed corruption but could not repair it.
    """
    decoded = hamming_decode(outcome.received)

    if decoded.corrected:
        return CORRECTED if decoded.data == payload else DETECTED

    payload_changed = any(pos in outcome.flipped_positions for pos in DATA_POSITIONS)
    return UNDETECTED if payload_changed else CLEAN


def run_trial(
    payload: str,
    flip_probability: float,
    polynomial: str,
    rng: np.random.Generator,
) -> Dict[str, str]:
    """
    Run one trial of all three techniques on ``payload``.

    Channel draws happen in a fixed order (parity, Hamming, CRC) so a seeded
    generator always gives the same tallies.

    Returns:
        Mapping technique name -> classification label
    """
    parity_outcome = transmit(parity_encode(payload), flip_probability, rng=rng)
    parity_label = classify_detection(
        verified=parity_verify(parity_outcome.received),
        payload_changed=parity_outcome.received[:len(payload)] != payload,
    )

    hamming_payload = normalize_length(payload, HAMMING_DATA_BITS)
    hamming_outcome = transmit(hamming_encode(hamming_payload), flip_probability, rng=rng)
    hamming_label = classify_hamming(hamming_payload, hamming_outcome)

    crc_outcome = transmit(crc_encode(payload, polynomial), flip_probability, rng=rng)
    crc_label = classify_detection(
        verified=crc_verify(crc_outcome.received, polynomial),
        payload_changed=crc_outcome.received[:len(payload)] != payload,
    )

    return {'parity': parity_label, 'hamming': hamming_label, 'crc': crc_label}


def run_comparison(
    data_length: int,
    flip_probability: float,
    iterations: int,
    polynomial: str = DEFAULT_POLYNOMIAL,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> ComparisonReport:
    """
    Compare parity, Hamming(7,4) and CRC over ``iterations`` trials.

    Args:
        data_length: Payload length in bits (> 0)
        flip_probability: Per-bit channel flip probability in [0, 1]
        iterations: Number of independent trials (> 0)
        polynomial: CRC generator polynomial (default: "1011")
        rng: Injected random source; takes precedence over ``seed``
        seed: Seed used to build a generator when ``rng`` is None.
            Ignored (and recorded as None) when ``rng`` is given.

    Returns:
        ComparisonReport whose ``results`` maps each technique name to its
        AggregateResult. Rates are left to the caller
        (see metrics.outcome_rates).

    Raises:
        InvalidParameterError: If data_length, iterations or
            flip_probability is out of range
        InvalidPolynomialError: If the polynomial is malformed

    Example:
        >>> report = run_comparison(4, 0.1, 100, seed=42)
        >>> report['hamming'].total
        100
    """
    if data_length <= 0:
        raise InvalidParameterError(f"data_length must be > 0, got {data_length}")
    if iterations <= 0:
        raise InvalidParameterError(f"iterations must be > 0, got {iterations}")
    if not 0.0 <= flip_probability <= 1.0:
        raise InvalidParameterError(
            f"flip_probability must be in [0, 1], got {flip_probability}"
        )
    validate_polynomial(polynomial)

    if rng is None:
        rng = make_rng(seed)
    else:
        seed = None

    logger.debug(
        f"Comparison run: data_length={data_length}, p={flip_probability}, "
        f"iterations={iterations}, polynomial={polynomial}, seed={seed}"
    )
    if data_length != HAMMING_DATA_BITS:
        logger.debug(
            f"Hamming payload normalized from {data_length} to {HAMMING_DATA_BITS} bits"
        )

    tallies = {name: Counter() for name in TECHNIQUES}

    for _ in range(iterations):
        payload = generate_random_bits(data_length, rng)
        labels = run_trial(payload, flip_probability, polynomial, rng)
        for name, label in labels.items():
            tallies[name][label] += 1

    results = {
        name: AggregateResult(
            detected=tallies[name][DETECTED],
            corrected=tallies[name][CORRECTED],
            undetected=tallies[name][UNDETECTED],
            clean=tallies[name][CLEAN],
        )
        for name in TECHNIQUES
    }

    for name in TECHNIQUES:
        logger.debug(f"  {name}: {results[name].as_dict()}")

    return ComparisonReport(
        data_length=data_length,
        flip_probability=flip_probability,
        iterations=iterations,
        polynomial=polynomial,
        seed=seed,
        results=results,
    )
