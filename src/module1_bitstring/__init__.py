# file: src/module1_bitstring/__init__.py

"""
Module 1: Bitstring Utilities

Shared primitives for the error-control simulator. Bitstrings are plain
``str`` values of '0'/'1'; randomness always comes from an explicitly
injected numpy Generator.

Public API:
    - make_rng(seed) -> numpy.random.Generator
    - generate_random_bits(length, rng) -> str
    - validate_bits(bits) -> str
    - flip_bits(bits, positions) -> str
    - normalize_length(bits, length) -> str
"""

from .bitstring import (
    make_rng,
    validate_bits,
    generate_random_bits,
    count_ones,
    flip_bits,
    xor_bits,
    differing_positions,
    hamming_distance,
    normalize_length,
)
from .errors import (
    ErrorControlError,
    InvalidLengthError,
    InvalidPolynomialError,
    InvalidParameterError,
    InvalidBitStringError,
)

__version__ = "1.0.0"

__all__ = [
    "make_rng",
    "validate_bits",
    "generate_random_bits",
    "count_ones",
    "flip_bits",
    "xor_bits",
    "differing_positions",
    "hamming_distance",
    "normalize_length",
    "ErrorControlError",
    "InvalidLengthError",
    "InvalidPolynomialError",
    "InvalidParameterError",
    "InvalidBitStringError",
]
