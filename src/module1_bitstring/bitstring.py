# file: src/module1_bitstring/bitstring.py

"""
Bitstring primitives shared by the codecs, the channel and the harness.

A bitstring is a plain ``str`` made only of ``'0'`` and ``'1'``. Being a
``str`` it is immutable; every helper here returns a new value.
"""

from typing import Iterable, List, Optional

import numpy as np

from .errors import InvalidBitStringError, InvalidLengthError, InvalidParameterError

_BINARY_CHARS = frozenset('01')


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create the random source used for payload generation and channel noise.

    Args:
        seed: Seed for reproducibility (None = fresh OS entropy)

    Returns:
        numpy Generator to pass explicitly to generate_random_bits(),
        transmit() and run_comparison()
    """
    return np.random.default_rng(seed)


def validate_bits(bits: str) -> str:
    """
    Check that ``bits`` is a bitstring and return it unchanged.

    Raises:
        InvalidBitStringError: If bits is not a str of '0'/'1' characters
    """
    if not isinstance(bits, str):
        raise InvalidBitStringError(f"Bitstring must be str, got {type(bits)}")

    invalid = set(bits) - _BINARY_CHARS
    if invalid:
        raise InvalidBitStringError(
            f"Bitstring may only contain '0' and '1', got {sorted(invalid)} in {bits!r}"
        )

    return bits


def generate_random_bits(length: int, rng: Optional[np.random.Generator] = None) -> str:
    """
    Generate a uniformly random bitstring.

    Args:
        length: Number of bits (>= 0)
        rng: Injected random source (a fresh unseeded one if None)

    Returns:
        Bitstring of exactly ``length`` characters

    Raises:
        InvalidParameterError: If length is negative

    Example:
        >>> bits = generate_random_bits(8, make_rng(42))
        >>> assert len(bits) == 8
    """
    if length < 0:
        raise InvalidParameterError(f"length must be >= 0, got {length}")

    if rng is None:
        rng = make_rng()

    if length == 0:
        return ''

    draws = rng.integers(0, 2, size=length)
    return ''.join('1' if int(bit) else '0' for bit in draws)


def count_ones(bits: str) -> int:
    """Number of '1' characters in a bitstring."""
    return validate_bits(bits).count('1')


def flip_bits(bits: str, positions: Iterable[int]) -> str:
    """
    Flip the bits at the given indices.

    A position listed twice is flipped twice (and so restored).

    Raises:
        InvalidParameterError: If a position is outside 0..len(bits)-1
    """
    validate_bits(bits)
    working: List[str] = list(bits)

    for pos in positions:
        if not 0 <= pos < len(working):
            raise InvalidParameterError(
                f"Bit position {pos} out of range for length {len(working)}"
            )
        working[pos] = '0' if working[pos] == '1' else '1'

    return ''.join(working)


def _check_same_length(a: str, b: str) -> None:
    validate_bits(a)
    validate_bits(b)
    if len(a) != len(b):
        raise InvalidLengthError(
            f"Length mismatch: {len(a)} != {len(b)}",
            expected=len(a),
            actual=len(b),
        )


def xor_bits(a: str, b: str) -> str:
    """Bitwise XOR of two equal-length bitstrings."""
    _check_same_length(a, b)
    return ''.join('1' if x != y else '0' for x, y in zip(a, b))


def differing_positions(a: str, b: str) -> List[int]:
    """Indices where two equal-length bitstrings differ, ascending."""
    _check_same_length(a, b)
    return [i for i, (x, y) in enumerate(zip(a, b)) if x != y]


def hamming_distance(a: str, b: str) -> int:
    """Number of positions where two equal-length bitstrings differ."""
    return len(differing_positions(a, b))


def normalize_length(bits: str, length: int, pad: str = '0') -> str:
    """
    Truncate or right-pad a bitstring to exactly ``length`` bits.

    Example:
        >>> normalize_length('101101', 4)
        '1011'
        >>> normalize_length('10', 4)
        '1000'
    """
    validate_bits(bits)
    if length < 0:
        raise InvalidParameterError(f"length must be >= 0, got {length}")
    if pad not in _BINARY_CHARS or len(pad) != 1:
        raise InvalidBitStringError(f"pad must be '0' or '1', got {pad!r}")

    if len(bits) >= length:
        return bits[:length]
    return bits + pad * (length - len(bits))
