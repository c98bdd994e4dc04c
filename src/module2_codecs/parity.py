# file: src/module2_codecs/parity.py

"""
Single-bit even parity.

The encoder appends one bit so the codeword always holds an even number of
ones. Verification detects any odd number of flipped bits and misses every
even number of flips; the latter is a property of the code, not a defect.
"""

from typing import FrozenSet

from ..module1_bitstring.bitstring import count_ones


def parity_encode(data: str) -> str:
    """
    Append an even-parity bit.

    Args:
        data: Payload bitstring of any length (empty allowed)

    Returns:
        ``data`` followed by '0' if it already has an even number of ones,
        otherwise by '1'

    Example:
        >>> parity_encode('1010')
        '10100'
        >>> parity_encode('1110')
        '11101'
    """
    parity_bit = '0' if count_ones(data) % 2 == 0 else '1'
    return data + parity_bit


def parity_verify(data: str) -> bool:
    """True iff the received bitstring has an even number of ones."""
    return count_ones(data) % 2 == 0


def parity_check_positions(encoded_length: int) -> FrozenSet[int]:
    """Index of the parity bit in a codeword of ``encoded_length`` bits."""
    if encoded_length <= 0:
        return frozenset()
    return frozenset({encoded_length - 1})
