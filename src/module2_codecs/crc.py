# file: src/module2_codecs/crc.py

"""
Cyclic redundancy check over an arbitrary generator polynomial.

The generator is given as a bitstring, most significant coefficient first,
e.g. "1011" = x^3 + x + 1 (degree k = 3, remainder of 3 bits). The
remainder is the result of mod-2 long division of the message extended by
k zero bits.

A generator with k >= 1 and a non-zero constant term detects every single
bit error, every odd number of errors when (x + 1) divides it, and every
burst shorter than k + 1 bits. Other patterns (e.g. an error pattern equal
to a multiple of the generator) pass verification undetected.
"""

from typing import FrozenSet, List

from ..module1_bitstring.bitstring import validate_bits
from ..module1_bitstring.errors import InvalidBitStringError, InvalidPolynomialError

DEFAULT_POLYNOMIAL = "1011"


def validate_polynomial(polynomial: str) -> str:
    """
    Check a generator polynomial and return it unchanged.

    Raises:
        InvalidPolynomialError: If it is not a bitstring, is shorter than two
            bits, or has a leading zero
    """
    try:
        validate_bits(polynomial)
    except InvalidBitStringError as e:
        raise InvalidPolynomialError(f"Invalid generator polynomial: {e}") from e

    if len(polynomial) < 2:
        raise InvalidPolynomialError(
            f"Generator polynomial must have degree >= 1, got {polynomial!r}"
        )
    if polynomial[0] != '1':
        raise InvalidPolynomialError(
            f"Generator polynomial must have a leading 1, got {polynomial!r}"
        )

    return polynomial


def crc_remainder(message: str, polynomial: str) -> str:
    """
    Compute the CRC remainder of ``message`` for ``polynomial``.

    Args:
        message: Bitstring to divide
        polynomial: Generator polynomial with leading '1'

    Returns:
        Remainder of len(polynomial) - 1 bits

    Raises:
        InvalidPolynomialError: If the polynomial is malformed

    Example:
        >>> crc_remainder('1101', '1011')
        '001'
    """
    validate_polynomial(polynomial)
    validate_bits(message)

    degree = len(polynomial) - 1
    generator = [int(bit) for bit in polynomial]
    working: List[int] = [int(bit) for bit in message] + [0] * degree

    # Mod-2 subtraction is XOR; the window always fits because of the padding
    for i in range(len(message)):
        if working[i] == 0:
            continue
        for j, coeff in enumerate(generator):
            working[i + j] ^= coeff

    return ''.join(str(bit) for bit in working[len(message):])


def crc_encode(data: str, polynomial: str = DEFAULT_POLYNOMIAL) -> str:
    """Append the CRC remainder to ``data``."""
    return data + crc_remainder(data, polynomial)


def crc_verify(encoded: str, polynomial: str = DEFAULT_POLYNOMIAL) -> bool:
    """True iff ``encoded`` leaves an all-zero remainder."""
    return '1' not in crc_remainder(encoded, polynomial)


def crc_check_positions(encoded_length: int, polynomial: str = DEFAULT_POLYNOMIAL) -> FrozenSet[int]:
    """Indices of the trailing remainder bits in a CRC codeword."""
    degree = len(validate_polynomial(polynomial)) - 1
    start = max(encoded_length - degree, 0)
    return frozenset(range(start, encoded_length))
