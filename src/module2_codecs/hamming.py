# file: src/module2_codecs/hamming.py

"""
Hamming(7,4) single-error-correcting code.

Codeword layout (0-indexed):

    index:  0   1   2   3   4   5   6
    bit:    p1  p2  d1  p3  d2  d3  d4

Parity coverage (1-indexed data bits, mod-2 sums):
    p1 = d1 + d2 + d4
    p2 = d1 + d3 + d4
    p3 = d2 + d3 + d4

Decoding recomputes the three checks including the received parity bit and
forms syndrome = s1 + 2*s2 + 4*s3. A non-zero syndrome flips index
(syndrome - 1) before the data bits are read back. Syndrome 7 therefore
lands on index 6, the last data bit.

Only one flipped bit is guaranteed to be repaired. Two flips can produce a
non-zero syndrome that points at a bit that was never in error, and the
decoder then returns wrong data while reporting a correction.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional

from ..module1_bitstring.bitstring import validate_bits
from ..module1_bitstring.errors import InvalidLengthError

HAMMING_DATA_BITS = 4
HAMMING_CODE_BITS = 7

# Codeword indices holding data and check bits
DATA_POSITIONS = (2, 4, 5, 6)
CHECK_POSITIONS = (0, 1, 3)


@dataclass(frozen=True)
class DecodeResult:
    """Result of decoding one Hamming(7,4) codeword."""
    data: str
    corrected: bool
    error_position: Optional[int]  # None when no correction was applied
    syndrome: int


def hamming_encode(data: str) -> str:
    """
    Encode 4 data bits into a 7-bit Hamming codeword.

    Args:
        data: Exactly 4 bits

    Returns:
        Codeword laid out as [p1, p2, d1, p3, d2, d3, d4]

    Raises:
        InvalidLengthError: If len(data) != 4

    Example:
        >>> hamming_encode('1011')
        '0110011'
    """
    validate_bits(data)
    if len(data) != HAMMING_DATA_BITS:
        raise InvalidLengthError(
            f"Hamming(7,4) requires exactly {HAMMING_DATA_BITS} data bits, got {len(data)}",
            expected=HAMMING_DATA_BITS,
            actual=len(data),
        )

    d1, d2, d3, d4 = (int(bit) for bit in data)

    p1 = (d1 + d2 + d4) % 2
    p2 = (d1 + d3 + d4) % 2
    p3 = (d2 + d3 + d4) % 2

    return ''.join(str(bit) for bit in (p1, p2, d1, p3, d2, d3, d4))


def hamming_syndrome(encoded: str) -> int:
    """
    Compute the syndrome (0..7) of a received 7-bit codeword.

    Raises:
        InvalidLengthError: If len(encoded) != 7
    """
    validate_bits(encoded)
    if len(encoded) != HAMMING_CODE_BITS:
        raise InvalidLengthError(
            f"Hamming(7,4) requires exactly {HAMMING_CODE_BITS} bits, got {len(encoded)}",
            expected=HAMMING_CODE_BITS,
            actual=len(encoded),
        )

    p1, p2, d1, p3, d2, d3, d4 = (int(bit) for bit in encoded)

    s1 = (p1 + d1 + d2 + d4) % 2
    s2 = (p2 + d1 + d3 + d4) % 2
    s3 = (p3 + d2 + d3 + d4) % 2

    return s1 + 2 * s2 + 4 * s3


def hamming_decode(encoded: str) -> DecodeResult:
    """
    Decode a 7-bit codeword, correcting at most one flipped bit.

    Args:
        encoded: Received 7-bit codeword

    Returns:
        DecodeResult with the 4 data bits read from indices {2, 4, 5, 6}
        of the (possibly corrected) codeword

    Raises:
        InvalidLengthError: If len(encoded) != 7
    """
    syndrome = hamming_syndrome(encoded)

    working = list(encoded)
    error_position = None

    if syndrome != 0:
        error_position = syndrome - 1
        working[error_position] = '0' if working[error_position] == '1' else '1'

    data = ''.join(working[i] for i in DATA_POSITIONS)

    return DecodeResult(
        data=data,
        corrected=syndrome != 0,
        error_position=error_position,
        syndrome=syndrome,
    )


def hamming_check_positions() -> FrozenSet[int]:
    """Indices of the three parity bits in a codeword."""
    return frozenset(CHECK_POSITIONS)
