# file: src/module3_channel/channel.py

"""
Noisy binary channel.

Each bit is flipped independently with a fixed probability (binary
symmetric channel). Randomness is drawn from an explicitly injected numpy
Generator so a seeded run is reproducible bit for bit.

Also provides deterministic error injection (chosen positions, bursts)
for reproducing specific error patterns.
"""

from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Iterable, Optional

import numpy as np

from ..module1_bitstring.bitstring import flip_bits, make_rng, validate_bits
from ..module1_bitstring.errors import InvalidParameterError


@dataclass(frozen=True)
class ChannelOutcome:
    """What came out of the channel and where bits were flipped."""
    received: str
    flipped_positions: FrozenSet[int]

    @property
    def num_flips(self) -> int:
        return len(self.flipped_positions)


def _validate_probability(flip_probability: float) -> None:
    if not 0.0 <= flip_probability <= 1.0:
        raise InvalidParameterError(
            f"flip_probability must be in [0, 1], got {flip_probability}"
        )


def transmit(
    encoded: str,
    flip_probability: float,
    protected_positions: AbstractSet[int] = frozenset(),
    rng: Optional[np.random.Generator] = None,
) -> ChannelOutcome:
    """
    Send a codeword through the noisy channel.

    Args:
        encoded: Codeword to transmit
        flip_probability: Independent per-bit flip probability in [0, 1]
        protected_positions: Indices exempt from flips (e.g. check bits);
            indices outside the codeword are ignored
        rng: Injected random source (a fresh unseeded one if None)

    Returns:
        ChannelOutcome with the received bitstring and every index whose
        random draw fired

    Raises:
        InvalidParameterError: If flip_probability is outside [0, 1]

    Notes:
        One uniform draw is taken per bit, protected or not, so the random
        stream consumed depends only on the codeword length.

    Example:
        >>> outcome = transmit('0110011', 0.0)
        >>> assert outcome.received == '0110011' and not outcome.flipped_positions
    """
    validate_bits(encoded)
    _validate_probability(flip_probability)

    if rng is None:
        rng = make_rng()

    if len(encoded) == 0:
        return ChannelOutcome(received=encoded, flipped_positions=frozenset())

    draws = rng.random(len(encoded))
    flip_mask = draws < flip_probability

    for pos in protected_positions:
        if 0 <= pos < len(encoded):
            flip_mask[pos] = False

    flipped = frozenset(int(i) for i in np.flatnonzero(flip_mask))
    received = flip_bits(encoded, sorted(flipped))

    return ChannelOutcome(received=received, flipped_positions=flipped)


def inject_errors(encoded: str, positions: Iterable[int]) -> ChannelOutcome:
    """
    Flip exactly the given positions.

    Used to reproduce a specific error pattern, e.g. the two-flip case that
    parity cannot see.

    Raises:
        InvalidParameterError: If a position is out of range
    """
    flipped = frozenset(positions)
    received = flip_bits(encoded, sorted(flipped))
    return ChannelOutcome(received=received, flipped_positions=flipped)


def inject_burst(encoded: str, start: int, length: int) -> ChannelOutcome:
    """
    Flip a contiguous run of ``length`` bits beginning at ``start``.

    Raises:
        InvalidParameterError: If the burst does not fit inside the codeword
    """
    validate_bits(encoded)
    if length < 0:
        raise InvalidParameterError(f"burst length must be >= 0, got {length}")
    if start < 0 or start + length > len(encoded):
        raise InvalidParameterError(
            f"Burst [{start}, {start + length}) exceeds codeword length {len(encoded)}"
        )

    return inject_errors(encoded, range(start, start + length))
