# file: src/module5_transmission/session.py

"""
Transmission Session

Step-by-step walk through a single transmission with one technique, for
front ends that reveal the phases one at a time. The session never sleeps or
schedules anything; the caller decides when to advance by calling tick().

Phases:
    idle → sending → transmitted → complete

    start():  idle/complete → sending    (payload encoded)
    tick():   sending → transmitted      (codeword sent through the channel)
    tick():   transmitted → complete     (receiver-side check)
    tick():   complete → complete        (no-op)
"""

from enum import Enum
from typing import Any, Dict, Optional

import numpy as np

from ..module1_bitstring.bitstring import make_rng, validate_bits
from ..module1_bitstring.errors import ErrorControlError, InvalidParameterError
from ..module2_codecs.crc import DEFAULT_POLYNOMIAL
from ..module2_codecs.dispatch import (
    CODEC_TYPES,
    CheckResult,
    CodecConfigurationError,
    codec_check,
    codec_check_positions,
    codec_encode,
)
from ..module3_channel.channel import ChannelOutcome, transmit


class SessionStateError(ErrorControlError):
    """Raised when a session is driven out of phase order."""
    pass


class TransmissionPhase(str, Enum):
    IDLE = 'idle'
    SENDING = 'sending'
    TRANSMITTED = 'transmitted'
    COMPLETE = 'complete'


class TransmissionSession:
    """
    One payload, one technique, one trip through the channel.

    Attributes populated as phases are reached:
        encoded:  codeword (from sending)
        outcome:  ChannelOutcome (from transmitted)
        check:    CheckResult (at complete)
    """

    def __init__(
        self,
        technique: str,
        data: str,
        flip_probability: float,
        polynomial: str = DEFAULT_POLYNOMIAL,
        protect_check_bits: bool = False,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize session.

        Args:
            technique: 'parity', 'hamming' or 'crc'
            data: Payload bitstring (exactly 4 bits for Hamming)
            flip_probability: Channel flip probability in [0, 1]
            polynomial: CRC generator (ignored by other techniques)
            protect_check_bits: Exempt the codec's check bits from flips
            rng: Injected random source for the channel

        Raises:
            CodecConfigurationError: If technique is unknown
            InvalidParameterError: If flip_probability is outside [0, 1]
        """
        if technique not in CODEC_TYPES:
            raise CodecConfigurationError(f"Unknown codec type: {technique}")
        if not 0.0 <= flip_probability <= 1.0:
            raise InvalidParameterError(
                f"flip_probability must be in [0, 1], got {flip_probability}"
            )

        self.config: Dict[str, Any] = {
            'codec': {'type': technique, 'crc': {'polynomial': polynomial}}
        }
        self.data = validate_bits(data)
        self.flip_probability = flip_probability
        self.protect_check_bits = protect_check_bits
        self.rng = rng if rng is not None else make_rng()

        self.phase = TransmissionPhase.IDLE
        self.encoded: Optional[str] = None
        self.outcome: Optional[ChannelOutcome] = None
        self.check: Optional[CheckResult] = None

    @property
    def technique(self) -> str:
        return self.config['codec']['type']

    @property
    def is_complete(self) -> bool:
        return self.phase == TransmissionPhase.COMPLETE

    def start(self) -> TransmissionPhase:
        """Encode the payload and enter the sending phase."""
        if self.phase not in (TransmissionPhase.IDLE, TransmissionPhase.COMPLETE):
            raise SessionStateError(f"Cannot start while {self.phase.value}")

        self._clear()
        self.encoded = codec_encode(self.data, self.config)
        self.phase = TransmissionPhase.SENDING
        return self.phase

    def tick(self) -> TransmissionPhase:
        """Advance by one phase and return the new phase."""
        if self.phase == TransmissionPhase.IDLE:
            raise SessionStateError("Session not started")

        if self.phase == TransmissionPhase.SENDING:
            protected = frozenset()
            if self.protect_check_bits:
                protected = codec_check_positions(len(self.encoded), self.config)
            self.outcome = transmit(
                self.encoded,
                self.flip_probability,
                protected_positions=protected,
                rng=self.rng,
            )
            self.phase = TransmissionPhase.TRANSMITTED

        elif self.phase == TransmissionPhase.TRANSMITTED:
            self.check = codec_check(self.outcome.received, len(self.data), self.config)
            self.phase = TransmissionPhase.COMPLETE

        return self.phase

    def run_to_completion(self) -> CheckResult:
        """Start if needed and tick until complete."""
        if self.phase == TransmissionPhase.IDLE:
            self.start()
        while not self.is_complete:
            self.tick()
        return self.check

    def reset(self) -> None:
        """Return to idle, discarding all results."""
        self._clear()
        self.phase = TransmissionPhase.IDLE

    def _clear(self) -> None:
        self.encoded = None
        self.outcome = None
        self.check = None
