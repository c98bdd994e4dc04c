# file: src/module2_codecs/__init__.py

"""
Module 2: Error-Control Codecs

Three codecs over bitstrings:
    - Even parity (detect odd numbers of flips)
    - Hamming(7,4) (correct one flip in 7 bits)
    - CRC with a configurable generator polynomial (detect)

Public API:
    - parity_encode(data) -> str / parity_verify(data) -> bool
    - hamming_encode(data) -> str / hamming_decode(encoded) -> DecodeResult
    - crc_remainder(message, polynomial) -> str
    - crc_encode(data, polynomial) -> str / crc_verify(encoded, polynomial) -> bool
    - codec_encode(data, config) -> str / codec_check(received, n, config) -> CheckResult
"""

from .parity import parity_encode, parity_verify, parity_check_positions
from .hamming import (
    DecodeResult,
    hamming_encode,
    hamming_decode,
    hamming_syndrome,
    hamming_check_positions,
    HAMMING_DATA_BITS,
    HAMMING_CODE_BITS,
)
from .crc import (
    DEFAULT_POLYNOMIAL,
    validate_polynomial,
    crc_remainder,
    crc_encode,
    crc_verify,
    crc_check_positions,
)
from .dispatch import (
    CODEC_TYPES,
    CheckResult,
    CodecConfigurationError,
    codec_encode,
    codec_check,
    codec_check_positions,
)

__version__ = "1.0.0"

__all__ = [
    "parity_encode",
    "parity_verify",
    "parity_check_positions",
    "DecodeResult",
    "hamming_encode",
    "hamming_decode",
    "hamming_syndrome",
    "hamming_check_positions",
    "HAMMING_DATA_BITS",
    "HAMMING_CODE_BITS",
    "DEFAULT_POLYNOMIAL",
    "validate_polynomial",
    "crc_remainder",
    "crc_encode",
    "crc_verify",
    "crc_check_positions",
    "CODEC_TYPES",
    "CheckResult",
    "CodecConfigurationError",
    "codec_encode",
    "codec_check",
    "codec_check_positions",
]
