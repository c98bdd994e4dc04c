# file: src/module2_codecs/dispatch.py

"""
Config-driven codec entry points.

Provides codec_encode() / codec_check() so callers that only know a
technique name (the transmission session, the experiment runner) can drive
any of the three codecs through one interface.

Configuration Schema:
    config['codec']['type']: 'parity' | 'hamming' | 'crc' (required)
    config['codec']['crc']['polynomial']: Generator bitstring (default: "1011")
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from ..module1_bitstring.errors import InvalidParameterError
from .crc import DEFAULT_POLYNOMIAL, crc_check_positions, crc_encode, crc_verify
from .hamming import hamming_check_positions, hamming_decode, hamming_encode
from .parity import parity_check_positions, parity_encode, parity_verify

CODEC_TYPES = ('parity', 'hamming', 'crc')


class CodecConfigurationError(InvalidParameterError):
    """Raised when the codec section of a config is missing or invalid."""
    pass


@dataclass(frozen=True)
class CheckResult:
    """Receiver-side verdict for one received codeword."""
    error_detected: bool
    corrected: bool
    decoded: str  # Payload as the receiver sees it after any correction
    error_position: Optional[int] = None


def _codec_type(config: Dict[str, Any]) -> str:
    try:
        codec_type = config['codec']['type']
    except (KeyError, TypeError) as e:
        raise CodecConfigurationError(f"Missing required config key: {e}") from e

    if codec_type not in CODEC_TYPES:
        raise CodecConfigurationError(f"Unknown codec type: {codec_type}")

    return codec_type


def _polynomial(config: Dict[str, Any]) -> str:
    return config['codec'].get('crc', {}).get('polynomial', DEFAULT_POLYNOMIAL)


def codec_encode(data: str, config: Dict[str, Any]) -> str:
    """
    Encode a payload with the codec selected in ``config``.

    Raises:
        CodecConfigurationError: If configuration is invalid
        InvalidLengthError: If Hamming is selected and data is not 4 bits
    """
    codec_type = _codec_type(config)

    if codec_type == 'parity':
        return parity_encode(data)
    elif codec_type == 'hamming':
        return hamming_encode(data)
    else:
        return crc_encode(data, _polynomial(config))


def codec_check(received: str, data_length: int, config: Dict[str, Any]) -> CheckResult:
    """
    Run the receiver-side check for the codec selected in ``config``.

    Args:
        received: Codeword as it came out of the channel
        data_length: Payload length that was encoded
        config: Configuration dictionary with 'codec' section

    Returns:
        CheckResult; for parity and CRC ``decoded`` is the leading payload
        slice of ``received`` since neither code corrects anything
    """
    codec_type = _codec_type(config)

    if codec_type == 'hamming':
        result = hamming_decode(received)
        return CheckResult(
            error_detected=result.corrected,
            corrected=result.corrected,
            decoded=result.data,
            error_position=result.error_position,
        )

    if codec_type == 'parity':
        ok = parity_verify(received)
    else:
        ok = crc_verify(received, _polynomial(config))

    return CheckResult(error_detected=not ok, corrected=False, decoded=received[:data_length])


def codec_check_positions(encoded_length: int, config: Dict[str, Any]) -> FrozenSet[int]:
    """Check-bit indices of a codeword produced by the configured codec."""
    codec_type = _codec_type(config)

    if codec_type == 'parity':
        return parity_check_positions(encoded_length)
    elif codec_type == 'hamming':
        return hamming_check_positions()
    else:
        return crc_check_positions(encoded_length, _polynomial(config))
