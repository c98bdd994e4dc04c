# file: src/module3_channel/__init__.py

"""
Module 3: Noisy Channel Simulator

Local pseudo-random bit-flip model; no real I/O.

Public API:
    - transmit(encoded, flip_probability, protected_positions, rng) -> ChannelOutcome
    - inject_errors(encoded, positions) -> ChannelOutcome
    - inject_burst(encoded, start, length) -> ChannelOutcome
"""

from .channel import ChannelOutcome, transmit, inject_errors, inject_burst

__all__ = [
    "ChannelOutcome",
    "transmit",
    "inject_errors",
    "inject_burst",
]
