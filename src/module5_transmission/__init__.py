# file: src/module5_transmission/__init__.py

"""
Module 5: Transmission Session

Tick-driven state machine for stepping a single transmission through its
phases (idle → sending → transmitted → complete). Holds no timers; the
caller supplies the ticks.
"""

from .session import TransmissionSession, TransmissionPhase, SessionStateError

__all__ = [
    'TransmissionSession',
    'TransmissionPhase',
    'SessionStateError',
]
