# file: src/module1_bitstring/errors.py

"""
Error-control exception hierarchy.

All exceptions inherit from ErrorControlError for unified handling.
Errors are raised synchronously at the offending call; nothing in the
engine retries or swallows them.
"""


class ErrorControlError(Exception):
    """Base exception for all error-control simulation errors."""
    pass


class InvalidLengthError(ErrorControlError):
    """Raised when a bitstring has the wrong length for an operation."""

    def __init__(self, message: str, expected: int = None, actual: int = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class InvalidPolynomialError(ErrorControlError):
    """Raised when a CRC generator polynomial is malformed."""
    pass


class InvalidParameterError(ErrorControlError):
    """Raised when a numeric or structural parameter is out of range."""
    pass


class InvalidBitStringError(InvalidParameterError):
    """Raised when a value is not a string of '0'/'1' characters."""
    pass
