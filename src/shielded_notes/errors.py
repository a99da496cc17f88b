"""
Error types raised when note inputs fail validation.

Every error is a ValueError subclass carrying the name of the field that
failed, so callers (and the REST layer) can report which input was bad.
Errors are raised at construction or call time; nothing is coerced.
"""

from __future__ import annotations


class InvalidInput(ValueError):
    """Base class for rejected note, token or codec inputs."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class InvalidKeyLength(InvalidInput):
    """Spending or viewing key is not exactly 32 bytes."""
    pass


class InvalidRandomLength(InvalidInput):
    """Note random is not exactly 16 bytes."""
    pass


class ValueOutOfRange(InvalidInput):
    """A numeric value falls outside its allowed range."""
    pass


class InvalidTokenData(InvalidInput):
    """Token data failed validation (type, address or sub-id)."""
    pass


class InvalidAddress(InvalidInput):
    """Address string does not match 0x + 40 hex digits."""
    pass


class FieldElementOutOfRange(InvalidInput):
    """A hash input is not a canonical element of the scalar field."""
    pass
