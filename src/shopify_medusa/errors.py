from __future__ import annotations


class ConversionError(Exception):
    """Base class for failures that abort a single conversion."""


class OptionsError(ConversionError):
    pass


class DecodeError(ConversionError):
    pass


class EmptyInputError(ConversionError):
    def __init__(self, message: str = "No products found in CSV") -> None:
        super().__init__(message)


class EncodeError(ConversionError):
    pass
