"""Domain errors.

Validation errors (`InvalidLengthError`, `EmptySelectionError`) are
caller-correctable and are raised before any cryptographic work starts.
`DerivationError` signals a failure of the key-stretching primitive; it is
fatal for that call but safe to retry with identical inputs.
"""

from __future__ import annotations


class PwDeriveError(Exception):
    """Base class for every error raised by the derivation core."""


class InvalidLengthError(PwDeriveError, ValueError):
    def __init__(self, length: object, minimum: int, maximum: int) -> None:
        self.length = length
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Password length must be between {minimum} and {maximum} characters (got {length!r})."
        )


class EmptySelectionError(PwDeriveError, ValueError):
    def __init__(self) -> None:
        super().__init__("At least one character class must be selected.")


class UnknownCharacterClassError(PwDeriveError, ValueError):
    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown character class: {value!r}.")


class DerivationError(PwDeriveError, RuntimeError):
    """The underlying key-stretching primitive failed."""


class InvalidInputError(PwDeriveError, TypeError):
    def __init__(self, name: str, value: object) -> None:
        self.name = name
        super().__init__(f"{name} must be a string (got {type(value).__name__}).")
