"""Character classes and alphabet composition.

The four classes are fixed. Their declaration order is the canonical order:
it defines the index-to-character mapping of the composed alphabet, so it
must never change or every derived password changes with it.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from core.domain.errors import EmptySelectionError, UnknownCharacterClassError


class CharacterClass(str, Enum):
    """Selectable character classes, in canonical order."""

    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    DIGITS = "digits"
    SPECIAL = "special"

    @classmethod
    def parse(cls, value: "str | CharacterClass") -> "CharacterClass":
        """Parse a class name (case-insensitive, `numbers` is accepted for digits)."""

        if isinstance(value, CharacterClass):
            return value
        if not isinstance(value, str):
            raise UnknownCharacterClassError(value)
        name = value.strip().lower()
        if name == "numbers":
            return cls.DIGITS
        try:
            return cls(name)
        except ValueError as exc:
            raise UnknownCharacterClassError(value) from exc

    @property
    def characters(self) -> str:
        return CHARSETS[self]

    @property
    def representative(self) -> str:
        """Character injected when a password lacks this class."""

        return CHARSETS[self][0]


CHARSETS: dict[CharacterClass, str] = {
    CharacterClass.UPPERCASE: "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    CharacterClass.LOWERCASE: "abcdefghijklmnopqrstuvwxyz",
    CharacterClass.DIGITS: "0123456789",
    CharacterClass.SPECIAL: "!@#$%^&*()-_=+[]{}|;:,.<>?",
}


def canonical_order(selection: Iterable["str | CharacterClass"]) -> tuple[CharacterClass, ...]:
    """Return the selected classes without duplicates, in canonical order."""

    chosen = {CharacterClass.parse(item) for item in selection}
    return tuple(cls for cls in CharacterClass if cls in chosen)


def build_alphabet(selection: Iterable["str | CharacterClass"]) -> str:
    """Concatenate the selected class strings in canonical order.

    The classes are disjoint, so the result is duplicate-free.
    """

    ordered = canonical_order(selection)
    if not ordered:
        raise EmptySelectionError()
    return "".join(CHARSETS[cls] for cls in ordered)

