"""Guarantee that every selected class appears in the password.

Repair is deterministic: for the i-th missing class (canonical order) the
character at position `i % len(candidate)` is replaced with the first character
of that class. Two known limitations are kept on purpose, since changing them
changes derived passwords:

- a later repair may overwrite an earlier one when the candidate is shorter
  than the number of missing classes;
- a repair may overwrite the only occurrence of a class that was present.
"""

from __future__ import annotations

from typing import Iterable

from core.domain.charsets import CharacterClass, canonical_order


def missing_classes(candidate: str, selection: Iterable["str | CharacterClass"]) -> list[CharacterClass]:
    missing: list[CharacterClass] = []
    for cls in canonical_order(selection):
        if not any(ch in cls.characters for ch in candidate):
            missing.append(cls)
    return missing


def enforce_requirements(candidate: str, selection: Iterable["str | CharacterClass"]) -> str:
    """Return `candidate` repaired so each selected class is represented."""

    if not candidate:
        return candidate
    missing = missing_classes(candidate, selection)
    if not missing:
        return candidate

    chars = list(candidate)
    for i, cls in enumerate(missing):
        chars[i % len(chars)] = cls.representative
    return "".join(chars)
