"""Derivation orchestration.

This module is the only entry point collaborators (CLI, export, tests) use.
It runs the pipeline in order:

1. key derivation (the single potentially-blocking step),
2. unbiased mapping of the key material onto the composed alphabet,
3. requirement enforcement for the selected classes.

Nothing is cached between calls: each call builds its own key material and
wipes it before returning. Secrets and passwords are never logged.
"""

from __future__ import annotations

import asyncio
from typing import Iterable

from loguru import logger

from core.domain.charsets import CharacterClass, build_alphabet
from core.domain.errors import DerivationError
from core.domain.models import DEFAULT_VERSION, DerivationRequest
from core.interfaces.kdf import KeyDeriver
from core.services.charset_mapper import map_bytes_to_charset
from core.services.key_derivation import default_key_deriver, wipe
from core.services.requirement_enforcer import enforce_requirements, missing_classes


class DerivationService:
    """Runs the derivation pipeline with an injectable key deriver."""

    def __init__(self, kdf: KeyDeriver | None = None) -> None:
        self._kdf = kdf or default_key_deriver()

    def derive(self, request: DerivationRequest) -> str:
        alphabet = build_alphabet(request.class_selection)
        self._log_start(request)
        key_material = self._kdf.derive_key(
            request.master_secret,
            request.pepper,
            request.context,
            request.version,
        )
        return self._finish(request, alphabet, key_material)

    async def derive_async(self, request: DerivationRequest) -> str:
        """Same as `derive`, awaiting only the key-stretching step."""

        alphabet = build_alphabet(request.class_selection)
        self._log_start(request)
        key_material = await asyncio.to_thread(
            self._kdf.derive_key,
            request.master_secret,
            request.pepper,
            request.context,
            request.version,
        )
        return self._finish(request, alphabet, key_material)

    def _log_start(self, request: DerivationRequest) -> None:
        logger.debug(
            "Deriving password context={!r} version={!r} length={} classes={}",
            request.context,
            request.version,
            request.length,
            ",".join(cls.value for cls in request.ordered_classes),
        )

    def _finish(self, request: DerivationRequest, alphabet: str, key_material: bytes | bytearray) -> str:
        # Immutable bytes from a custom deriver are copied so there is a buffer to wipe.
        if not isinstance(key_material, bytearray):
            key_material = bytearray(key_material)
        try:
            candidate = map_bytes_to_charset(key_material, alphabet, request.length)
        except ValueError as exc:
            raise DerivationError(f"Key material could not be mapped: {exc}") from exc
        finally:
            wipe(key_material)

        repaired = missing_classes(candidate, request.class_selection)
        if repaired:
            logger.debug("Repairing missing classes: {}", ",".join(cls.value for cls in repaired))
        return enforce_requirements(candidate, request.class_selection)


def derive(request: DerivationRequest, *, kdf: KeyDeriver | None = None) -> str:
    return DerivationService(kdf).derive(request)


async def derive_async(request: DerivationRequest, *, kdf: KeyDeriver | None = None) -> str:
    return await DerivationService(kdf).derive_async(request)


def derive_password(
    master_secret: str,
    pepper: str,
    context: str,
    version: str = DEFAULT_VERSION,
    *,
    length: int,
    class_selection: Iterable["str | CharacterClass"] | None,
    kdf: KeyDeriver | None = None,
) -> str:
    """Flat-argument form of `derive`.

    Validation happens while building the request, before any key stretching.
    """

    request = DerivationRequest(
        master_secret=master_secret,
        pepper=pepper,
        context=context,
        version=version,
        length=length,
        class_selection=class_selection,
    )
    return derive(request, kdf=kdf)
