"""Key derivation (PBKDF2-HMAC-SHA256).

The three parameters below are pinned: changing any of them changes every
password ever derived, so they are not configurable.
"""

from __future__ import annotations

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from loguru import logger

from core.domain.errors import DerivationError
from core.interfaces.kdf import KeyDeriver

PBKDF2_ITERATIONS = 100_000
KEY_LENGTH = 32
HASH_NAME = "sha256"

SEPARATOR = "|"


def password_material(master_secret: str, pepper: str) -> bytes:
    # The separator is always present: ("ab", "") and ("a", "b") must differ.
    return f"{master_secret}{SEPARATOR}{pepper}".encode("utf-8")


def salt_material(context: str, version: str) -> bytes:
    return f"{context}{SEPARATOR}{version}".encode("utf-8")


def wipe(buffer: bytearray) -> None:
    """Overwrite key material in place."""

    for i in range(len(buffer)):
        buffer[i] = 0


class Pbkdf2KeyDeriver(KeyDeriver):
    """Default backend built on `cryptography`'s PBKDF2HMAC."""

    def derive_key(self, master_secret: str, pepper: str, context: str, version: str) -> bytearray:
        logger.debug(
            "Stretching key material (pbkdf2-{}, {} iterations, {} bytes)",
            HASH_NAME,
            PBKDF2_ITERATIONS,
            KEY_LENGTH,
        )
        try:
            kdf = PBKDF2HMAC(
                algorithm=hashes.SHA256(),
                length=KEY_LENGTH,
                salt=salt_material(context, version),
                iterations=PBKDF2_ITERATIONS,
            )
            return bytearray(kdf.derive(password_material(master_secret, pepper)))
        except Exception as exc:
            raise DerivationError(f"Key stretching failed: {exc.__class__.__name__}") from exc


_default_deriver = Pbkdf2KeyDeriver()


def default_key_deriver() -> Pbkdf2KeyDeriver:
    return _default_deriver


def derive_key(master_secret: str, pepper: str, context: str, version: str) -> bytearray:
    """Derive the 32-byte key material with the pinned parameters."""

    return _default_deriver.derive_key(master_secret, pepper, context, version)
