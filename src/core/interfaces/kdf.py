"""Key-stretching contract.

Why Protocol:
- Structural typing keeps the service independent of the crypto backend.
- Any object with a matching `derive_key` can stand in (tests, other backends),
  as long as it honours the same determinism rules.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyDeriver(Protocol):
    """Minimal contract for a key-stretching backend.

    Design rules:
    - `derive_key` is synchronous; async callers run it in a worker thread.
    - Identical inputs must always yield identical bytes.
    - Failures of the primitive surface as `DerivationError`.
    """

    def derive_key(self, master_secret: str, pepper: str, context: str, version: str) -> bytearray:
        """Return fresh key material for the four inputs."""

        ...
