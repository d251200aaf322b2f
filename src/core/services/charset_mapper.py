"""Unbiased mapping of key material onto an alphabet.

Bytes are read as a cyclic stream (index modulo the buffer length). A byte `b`
is accepted only when `b < 256 - 256 % n`, which removes modulo bias; accepted
bytes select `alphabet[b % n]`.
"""

from __future__ import annotations

from typing import Sequence

BYTE_SPACE = 256


def rejection_threshold(alphabet_length: int) -> int:
    return BYTE_SPACE - (BYTE_SPACE % alphabet_length)


def map_bytes_to_charset(key_material: Sequence[int], alphabet: str, length: int) -> str:
    """Produce exactly `length` characters drawn from `alphabet`.

    The stream keeps cycling until `length` characters are accepted; it never
    returns a short string. A buffer whose every byte is rejected would cycle
    forever, so it is reported as `ValueError` after one unproductive pass.
    """

    if length < 0:
        raise ValueError("length must be non-negative")
    if not key_material:
        raise ValueError("key material is empty")
    alphabet_length = len(alphabet)
    if alphabet_length == 0:
        raise ValueError("alphabet is empty")
    if alphabet_length > BYTE_SPACE:
        raise ValueError(f"alphabet cannot exceed {BYTE_SPACE} characters")

    threshold = rejection_threshold(alphabet_length)
    buffer_length = len(key_material)
    out: list[str] = []
    index = 0
    accepted_in_pass = 0

    while len(out) < length:
        byte = key_material[index % buffer_length]
        if byte < threshold:
            out.append(alphabet[byte % alphabet_length])
            accepted_in_pass += 1
        index += 1
        if index % buffer_length == 0:
            if accepted_in_pass == 0:
                raise ValueError("no byte of the key material falls below the rejection threshold")
            accepted_in_pass = 0

    return "".join(out)
