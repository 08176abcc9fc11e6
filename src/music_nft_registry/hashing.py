from __future__ import annotations

import hashlib

from . import constants as const


def sha256(data: bytes) -> bytes:
    """
    SHA-256 digest.
    """
    h = hashlib.sha256()
    h.update(data)
    return h.digest()


def compute_file_hash(data: bytes) -> bytes:
    """
    Compute the 32-byte `file_hash` recorded in token metadata for an audio file's content.
    """
    digest = sha256(data)
    if len(digest) != const.FILE_HASH_SIZE:  # pragma: no cover
        raise RuntimeError("SHA-256 digest has unexpected size")
    return digest


def file_hash_hex(file_hash: bytes) -> str:
    return bytes(file_hash).hex()


def file_hash_from_hex(value: str) -> bytes:
    """
    Parse a hex encoded file hash.

    Raises:
        ValueError: if `value` is not hex or does not decode to 32 bytes.
    """
    try:
        raw = bytes.fromhex(value)
    except ValueError as e:
        raise ValueError("file hash must be a hex string") from e
    if len(raw) != const.FILE_HASH_SIZE:
        raise ValueError(f"file hash must be {const.FILE_HASH_SIZE} bytes")
    return raw
