"""Content fingerprinting for change detection.

A fingerprint is the SHA-256 hex digest of an asset body's bytes.  It never
depends on the asset path, a timestamp, or the build number, so identical
bytes always produce identical fingerprints.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from typing import Any

Body = str | bytes | bytearray | memoryview | Sequence[Any]


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def body_bytes(body: Body) -> bytes:
    """Coerce an asset body into the exact bytes that will be written.

    Text is UTF-8 encoded.  A list or tuple is treated as a sequence of
    fragments and concatenated in the order given.
    """
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, (list, tuple)):
        return b"".join(body_bytes(fragment) for fragment in body)
    raise TypeError(
        f"Unsupported asset body type {type(body).__name__}; "
        "expected str, bytes, or a sequence of fragments"
    )


def fingerprint(data: bytes) -> str:
    """Fingerprint a body that has already been coerced to bytes."""
    return sha256_hex(data)


def fingerprint_body(body: Body) -> str:
    """Fingerprint any supported body form."""
    return fingerprint(body_bytes(body))
