"""
sv_core.utils
-------------
Small helpers for hex encoding and key fingerprints.
Hex is the only text encoding used for signatures and key material.
"""

from __future__ import annotations
import binascii, hashlib


def hexe(b: bytes) -> str:
    return b.hex()


def hexd(s: str) -> bytes:
    # strict: no whitespace, even length; raises ValueError otherwise
    return binascii.unhexlify(s.encode("ascii"))


def fingerprint(pub_raw: bytes) -> str:
    """
    Stable short fingerprint for an Ed25519 public key.

    SHA-256 of the raw key, truncated to 16 hex chars. Used in log lines
    so that key material itself is never logged.
    """
    return hashlib.sha256(pub_raw).hexdigest()[:16]
