"""
sv_core.crypto
--------------
Ed25519 primitives over raw bytes, backed by `cryptography`.

Private keys are handled in the 64-byte seed||public form used by the
key files; only the leading 32-byte seed is handed to the library.
"""

from __future__ import annotations
from typing import Tuple
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519
from .constants import SEED_SIZE


# --------- Ed25519 (keygen/sign/verify) ----------
def ed25519_generate() -> Tuple[bytes, bytes]:
    """Returns (public 32 bytes, private 64 bytes seed||public)."""
    sk = ed25519.Ed25519PrivateKey.generate()
    pub = sk.public_key().public_bytes_raw()
    return pub, sk.private_bytes_raw() + pub

def ed25519_public(priv_raw: bytes) -> bytes:
    sk = ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw[:SEED_SIZE])
    return sk.public_key().public_bytes_raw()

def ed25519_sign(priv_raw: bytes, data: bytes) -> bytes:
    sk = ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw[:SEED_SIZE])
    return sk.sign(data)

def ed25519_verify(pub_raw: bytes, sig: bytes, data: bytes) -> bool:
    try:
        ed25519.Ed25519PublicKey.from_public_bytes(pub_raw).verify(sig, data)
        return True
    except InvalidSignature:
        return False
