# sv_core/keys.py
"""
Hex key material: parsing, key files and key-pair generation.

Key files hold a single hex string (surrounding whitespace ignored).
    pubkey   32-byte public key      (64 hex chars, mode 0644)
    seckey   64-byte seed||public    (128 hex chars, mode 0600)
A bare 32-byte seed is accepted wherever a private key is read.
"""

from __future__ import annotations
from typing import Tuple
import os

from .constants import PUBLIC_KEY_SIZE, SEED_SIZE, PRIVATE_KEY_SIZE, PUBKEY_FILE, SECKEY_FILE
from .crypto import ed25519_generate, ed25519_public
from .errors import KeyFormatError
from .logger import get_logger
from .utils import hexe, hexd, fingerprint

log = get_logger("sv.keys")


def _decode_hex(text: str, what: str) -> bytes:
    try:
        return hexd(text.strip())
    except ValueError:
        raise KeyFormatError(f"{what} is not valid hex")


def parse_public_key(text: str) -> bytes:
    raw = _decode_hex(text, "public key")
    if len(raw) != PUBLIC_KEY_SIZE:
        raise KeyFormatError(f"public key must be {PUBLIC_KEY_SIZE} bytes, got {len(raw)}")
    return raw


def check_private_key(raw: bytes) -> bytes:
    """Validate raw private key bytes; returns the 64-byte seed||public form."""
    if len(raw) == SEED_SIZE:
        return raw + ed25519_public(raw)
    if len(raw) != PRIVATE_KEY_SIZE:
        raise KeyFormatError(f"private key must be {PRIVATE_KEY_SIZE} bytes, got {len(raw)}")
    if ed25519_public(raw) != raw[SEED_SIZE:]:
        raise KeyFormatError("private key does not match its public half")
    return raw


def parse_private_key(text: str) -> bytes:
    """Returns the 64-byte seed||public form."""
    return check_private_key(_decode_hex(text, "private key"))


def _read_text(path: str) -> str:
    with open(path, "r", encoding="ascii", errors="replace") as f:
        return f.read()


def load_public_key(path: str) -> bytes:
    pub = parse_public_key(_read_text(path))
    log.debug(f"loaded public key fpr={fingerprint(pub)} from {path}")
    return pub


def load_private_key(path: str) -> bytes:
    priv = parse_private_key(_read_text(path))
    log.debug(f"loaded private key for fpr={fingerprint(priv[SEED_SIZE:])} from {path}")
    return priv


def generate_keypair() -> Tuple[str, str]:
    """Returns (public hex, private hex)."""
    pub, priv = ed25519_generate()
    log.info(f"generated key pair fpr={fingerprint(pub)}")
    return hexe(pub), hexe(priv)


def _write(path: str, data: str, mode: int) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "w", encoding="ascii") as f:
        f.write(data)
    os.chmod(path, mode)


def write_keypair(directory: str = ".") -> Tuple[str, str]:
    """Generate a key pair into `pubkey` / `seckey` under directory; returns both paths."""
    os.makedirs(directory, exist_ok=True)
    pub_hex, priv_hex = generate_keypair()
    pub_path = os.path.join(directory, PUBKEY_FILE)
    sec_path = os.path.join(directory, SECKEY_FILE)
    _write(pub_path, pub_hex, 0o644)
    _write(sec_path, priv_hex, 0o600)
    log.info(f"wrote {pub_path} and {sec_path}")
    return pub_path, sec_path
