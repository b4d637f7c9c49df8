"""
sv Core Package
===============
Clear-signed Ed25519 text documents.

Provides:
- Canonical message form (CRLF and LF dialects)
- Envelope encode/decode with a configurable marker line
- sign / verify over raw bytes, plus hex key handling
"""

from .canonical import canonicalize
from .dialect import Dialect, CRLF_DIALECT, LF_DIALECT, load_dialect
from .envelope import Envelope, encode, decode
from .errors import SVError, FormatError, KeyFormatError
from .keys import (
    generate_keypair, write_keypair, load_private_key, load_public_key, check_private_key,
    parse_private_key, parse_public_key,
)
from .signer import sign, verify, check, VerifyResult

__all__ = [
    "canonicalize",
    "Dialect", "CRLF_DIALECT", "LF_DIALECT", "load_dialect",
    "Envelope", "encode", "decode",
    "SVError", "FormatError", "KeyFormatError",
    "generate_keypair", "write_keypair", "load_private_key", "load_public_key",
    "parse_private_key", "parse_public_key", "check_private_key",
    "sign", "verify", "check", "VerifyResult",
]
