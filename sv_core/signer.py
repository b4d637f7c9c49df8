"""
sv_core.signer
--------------
Produce and check clear-signed documents.

    sign(raw, priv)          canonicalize -> Ed25519 sign -> encode
    verify(text, pub=None)   decode -> Ed25519 verify -> bool

An invalid signature is a normal False result. Only malformed envelopes
(FormatError) and unusable keys (KeyFormatError) raise.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from .canonical import canonicalize
from .constants import PUBLIC_KEY_SIZE
from .crypto import ed25519_sign, ed25519_verify, ed25519_public
from .dialect import Dialect, CRLF_DIALECT
from .envelope import Envelope, encode, decode
from .errors import KeyFormatError
from .keys import check_private_key
from .logger import get_logger
from .utils import fingerprint

log = get_logger("sv.signer")


@dataclass
class VerifyResult:
    valid: bool
    envelope: Envelope
    public_key: bytes

    def __bool__(self) -> bool:
        return self.valid


def message_region(raw: bytes, dialect: Dialect) -> bytes:
    """
    Input up to (not including) its first marker line.

    Lets an already signed document be signed again: the old signature
    block and the newline the encoder put before the marker are dropped.
    """
    marker = dialect.marker_bytes
    offset = 0
    for line in raw.split(b"\n"):
        if (line[:-1] if line.endswith(b"\r") else line) == marker:
            if offset == 0:
                return b""
            end = offset - 1
            if raw[end - 1:end] == b"\r":
                end -= 1
            return raw[:end]
        offset += len(line) + 1
    return raw


def sign(raw: bytes, priv_raw: bytes, dialect: Optional[Dialect] = None,
         line_width: Optional[int] = None, embed_key: Optional[bool] = None) -> bytes:
    dialect = (dialect or CRLF_DIALECT).with_options(embed_key=embed_key)
    priv_raw = check_private_key(priv_raw)

    body = message_region(bytes(raw), dialect)
    if len(body) != len(raw):
        log.info("input already carries a signature block; re-signing message part")

    message = canonicalize(body, dialect)
    sig = ed25519_sign(priv_raw, message)

    pub = None
    if dialect.embed_key:
        pub = ed25519_public(priv_raw)
        log.info(f"signed {len(message)} bytes dialect={dialect.name} fpr={fingerprint(pub)}")
    else:
        log.info(f"signed {len(message)} bytes dialect={dialect.name}")

    return encode(message, sig, pub, line_width=line_width, dialect=dialect)


def check(text: Union[bytes, str], pub_raw: Optional[bytes] = None,
          dialect: Optional[Dialect] = None) -> VerifyResult:
    dialect = dialect or CRLF_DIALECT
    env = decode(text, dialect=dialect)

    if pub_raw is None:
        pub_raw = env.public_key
        if pub_raw is None:
            raise KeyFormatError("no public key given and none embedded in the envelope")
    elif env.public_key is not None and env.public_key != pub_raw:
        log.warning(
            f"embedded key fpr={fingerprint(env.public_key)} differs from given key "
            f"fpr={fingerprint(pub_raw)}; using the given key"
        )

    if len(pub_raw) != PUBLIC_KEY_SIZE:
        raise KeyFormatError(f"public key must be {PUBLIC_KEY_SIZE} bytes, got {len(pub_raw)}")

    valid = ed25519_verify(pub_raw, env.signature, env.message)
    log.info(f"verify fpr={fingerprint(pub_raw)} valid={valid}")
    return VerifyResult(valid=valid, envelope=env, public_key=pub_raw)


def verify(text: Union[bytes, str], pub_raw: Optional[bytes] = None,
           dialect: Optional[Dialect] = None) -> bool:
    return check(text, pub_raw, dialect=dialect).valid
