"""
sv_core.envelope
----------------
Clear-signed text envelope: canonical message bytes, a marker line, the
signature as lowercase hex (optionally wrapped) and, in keyed dialects,
the signer's public key on a final line.

    <canonical message>
    <marker>
    <signature hex, one line or wrapped>
    [<public key hex>]

Every line after the message ends with the dialect newline. The encoder
always writes one newline before the marker; decode removes exactly that
one and returns the message bytes untouched otherwise.

Decode needs no wrap width: signature lines are read until they hold 128
hex chars, which must end on a line break; one further 64-char line is the
public key. Hex is lowercase only.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Union

from .constants import SIGNATURE_SIZE, PUBLIC_KEY_SIZE, SIGNATURE_HEX_LEN, PUBLIC_KEY_HEX_LEN
from .dialect import Dialect, CRLF_DIALECT
from .errors import FormatError
from .utils import hexe, hexd


@dataclass
class Envelope:
    message: bytes
    signature: bytes
    public_key: Optional[bytes] = None

    def to_bytes(self, dialect: Optional[Dialect] = None, line_width: Optional[int] = None) -> bytes:
        return encode(self.message, self.signature, self.public_key, line_width=line_width, dialect=dialect)

    @classmethod
    def from_bytes(cls, text: Union[bytes, str], dialect: Optional[Dialect] = None) -> "Envelope":
        return decode(text, dialect=dialect)


def wrap(hex_str: str, line_width: Optional[int]) -> List[str]:
    if not line_width:
        return [hex_str]
    return [hex_str[i:i + line_width] for i in range(0, len(hex_str), line_width)]


def encode(message: bytes, signature: bytes, public_key: Optional[bytes] = None,
           line_width: Optional[int] = None, dialect: Optional[Dialect] = None) -> bytes:
    dialect = dialect or CRLF_DIALECT
    width = dialect.line_width if line_width is None else line_width
    if width < 0:
        raise ValueError("line_width must be >= 0")
    if len(signature) != SIGNATURE_SIZE:
        raise ValueError(f"signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}")
    if public_key is not None:
        if not dialect.embed_key:
            raise ValueError(f"dialect {dialect.name!r} does not carry a public key")
        if len(public_key) != PUBLIC_KEY_SIZE:
            raise ValueError(f"public key must be {PUBLIC_KEY_SIZE} bytes, got {len(public_key)}")

    nl = dialect.newline
    lines = [dialect.marker_bytes]
    lines += [chunk.encode("ascii") for chunk in wrap(hexe(signature), width)]
    if public_key is not None:
        lines.append(hexe(public_key).encode("ascii"))

    return bytes(message) + nl + b"".join(line + nl for line in lines)


def _token_lines(region: bytes) -> List[str]:
    try:
        text = region.decode("ascii")
    except UnicodeDecodeError:
        raise FormatError("malformed hex")
    lines = (l.replace(" ", "").replace("\t", "") for l in text.splitlines())
    return [l for l in lines if l]


def _unhex(token: str) -> bytes:
    if token != token.lower():
        raise FormatError("malformed hex")
    try:
        return hexd(token)
    except ValueError:
        raise FormatError("malformed hex")


def _split_signature(lines: List[str]):
    # signature lines are consumed until 128 chars; it must end on a line break
    sig_hex = ""
    for i, line in enumerate(lines):
        sig_hex += line
        if len(sig_hex) >= SIGNATURE_HEX_LEN:
            if len(sig_hex) != SIGNATURE_HEX_LEN:
                break
            return sig_hex, lines[i + 1:]
    raise FormatError("bad signature length")


def decode(text: Union[bytes, str], dialect: Optional[Dialect] = None) -> Envelope:
    dialect = dialect or CRLF_DIALECT
    if isinstance(text, str):
        text = text.encode("utf-8")

    nl = dialect.newline
    split = nl + dialect.marker_bytes + nl
    pos = text.find(split)
    if pos < 0:
        raise FormatError("marker missing")

    message = text[:pos]
    sig_hex, rest = _split_signature(_token_lines(text[pos + len(split):]))
    signature = _unhex(sig_hex)

    public_key = None
    if len(rest) > 1:
        raise FormatError("unexpected trailing data")
    if rest:
        if len(rest[0]) != PUBLIC_KEY_HEX_LEN:
            raise FormatError("bad public key length")
        public_key = _unhex(rest[0])

    return Envelope(message=message, signature=signature, public_key=public_key)
