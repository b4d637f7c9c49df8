"""
sv_core.canonical
-----------------
Canonical byte form of a message, used identically at sign and verify time.

CRLF dialect: every line is terminated with CRLF (blank lines kept).
LF dialect: lines joined with LF, trailing blank lines dropped, exactly
one trailing LF when the message is non-empty.

Both forms are total over arbitrary bytes and idempotent.
"""

from __future__ import annotations
from typing import List, Optional

from .dialect import Dialect, CRLF, CRLF_DIALECT


def split_lines(raw: bytes) -> List[bytes]:
    # A trailing LF terminates the last line; it does not start a new one.
    if not raw:
        return []
    lines = raw.split(b"\n")
    if raw.endswith(b"\n"):
        lines.pop()
    return lines


def canonicalize(raw: bytes, dialect: Optional[Dialect] = None) -> bytes:
    dialect = dialect or CRLF_DIALECT
    lines = split_lines(bytes(raw))

    if dialect.newline == CRLF:
        # one CR, as a CRLF reader would consume it
        return b"".join((l[:-1] if l.endswith(b"\r") else l) + CRLF for l in lines)

    lines = [l.rstrip(b"\r") for l in lines]
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        return b""
    return b"\n".join(lines) + b"\n"
