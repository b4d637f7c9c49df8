# sv_core/dialect.py
"""
Envelope dialects.

A Dialect bundles everything signer and verifier must agree on: the
canonical line-ending policy, the marker line, how the signature is
wrapped and whether a public key line follows it.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Dict, Any
import os

from .constants import DEFAULT_MARKER, DIALECT_CRLF, DIALECT_LF, DEFAULT_DIALECT

CRLF = b"\r\n"
LF = b"\n"


@dataclass(frozen=True)
class Dialect:
    name: str
    marker: str = DEFAULT_MARKER
    newline: bytes = CRLF       # CRLF -> terminate every line; LF -> single trailing LF
    line_width: int = 0         # 0 = signature hex on one line
    embed_key: bool = False     # encoder appends the public key line

    def __post_init__(self):
        if self.newline not in (CRLF, LF):
            raise ValueError(f"unsupported newline: {self.newline!r}")
        if not self.marker or "\n" in self.marker or "\r" in self.marker:
            raise ValueError("marker must be a non-empty single line")
        if self.line_width < 0:
            raise ValueError("line_width must be >= 0")

    @property
    def marker_bytes(self) -> bytes:
        return self.marker.encode("utf-8")

    def with_options(self, **changes) -> "Dialect":
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes) if changes else self


# Two signature lines of 64 and the signer's key, as written by the original sv tool.
CRLF_DIALECT = Dialect(name=DIALECT_CRLF, newline=CRLF, line_width=64, embed_key=True)
LF_DIALECT = Dialect(name=DIALECT_LF, newline=LF, line_width=0, embed_key=False)

DIALECTS: Dict[str, Dialect] = {
    DIALECT_CRLF: CRLF_DIALECT,
    DIALECT_LF: LF_DIALECT,
}


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_dialect(config: Optional[Dict[str, Any]] = None) -> Dialect:
    """
    Resolve the active dialect.

    Precedence per field: explicit config dict, then SV_* environment
    variables, then the named dialect's own defaults.

        dialect     SV_DIALECT      crlf (default) | lf
        marker      SV_MARKER
        line_width  SV_LINE_WIDTH
        embed_key   SV_EMBED_KEY
    """
    config = config or {}
    name = (config.get("dialect") or os.getenv("SV_DIALECT", DEFAULT_DIALECT)).lower()
    if name not in DIALECTS:
        raise ValueError(f"Unknown dialect: {name}")
    base = DIALECTS[name]

    marker = config.get("marker") or os.getenv("SV_MARKER") or None

    line_width = config.get("line_width")
    if line_width is None and os.getenv("SV_LINE_WIDTH"):
        line_width = int(os.environ["SV_LINE_WIDTH"])

    embed_key = config.get("embed_key")
    if embed_key is None and os.getenv("SV_EMBED_KEY"):
        embed_key = _as_bool(os.environ["SV_EMBED_KEY"])

    return base.with_options(marker=marker, line_width=line_width, embed_key=embed_key)
