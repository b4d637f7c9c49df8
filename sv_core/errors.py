# sv_core/errors.py
from __future__ import annotations


class SVError(Exception):
    pass


class FormatError(SVError, ValueError):
    """Envelope is structurally malformed (marker, lengths, hex)."""
    pass


class KeyFormatError(SVError, ValueError):
    """Hex key material is malformed or has the wrong length."""
    pass
