"""
Cipher adapters -- how a numeric value is sealed before it leaves the session.

THE BUNDLED CIPHER IS A PLACEHOLDER. ``PlaceholderCipher`` is a tagged,
reversible encoding (``FHE-`` + base64 of the number's text). Anyone holding
the payload can reverse it. It exists so that the wire format and the
reveal flow can be exercised end to end while a real scheme is plugged in
behind ``CipherAdapter``.
"""

from __future__ import annotations

import base64
import binascii
import logging
import math
import re
from abc import ABC, abstractmethod

from .errors import FormatError

logger = logging.getLogger("extkit.cipher")

SEAL_TAG = "FHE-"

_NUMERIC_PREFIX = re.compile(
    r"^\s*[+-]?(?:inf(?:inity)?|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE,
)


class CipherAdapter(ABC):
    """Pluggable seal/open capability."""

    confidential: bool = False

    @abstractmethod
    def seal(self, value: float) -> str:
        """Seal a numeric value into an opaque string."""

    @abstractmethod
    def open(self, sealed: str) -> float:
        """Reverse ``seal``.

        Raises:
            FormatError: If the sealed value cannot be reversed.
        """


def format_number(value: float) -> str:
    """Render a number the way it is stored: integral values without '.0'.

    Ints are taken as floats first, since ``open`` always yields a float.
    An int beyond float precision is sealed as its nearest float.
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric value")
    if isinstance(value, int):
        value = float(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(float(value))


def parse_number(text: str) -> float:
    """Best-effort parse of the leading numeric prefix of ``text``.

    Raises:
        FormatError: If no numeric prefix is present.
    """
    match = _NUMERIC_PREFIX.match(text)
    if not match:
        raise FormatError(f"Not a numeric value: {text[:32]!r}")
    return float(match.group(0))


class PlaceholderCipher(CipherAdapter):
    """Reversible tagged encoding standing in for a confidential scheme.

    Provides NO confidentiality. ``confidential`` is False so callers can
    tell users as much.
    """

    confidential = False

    def seal(self, value: float) -> str:
        text = format_number(value)
        return SEAL_TAG + base64.b64encode(text.encode("ascii")).decode("ascii")

    def open(self, sealed: str) -> float:
        if sealed.startswith(SEAL_TAG):
            try:
                raw = base64.b64decode(sealed[len(SEAL_TAG):], validate=True)
                text = raw.decode("ascii")
            except (binascii.Error, UnicodeDecodeError) as exc:
                raise FormatError(f"Corrupted sealed value: {exc}") from exc
            try:
                return float(text)
            except ValueError as exc:
                raise FormatError(f"Sealed value is not numeric: {text[:32]!r}") from exc

        logger.debug("Un-tagged sealed value, parsing directly")
        return parse_number(sealed)
