"""Tests for the placeholder cipher adapter."""

from __future__ import annotations

import pytest

from extkit.cipher import SEAL_TAG, PlaceholderCipher, format_number, parse_number
from extkit.errors import FormatError


@pytest.fixture
def cipher() -> PlaceholderCipher:
    return PlaceholderCipher()


class TestSeal:
    """seal() output shape."""

    def test_tagged(self, cipher):
        assert cipher.seal(42).startswith(SEAL_TAG)

    def test_integral_value_has_no_fraction(self, cipher):
        """42 and 42.0 seal identically, as the text '42'."""
        assert cipher.seal(42) == "FHE-NDI="
        assert cipher.seal(42.0) == cipher.seal(42)

    def test_deterministic(self, cipher):
        assert cipher.seal(3.25) == cipher.seal(3.25)

    def test_not_confidential(self, cipher):
        assert cipher.confidential is False

    def test_int_sealed_as_float(self, cipher):
        """An int past float precision opens as the float it was sealed as."""
        big = 2**53 + 1
        assert format_number(big) == "9007199254740992"
        assert cipher.open(cipher.seal(big)) == float(big)


class TestOpen:
    """open() and its fallbacks."""

    @pytest.mark.parametrize("value", [0, 42, -7, 3.25, 1e-9, 1e21, 123456789.125])
    def test_round_trip(self, cipher, value):
        assert cipher.open(cipher.seal(value)) == value

    def test_legacy_plain_number(self, cipher):
        assert cipher.open("17.5") == 17.5

    def test_legacy_numeric_prefix(self, cipher):
        assert cipher.open("12abc") == 12.0

    def test_legacy_garbage_raises(self, cipher):
        with pytest.raises(FormatError):
            cipher.open("not-a-number")

    def test_corrupted_base64_raises(self, cipher):
        with pytest.raises(FormatError, match="Corrupted"):
            cipher.open("FHE-@@@not base64")

    def test_tagged_non_numeric_raises(self, cipher):
        with pytest.raises(FormatError, match="not numeric"):
            cipher.open("FHE-aGVsbG8=")


def test_format_number_rejects_bool():
    with pytest.raises(TypeError):
        format_number(True)


def test_parse_number_leading_whitespace():
    assert parse_number("  -2.5e2xyz") == -250.0
