"""Tests for the record and index payload codecs."""

from __future__ import annotations

import json

import pytest

from extkit.codec import IndexCodec, RecordCodec
from extkit.errors import DecodeError
from extkit.models import Record


def _record(**overrides) -> Record:
    fields = {
        "id": "1760000000000-abc1234",
        "name": "Wallet Guard",
        "category": "Tools",
        "description": "Flags risky approvals",
        "encrypted_value": "FHE-NDI=",
        "timestamp": 1760000000,
    }
    fields.update(overrides)
    return Record(**fields)


class TestRecordCodec:
    """Record payload encoding."""

    def test_wire_fields(self):
        data = json.loads(RecordCodec.encode(_record()).decode("utf-8"))
        assert data == {
            "name": "Wallet Guard",
            "value": "FHE-NDI=",
            "timestamp": 1760000000,
            "category": "Tools",
            "description": "Flags risky approvals",
        }

    def test_round_trip(self):
        record = _record(description="unicode ✓ text")
        assert RecordCodec.decode(record.id, RecordCodec.encode(record)) == record

    def test_truncated_payload(self):
        payload = RecordCodec.encode(_record())[:-5]
        with pytest.raises(DecodeError, match="not valid JSON"):
            RecordCodec.decode("x", payload)

    def test_non_utf8(self):
        with pytest.raises(DecodeError, match="UTF-8"):
            RecordCodec.decode("x", b"\xff\xfe\x00")

    def test_not_an_object(self):
        with pytest.raises(DecodeError, match="not an object"):
            RecordCodec.decode("x", b"[1, 2]")

    def test_missing_value(self):
        payload = json.dumps({"name": "n", "timestamp": 1}).encode()
        with pytest.raises(DecodeError, match="incomplete"):
            RecordCodec.decode("x", payload)

    def test_optional_fields_default(self):
        payload = json.dumps({"name": "n", "value": "FHE-MQ==", "timestamp": 5}).encode()
        record = RecordCodec.decode("x", payload)
        assert record.category == ""
        assert record.description == ""


class TestIndexCodec:
    """Index payload encoding."""

    def test_empty_payload_is_empty_index(self):
        assert IndexCodec.decode(b"") == []

    def test_blank_payload_is_empty_index(self):
        assert IndexCodec.decode(b"  \n") == []

    def test_order_preserved(self):
        ids = ["c", "a", "b"]
        assert IndexCodec.decode(IndexCodec.encode(ids)) == ids

    def test_malformed(self):
        with pytest.raises(DecodeError):
            IndexCodec.decode(b"[\"a\",")

    def test_non_string_ids(self):
        with pytest.raises(DecodeError, match="list of ids"):
            IndexCodec.decode(b"[1, 2]")

    def test_not_a_list(self):
        with pytest.raises(DecodeError, match="list of ids"):
            IndexCodec.decode(b"{\"a\": 1}")
