"""
Payload codecs for the ledger.

Both payloads are UTF-8 JSON. A record is an object with the fields
``name``, ``value``, ``timestamp``, ``category`` and ``description``; the
index is a plain ordered list of record ids.
"""

from __future__ import annotations

import json

from pydantic import BaseModel, ValidationError

from .errors import DecodeError
from .models import Record


class _RecordPayload(BaseModel):
    """Wire shape of a record payload."""

    name: str
    value: str
    timestamp: int
    category: str = ""
    description: str = ""


def _load_json(payload: bytes) -> object:
    try:
        return json.loads(payload.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Payload is not UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Payload is not valid JSON: {exc}") from exc


class RecordCodec:
    """Encode and decode single record payloads."""

    @staticmethod
    def encode(record: Record) -> bytes:
        payload = {
            "name": record.name,
            "value": record.encrypted_value,
            "timestamp": record.timestamp,
            "category": record.category,
            "description": record.description,
        }
        return json.dumps(payload).encode("utf-8")

    @staticmethod
    def decode(record_id: str, payload: bytes) -> Record:
        """Decode a record payload stored under ``record_id``.

        Raises:
            DecodeError: On malformed or truncated payloads.
        """
        data = _load_json(payload)
        if not isinstance(data, dict):
            raise DecodeError(f"Record {record_id} payload is not an object")
        try:
            wire = _RecordPayload.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(
                f"Record {record_id} payload is incomplete: {exc.error_count()} error(s)"
            ) from exc
        return Record(
            id=record_id,
            name=wire.name,
            category=wire.category,
            description=wire.description,
            encrypted_value=wire.value,
            timestamp=wire.timestamp,
        )


class IndexCodec:
    """Encode and decode the ordered id index."""

    @staticmethod
    def encode(ids: list[str]) -> bytes:
        return json.dumps(list(ids)).encode("utf-8")

    @staticmethod
    def decode(payload: bytes) -> list[str]:
        """Decode the index; empty or blank payloads mean no records yet.

        Raises:
            DecodeError: If the payload is not a JSON list of strings.
        """
        if not payload or not payload.strip():
            return []
        data = _load_json(payload)
        if not isinstance(data, list) or not all(isinstance(i, str) for i in data):
            raise DecodeError("Index payload is not a list of ids")
        return data
