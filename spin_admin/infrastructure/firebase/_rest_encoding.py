"""Firestore REST value format -> Python values.

Documents arrive as {"fields": {name: Value}} where each Value is a
one-key dict naming its type ("stringValue", "integerValue", ...).
Timestamps decode to aware UTC datetimes; integers arrive as strings.
The service only deletes, so nothing here encodes.
"""

import base64
import re
from datetime import UTC, datetime
from typing import Any

# Firestore returns up to nanosecond precision; datetime holds microseconds.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(raw: str) -> datetime:
    """Parse an RFC 3339 timestamp as returned by Firestore into an aware UTC datetime."""
    trimmed = _FRACTION_RE.sub(r"\1", raw.replace("Z", "+00:00"))
    return datetime.fromisoformat(trimmed).astimezone(UTC)


_DECODERS: dict[str, Any] = {
    "nullValue": lambda _: None,
    "booleanValue": bool,
    "integerValue": int,
    "doubleValue": float,
    "timestampValue": parse_timestamp,
    "stringValue": str,
    "bytesValue": base64.standard_b64decode,
    "referenceValue": str,
    "geoPointValue": dict,
    "arrayValue": lambda raw: [_decode_value(item) for item in (raw or {}).get("values") or []],
    "mapValue": lambda raw: decode_document((raw or {}).get("fields")),
}


def _decode_value(value: dict) -> Any:
    """Decode one typed Value; unknown value types decode to None."""
    for kind, raw in value.items():
        decoder = _DECODERS.get(kind)
        if decoder is not None:
            return decoder(raw)
    return None


def encode_document(data: dict[str, Any]) -> dict:
    """Python dict -> {"fields": {...}} as accepted by Firestore writes."""
    return {"fields": {name: _encode_value(value) for name, value in data.items()}}


def decode_document(fields: dict | None) -> dict:
    """A Document.fields map -> plain Python dict ({} for a document with no fields)."""
    return {name: _decode_value(value) for name, value in (fields or {}).items()}
