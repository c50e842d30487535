"""Encode/decode Python values to/from Firestore REST API 'fields' format."""

import base64
import re
from datetime import UTC, datetime
from typing import Any

# Firestore may return nanosecond precision; datetime keeps microseconds.
_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


def _encode_value(v: Any) -> dict:
    if v is None:
        return {"nullValue": None}
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        return {"integerValue": str(v)}
    if isinstance(v, float):
        return {"doubleValue": v}
    if isinstance(v, datetime):
        utc = v.astimezone(UTC) if v.tzinfo else v
        return {"timestampValue": utc.strftime("%Y-%m-%dT%H:%M:%S.%fZ")}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, bytes):
        return {"bytesValue": base64.standard_b64encode(v).decode("ascii")}
    if isinstance(v, (list, tuple)):
        return {"arrayValue": {"values": [_encode_value(x) for x in v]}}
    if isinstance(v, dict):
        return {"mapValue": {"fields": {k: _encode_value(x) for k, x in v.items()}}}
    raise TypeError(f"Unsupported Firestore value type: {type(v)}")


def encode_document(data: dict[str, Any]) -> dict:
    """Convert a Python dict to Firestore REST Document.fields format."""
    return {"fields": {k: _encode_value(v) for k, v in data.items()}}


def _decode_timestamp(value: str) -> datetime:
    value = _FRACTION_RE.sub(r".\1", value.replace("Z", "+00:00"))
    return datetime.fromisoformat(value)


def _decode_value(obj: dict) -> Any:
    if "nullValue" in obj:
        return None
    if "booleanValue" in obj:
        return obj["booleanValue"]
    if "integerValue" in obj:
        return int(obj["integerValue"])
    if "doubleValue" in obj:
        return obj["doubleValue"]
    if "timestampValue" in obj:
        return _decode_timestamp(obj["timestampValue"])
    if "stringValue" in obj:
        return obj["stringValue"]
    if "bytesValue" in obj:
        return base64.standard_b64decode(obj["bytesValue"])
    if "arrayValue" in obj:
        vals = obj.get("arrayValue", {}).get("values") or []
        return [_decode_value(x) for x in vals]
    if "mapValue" in obj:
        fields = obj["mapValue"].get("fields") or {}
        return {k: _decode_value(x) for k, x in fields.items()}
    return None


def decode_document(document: dict | None) -> dict:
    """Convert a Firestore REST Document (with its 'fields') to a Python dict."""
    if not document:
        return {}
    return {k: _decode_value(v) for k, v in (document.get("fields") or {}).items()}
