#Description: Request canonicalization and HMAC-SHA256 signing for the OKX Web3 API.

import base64
import hashlib
import hmac
import json
from datetime import datetime, timezone
from typing import Any, Mapping
from urllib.parse import urlencode


def _scalar(value: Any) -> str:
    """
    Render a query value as text: str as-is, bool as true/false, int, float
    (integral floats without the trailing .0) and lists/tuples of those joined
    with ','.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else _scalar(v) for v in value)
    return str(value)


def build_query(query: Mapping[str, Any] | None = None) -> str:
    """
    Canonical query string: None values dropped, keys sorted by code point,
    form-urlencoded, joined with '&' and prefixed with '?' only when non-empty.
    """
    if not query:
        return ""
    pairs = sorted((k, _scalar(v)) for k, v in query.items() if v is not None)
    encoded = urlencode(pairs)
    return f"?{encoded}" if encoded else ""


def serialize_body(body: Any) -> str | None:
    """Compact JSON exactly as it goes on the wire; None means no body."""
    if body is None:
        return None
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def iso_timestamp(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def signing_payload(ts: str, method: str, path: str, query_string: str, body: str | None) -> str:
    """
    GET signs over the canonical query string (with its leading '?').
    Every other method signs over the serialized body and ignores any query
    string sent alongside it. The remote verifier rebuilds it the same way.
    """
    if method == "GET":
        return ts + method + path + query_string
    return ts + method + path + (body or "")


def sign(ts: str, method: str, path: str, query_string: str, body: str | None, secret: str) -> str:
    payload = signing_payload(ts, method, path, query_string, body)
    digest = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")
