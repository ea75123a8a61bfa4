from __future__ import annotations

import base64
import hashlib
import json
from typing import Any


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def canonical_json_dumps(data: Any) -> str:
    """Serialize JSON with sorted keys and compact separators."""
    return json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def board_hash(text: str) -> str:
    """SHA256 of the board document with line endings normalized."""
    return sha256_bytes(normalize_line_endings(text).encode("utf-8"))


def spec_hash(payload: dict[str, Any]) -> str:
    return sha256_bytes(canonical_json_dumps(payload).encode("utf-8"))


def board_id_from_hash(digest_hex: str) -> str:
    """12-character lowercase base32 identifier derived from a hex digest."""
    digest = bytes.fromhex(digest_hex)
    encoded = base64.b32encode(digest).decode("ascii").lower().rstrip("=")
    return encoded[:12]
