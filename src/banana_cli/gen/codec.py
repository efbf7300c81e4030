from __future__ import annotations

import base64


def encode_payload(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode_payload(data: str) -> bytes:
    return base64.b64decode(data)
