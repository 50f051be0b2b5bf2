"""
Location: python/mmpay_sdk/signing.py

Summary:
    HMAC-SHA256 signing shared by outbound requests and inbound callback
    verification. The signed string is "<nonce>.<body>" and the digest is
    rendered as lowercase hex.

Usage:
    client.py serializes a payload once with serialize_body(), signs the
    resulting bytes and transmits those same bytes. verifier.py recomputes
    the signature over the raw callback body.

Example:
    from mmpay_sdk.signing import generate_signature, millisecond_nonce

    nonce = millisecond_nonce()
    signature = generate_signature("sk_test_...", nonce, b'{"orderId":"A1"}')
"""

import hashlib
import hmac
import json
import time
from typing import Any, Union


def millisecond_nonce() -> str:
    """
    Default nonce source: wall-clock milliseconds since the epoch.

    Returns:
        Decimal digit string, e.g. "1760870400123"
    """
    return str(time.time_ns() // 1_000_000)


def serialize_body(payload: dict[str, Any]) -> bytes:
    """
    Serialize a payload to the compact JSON form that is both signed and sent.

    Key order is preserved, separators carry no whitespace and non-ASCII
    text is kept as UTF-8.

    Args:
        payload: JSON-compatible dict (usually a model's to_wire() output)

    Returns:
        UTF-8 encoded JSON bytes
    """
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _to_bytes(value: Union[str, bytes]) -> bytes:
    return value if isinstance(value, bytes) else value.encode("utf-8")


def generate_signature(
    secret_key: Union[str, bytes],
    nonce: str,
    body: Union[str, bytes],
) -> str:
    """
    Compute HMAC_SHA256(secret_key, nonce + "." + body) as lowercase hex.

    Pure and deterministic: identical inputs always yield the identical
    64-character digest.

    Args:
        secret_key: Merchant secret
        nonce: Per-request nonce string
        body: Exact body as transmitted or received

    Returns:
        64-character lowercase hex digest
    """
    message = _to_bytes(nonce) + b"." + _to_bytes(body)
    return hmac.new(_to_bytes(secret_key), message, hashlib.sha256).hexdigest()


def signatures_match(generated: str, expected: str) -> bool:
    """Constant-time comparison of two hex signatures."""
    return hmac.compare_digest(_to_bytes(generated), _to_bytes(expected))
