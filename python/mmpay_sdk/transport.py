"""
Location: python/mmpay_sdk/transport.py

Summary:
    MMPay wire format constants and helpers. Defines the endpoint paths,
    the header names used by signed requests and callbacks, and functions
    to build signed request headers and read callback headers.

Usage:
    Used by client.py to address endpoints and attach the bearer token,
    nonce and signature; used by verifier.py to pull the nonce and
    signature out of an inbound callback's headers.

Example:
    from mmpay_sdk.transport import ENDPOINTS, build_signed_headers

    url = f"{base_url}{ENDPOINTS['SANDBOX_PAY']}"
    headers = build_signed_headers("pk_test_...", nonce, signature)
"""

from typing import Mapping, Optional


# MMPay header names
MMPAY_HEADERS = {
    "AUTHORIZATION": "Authorization",
    "NONCE": "X-Mmpay-Nonce",
    "SIGNATURE": "X-Mmpay-Signature",
    "CONTENT_TYPE": "Content-Type",
}

# Gateway endpoint paths, relative to api_base_url
ENDPOINTS = {
    "HANDSHAKE": "/payments/handshake",
    "SANDBOX_HANDSHAKE": "/payments/sandbox-handshake",
    "PAY": "/payments/create",
    "SANDBOX_PAY": "/payments/sandbox-create",
}


def build_signed_headers(
    publishable_key: str,
    nonce: str,
    signature: str,
) -> dict[str, str]:
    """
    Build the header set required on every signed request.

    Args:
        publishable_key: Merchant publishable key, sent as bearer token
        nonce: Nonce that was mixed into the signature
        signature: Hex HMAC-SHA256 of "<nonce>.<body>"

    Returns:
        New headers dict
    """
    return {
        MMPAY_HEADERS["AUTHORIZATION"]: f"Bearer {publishable_key}",
        MMPAY_HEADERS["NONCE"]: nonce,
        MMPAY_HEADERS["SIGNATURE"]: signature,
        MMPAY_HEADERS["CONTENT_TYPE"]: "application/json",
    }


def extract_callback_headers(
    headers: Mapping[str, str],
) -> tuple[Optional[str], Optional[str]]:
    """
    Read the nonce and signature from an inbound callback's headers.

    Header names are matched case-insensitively so plain dicts from any
    web framework work, not just case-insensitive header containers.

    Args:
        headers: Request headers as received by the merchant server

    Returns:
        (nonce, signature); either is None when absent
    """
    lowered = {key.lower(): value for key, value in headers.items()}
    return (
        lowered.get(MMPAY_HEADERS["NONCE"].lower()),
        lowered.get(MMPAY_HEADERS["SIGNATURE"].lower()),
    )
