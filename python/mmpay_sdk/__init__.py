"""
Location: python/mmpay_sdk/__init__.py

Summary:
    Main package initialization for mmpay-sdk. Exports all public classes
    and functions for convenient importing.

Usage:
    from mmpay_sdk import MMPayClient, PaymentRequest, Item

    # Or import specific modules
    from mmpay_sdk.verifier import CallbackVerifier
    from mmpay_sdk.signing import generate_signature

Version: 0.1.0
"""

from .client import MMPayClient
from .types import (
    CallbackIncomingData,
    CallbackItem,
    Credentials,
    GatewayResponse,
    HandshakeRequest,
    HandshakeResponse,
    Item,
    PaymentRequest,
    PaymentResponse,
    PaymentStatus,
    SDKOptions,
)
from .errors import (
    MMPayError,
    ConfigurationError,
    TransportError,
    ValidationError,
    SignatureVerificationError,
    ResponseFormatError,
)
from .verifier import CallbackVerifier
from .signing import generate_signature, millisecond_nonce
from .transport import ENDPOINTS, MMPAY_HEADERS, build_signed_headers

__version__ = "0.1.0"

__all__ = [
    # Main client
    "MMPayClient",
    # Types
    "CallbackIncomingData",
    "CallbackItem",
    "Credentials",
    "GatewayResponse",
    "HandshakeRequest",
    "HandshakeResponse",
    "Item",
    "PaymentRequest",
    "PaymentResponse",
    "PaymentStatus",
    "SDKOptions",
    # Exceptions
    "MMPayError",
    "ConfigurationError",
    "TransportError",
    "ValidationError",
    "SignatureVerificationError",
    "ResponseFormatError",
    # Callback verification
    "CallbackVerifier",
    # Signing utilities
    "generate_signature",
    "millisecond_nonce",
    # Transport utilities
    "ENDPOINTS",
    "MMPAY_HEADERS",
    "build_signed_headers",
]
