"""
Location: python/mmpay_sdk/errors.py

Summary:
    Exception hierarchy for mmpay-sdk. Every error raised by the SDK
    derives from MMPayError so callers can catch the whole family at once.

Usage:
    Raised by client.py (configuration and transport failures) and
    verifier.py (missing callback inputs, rejected signatures).

Example:
    from mmpay_sdk.errors import TransportError

    try:
        await client.pay(request)
    except TransportError as exc:
        print(exc.status_code, exc.response_body)
"""

from typing import Any, Optional


class MMPayError(Exception):
    """Base exception for all mmpay-sdk errors."""
    pass


class ConfigurationError(MMPayError):
    """Exception raised when the client is constructed with missing keys."""
    pass


class ValidationError(MMPayError):
    """Exception raised when callback verification inputs are missing or malformed."""
    pass


class SignatureVerificationError(MMPayError):
    """Exception raised by construct_callback when a signature does not match."""
    pass


class TransportError(MMPayError):
    """
    Exception raised when a signed call to the gateway fails.

    Covers network failures, non-2xx responses and response bodies that
    cannot be parsed. The underlying exception is chained as __cause__.

    Attributes:
        status_code: HTTP status of the response, or None if no response arrived
        response_body: Raw response text, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class ResponseFormatError(TransportError):
    """
    Exception raised when the gateway answered 2xx but the body could not
    be parsed into the expected response model.

    The call reached the gateway and may have taken effect (an order may
    already exist), so callers should not blindly resubmit.

    Attributes:
        data: Decoded JSON body, or None if the body was not JSON
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        data: Optional[Any] = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)
        self.data = data
