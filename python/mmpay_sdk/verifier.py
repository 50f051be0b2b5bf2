"""
Location: python/mmpay_sdk/verifier.py

Summary:
    Callback verification. Recomputes the HMAC-SHA256 signature the gateway
    attached to an asynchronous order notification and compares it with
    the one received.

Usage:
    Usually reached through MMPayClient.verify_cb(), but can be built on
    its own where only inbound callbacks are handled. Always pass the raw
    request body exactly as received; re-serialized JSON will not match.

Example:
    from mmpay_sdk.verifier import CallbackVerifier

    verifier = CallbackVerifier("sk_test_...")
    raw = await request.body()
    if verifier.verify_headers(raw, request.headers):
        data = verifier.construct_callback(raw, nonce, signature)
"""

import logging
from typing import Mapping, Union

from pydantic import SecretStr
from pydantic import ValidationError as PydanticValidationError

from .errors import SignatureVerificationError, ValidationError
from .signing import generate_signature, signatures_match
from .transport import extract_callback_headers
from .types import CallbackIncomingData

logger = logging.getLogger(__name__)


class CallbackVerifier:
    """
    Verifies gateway callbacks with the merchant's shared secret.

    A signature mismatch is a normal False result; only missing inputs
    raise. Callers that must reject bad callbacks branch on the result,
    or use construct_callback() which raises instead.
    """

    def __init__(self, secret_key: Union[str, SecretStr]):
        if isinstance(secret_key, str):
            secret_key = SecretStr(secret_key)
        self.__secret_key = secret_key

    def __repr__(self) -> str:
        return "CallbackVerifier(secret_key='**********')"

    def verify(
        self,
        raw_body: Union[str, bytes],
        nonce: str,
        expected_signature: str,
    ) -> bool:
        """
        Check that expected_signature was produced with our secret.

        Args:
            raw_body: Callback body exactly as received on the wire
            nonce: Value of the x-mmpay-nonce header
            expected_signature: Value of the x-mmpay-signature header

        Returns:
            True if the signatures match, False otherwise

        Raises:
            ValidationError: If any argument is empty or missing
        """
        if not raw_body or not nonce or not expected_signature:
            raise ValidationError(
                "Callback verification failed: missing payload, nonce, or signature."
            )

        generated = generate_signature(
            self.__secret_key.get_secret_value(), nonce, raw_body
        )
        if signatures_match(generated, expected_signature):
            return True

        logger.warning(
            "Callback signature mismatch (nonce=%s, received=%s)",
            nonce,
            expected_signature,
        )
        return False

    def verify_headers(
        self,
        raw_body: Union[str, bytes],
        headers: Mapping[str, str],
    ) -> bool:
        """
        Verify using the nonce and signature found in callback headers.

        Raises:
            ValidationError: If the body or either header is missing
        """
        nonce, signature = extract_callback_headers(headers)
        return self.verify(raw_body, nonce or "", signature or "")

    def construct_callback(
        self,
        raw_body: Union[str, bytes],
        nonce: str,
        signature: str,
    ) -> CallbackIncomingData:
        """
        Verify a callback and parse its body.

        Args:
            raw_body: Callback body exactly as received on the wire
            nonce: Value of the x-mmpay-nonce header
            signature: Value of the x-mmpay-signature header

        Returns:
            Parsed CallbackIncomingData

        Raises:
            ValidationError: If inputs are missing or the body is not a callback
            SignatureVerificationError: If the signature does not match
        """
        if not self.verify(raw_body, nonce, signature):
            raise SignatureVerificationError("Callback signature does not match.")

        try:
            return CallbackIncomingData.model_validate_json(raw_body)
        except PydanticValidationError as exc:
            raise ValidationError(f"Malformed callback payload: {exc}") from exc
