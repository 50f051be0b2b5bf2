"""
Tests for mmpay_sdk.verifier module.

Tests callback signature verification, missing-input validation,
header extraction and verified callback parsing.
"""

import json
import logging

import pytest

from mmpay_sdk.errors import SignatureVerificationError, ValidationError
from mmpay_sdk.signing import generate_signature
from mmpay_sdk.types import CallbackIncomingData
from mmpay_sdk.verifier import CallbackVerifier


SECRET = "sk_test_abc123"
NONCE = "1760862600000"


@pytest.fixture
def verifier():
    return CallbackVerifier(SECRET)


@pytest.fixture
def signature(raw_callback):
    return generate_signature(SECRET, NONCE, raw_callback)


class TestVerify:
    """Tests for CallbackVerifier.verify."""

    def test_valid_signature(self, verifier, raw_callback, signature):
        """Test a correctly signed body verifies."""
        assert verifier.verify(raw_callback, NONCE, signature) is True

    def test_accepts_raw_bytes(self, verifier, raw_callback, signature):
        """Test the raw body may be passed as bytes."""
        assert verifier.verify(raw_callback.encode("utf-8"), NONCE, signature) is True

    def test_flipped_character_returns_false(self, verifier, raw_callback, signature):
        """Test changing any one signature character gives False, not an error."""
        for i in range(len(signature)):
            flipped = "0" if signature[i] != "0" else "1"
            tampered = signature[:i] + flipped + signature[i + 1:]
            assert verifier.verify(raw_callback, NONCE, tampered) is False

    def test_tampered_body_returns_false(self, verifier, raw_callback, signature):
        """Test a modified body does not verify."""
        tampered = raw_callback.replace("SUCCESS", "FAILED")
        assert verifier.verify(tampered, NONCE, signature) is False

    def test_wrong_nonce_returns_false(self, verifier, raw_callback, signature):
        """Test a different nonce does not verify."""
        assert verifier.verify(raw_callback, "1760862600001", signature) is False

    def test_wrong_secret_returns_false(self, raw_callback, signature):
        """Test a verifier holding another secret rejects the signature."""
        other = CallbackVerifier("sk_test_other")
        assert other.verify(raw_callback, NONCE, signature) is False

    def test_reserialized_body_fails(self, verifier, sample_callback, signature):
        """Test that pretty-printed JSON of the same data does not verify."""
        reserialized = json.dumps(sample_callback, indent=2)
        assert verifier.verify(reserialized, NONCE, signature) is False

    @pytest.mark.parametrize(
        "body,nonce,sig",
        [
            ("", NONCE, "abc"),
            ('{"a":1}', "", "abc"),
            ('{"a":1}', NONCE, ""),
            (None, NONCE, "abc"),
            ('{"a":1}', None, "abc"),
            ('{"a":1}', NONCE, None),
        ],
    )
    def test_missing_inputs_raise(self, verifier, body, nonce, sig):
        """Test empty or missing inputs raise ValidationError."""
        with pytest.raises(ValidationError):
            verifier.verify(body, nonce, sig)

    def test_mismatch_is_logged_without_secret(self, verifier, raw_callback, caplog):
        """Test a mismatch logs a warning that never includes the secret."""
        with caplog.at_level(logging.WARNING, logger="mmpay_sdk.verifier"):
            assert verifier.verify(raw_callback, NONCE, "0" * 64) is False

        assert "mismatch" in caplog.text
        assert SECRET not in caplog.text
        assert generate_signature(SECRET, NONCE, raw_callback) not in caplog.text

    def test_repr_hides_secret(self, verifier):
        """Test repr never shows the secret."""
        assert SECRET not in repr(verifier)


class TestVerifyHeaders:
    """Tests for CallbackVerifier.verify_headers."""

    def test_lowercase_headers(self, verifier, raw_callback, signature):
        """Test headers as most servers deliver them."""
        headers = {"x-mmpay-nonce": NONCE, "x-mmpay-signature": signature}
        assert verifier.verify_headers(raw_callback, headers) is True

    def test_mixed_case_headers(self, verifier, raw_callback, signature):
        """Test header names are matched case-insensitively."""
        headers = {"X-Mmpay-Nonce": NONCE, "X-MMPAY-SIGNATURE": signature}
        assert verifier.verify_headers(raw_callback, headers) is True

    def test_missing_header_raises(self, verifier, raw_callback):
        """Test a missing signature header raises ValidationError."""
        with pytest.raises(ValidationError):
            verifier.verify_headers(raw_callback, {"x-mmpay-nonce": NONCE})


class TestConstructCallback:
    """Tests for CallbackVerifier.construct_callback."""

    def test_returns_parsed_callback(self, verifier, raw_callback, signature):
        """Test a valid callback is parsed into CallbackIncomingData."""
        data = verifier.construct_callback(raw_callback, NONCE, signature)

        assert isinstance(data, CallbackIncomingData)
        assert data.order_id == "ABC123"
        assert data.status == "SUCCESS"
        assert data.merchant_id == "mch_42"
        assert data.items[0].quantity == 10

    def test_bad_signature_raises(self, verifier, raw_callback):
        """Test a mismatch raises SignatureVerificationError."""
        with pytest.raises(SignatureVerificationError):
            verifier.construct_callback(raw_callback, NONCE, "0" * 64)

    def test_malformed_body_raises(self, verifier):
        """Test an authentic but non-callback body raises ValidationError."""
        body = '{"hello":"world"}'
        sig = generate_signature(SECRET, NONCE, body)
        with pytest.raises(ValidationError):
            verifier.construct_callback(body, NONCE, sig)
