"""
Shared pytest fixtures for mmpay-sdk tests.

This module provides common fixtures used across all test files,
including sample credentials, payment payloads and callback bodies.
"""

import json

import pytest


@pytest.fixture
def credentials():
    """Sample merchant credentials."""
    return {
        "app_id": "MM0001",
        "publishable_key": "pk_test_abc123",
        "secret_key": "sk_test_abc123",
        "api_base_url": "https://gateway.example.com",
    }


@pytest.fixture
def sample_payment():
    """Order creation payload as a merchant would build it."""
    return {
        "orderId": "ABC123",
        "amount": 30000,
        "currency": "MMK",
        "items": [{"name": "Items", "amount": 3000, "quantity": 10}],
    }


@pytest.fixture
def sample_payment_response():
    """Gateway answer to an order creation call."""
    return {
        "orderId": "ABC123",
        "amount": 30000,
        "currency": "MMK",
        "status": "PENDING",
        "qr": "00020101021226...",
        "url": "https://checkout.example.com/o/ABC123",
    }


@pytest.fixture
def sample_callback():
    """Callback notification body as sent by the gateway."""
    return {
        "appId": "MM0001",
        "orderId": "ABC123",
        "amount": 30000,
        "currency": "MMK",
        "method": "QR",
        "vendor": "KBZPay",
        "items": [{"name": "Items", "amount": 3000, "quantity": 10}],
        "merchantId": "mch_42",
        "status": "SUCCESS",
        "createdAt": "2026-10-19T08:30:00.000Z",
    }


@pytest.fixture
def raw_callback(sample_callback):
    """Raw callback body string, exactly as it would arrive on the wire."""
    return json.dumps(sample_callback, separators=(",", ":"))
