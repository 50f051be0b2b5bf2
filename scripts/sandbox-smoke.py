#!/usr/bin/env python3
"""
Smoke test against the MMPay sandbox.
Run with: python scripts/sandbox-smoke.py [handshake|pay]

Sends a sandbox handshake or a sandbox payment with the credentials from
MMPAY_APP_ID, MMPAY_PUBLISHABLE_KEY, MMPAY_SECRET_KEY and MMPAY_API_BASE_URL,
and reports the network latency of the call.

This is a manual check only; it needs real sandbox credentials and is not
part of the test suite.
"""
import asyncio
import logging
import os
import secrets
import sys
import time

from mmpay_sdk import Item, MMPayClient, MMPayError, PaymentRequest


def load_client() -> MMPayClient:
    return MMPayClient(
        app_id=os.environ.get("MMPAY_APP_ID"),
        publishable_key=os.environ.get("MMPAY_PUBLISHABLE_KEY"),
        secret_key=os.environ.get("MMPAY_SECRET_KEY"),
        api_base_url=os.environ.get("MMPAY_API_BASE_URL"),
    )


async def run(mode: str) -> int:
    probe = secrets.token_hex(3)
    async with load_client() as client:
        start = time.perf_counter()
        try:
            if mode == "handshake":
                response = await client.sandbox_handshake({"handshakeSignature": probe})
            else:
                response = await client.sandbox_pay(PaymentRequest(
                    order_id=probe,
                    amount=30000,
                    currency="MMK",
                    items=[Item(name="Items", amount=3000, quantity=10)],
                ))
            latency_ms = (time.perf_counter() - start) * 1000
        except MMPayError as exc:
            latency_ms = (time.perf_counter() - start) * 1000
            print(f"\n--- {mode} failed ---")
            print(f"Latency: {latency_ms:.3f} ms")
            print(f"Error: {exc}")
            return 1

    print(f"\n--- {mode} successful ---")
    print(f"Latency: {latency_ms:.3f} ms")
    print(f"Response: {response.model_dump_json(by_alias=True, indent=2)}")
    return 0


def main() -> int:
    mode = sys.argv[1] if len(sys.argv) > 1 else "handshake"
    if mode not in ("handshake", "pay"):
        print(f"Unknown mode {mode!r}; expected 'handshake' or 'pay'")
        return 2

    logging.basicConfig(level=logging.DEBUG if os.environ.get("MMPAY_DEBUG") else logging.INFO)
    try:
        return asyncio.run(run(mode))
    except MMPayError as exc:
        print(f"Configuration error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
