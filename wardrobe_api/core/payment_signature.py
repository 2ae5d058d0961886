"""Payment Signature: HMAC-SHA256 over "order_id|payment_id" with the gateway secret.

Invariants:
    - Signature is the lowercase hex digest of HMAC-SHA256(secret, f"{order_id}|{payment_id}")
    - Verification is exact equality (constant-time compare over UTF-8 bytes)
"""

import hashlib
import hmac


def compute_signature(order_id: str, payment_id: str, secret: str) -> str:
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_signature(
    order_id: str, payment_id: str, signature: str, secret: str,
) -> bool:
    expected = compute_signature(order_id, payment_id, secret)
    return hmac.compare_digest(
        expected.encode("utf-8"), signature.encode("utf-8"),
    )
