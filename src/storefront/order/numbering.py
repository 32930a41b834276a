"""Human-readable order numbers: ``ORD-<base36 millis>-<4 random base36 chars>``.

Unique in practice (a millisecond timestamp plus ~1.7M random suffixes), not
cryptographically.
"""

import secrets
import string
import time

ORDER_NUMBER_PREFIX = "ORD"
SUFFIX_LENGTH = 4

_BASE36_DIGITS = string.digits + string.ascii_uppercase


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding is only defined for non-negative integers")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_order_number(now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_BASE36_DIGITS) for _ in range(SUFFIX_LENGTH))
    return f"{ORDER_NUMBER_PREFIX}-{to_base36(now_ms)}-{suffix}"
