"""
Record identifiers.

Ids are opaque strings: a base-36 millisecond timestamp followed by a
random base-36 suffix. They sort roughly by creation time and are unique
enough for a single-user ledger, but they are NOT cryptographically
unique and nothing checks for collisions.
"""

import random
import string
import time

_BASE36 = string.digits + string.ascii_lowercase


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError("base36 encoding needs a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Generate a new record id."""
    timestamp = to_base36(int(time.time() * 1000))
    suffix = "".join(random.choices(_BASE36, k=11))
    return timestamp + suffix
