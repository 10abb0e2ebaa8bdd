"""Human-readable order numbers: ``ORD-YYYYMMDD-XXXXXX``."""

import secrets
import string
from datetime import UTC, datetime

_ALPHABET = string.ascii_uppercase + string.digits
_MAX_ATTEMPTS = 10


def candidate_order_number(today=None) -> str:
    today = today or datetime.now(UTC)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(6))
    return f"ORD-{today:%Y%m%d}-{suffix}"


def next_order_number(repo) -> str:
    """A number not yet used by any order in ``repo``."""
    for _ in range(_MAX_ATTEMPTS):
        number = candidate_order_number()
        if repo.find_by_number(number) is None:
            return number
    raise RuntimeError("Could not generate a unique order number")
