"""Stock keeping unit codes shared by products and variants."""

import re

from protean.exceptions import ValidationError

_SKU_CHARS = re.compile(r"^[A-Za-z0-9-]+$")


def normalize_sku(code: str) -> str:
    return code.strip().upper()


def check_sku(code: str, field: str = "sku") -> None:
    """Raise ``ValidationError`` unless ``code`` is a well-formed SKU.

    Format: alphanumeric + hyphens, 3-50 chars.
    E.g., "ELEC-PHN-001", "SHOE-RUN-BLK-42"
    """
    if len(code) < 3 or len(code) > 50:
        raise ValidationError({field: ["SKU must be between 3 and 50 characters"]})

    if not _SKU_CHARS.match(code):
        raise ValidationError({field: ["SKU must contain only alphanumeric characters and hyphens"]})

    if code.startswith("-") or code.endswith("-"):
        raise ValidationError({field: ["SKU must not start or end with a hyphen"]})

    if "--" in code:
        raise ValidationError({field: ["SKU must not contain consecutive hyphens"]})
