"""Layout fingerprinting.

A fingerprint is a short, order-independent hash of a layout's structure
(column count plus every item's node ID and geometry). It is a change
detector for staleness checks, not a content address: a collision only
means a regeneration is skipped, never that data is lost.

Algorithm:
    1. Token per item: ``"<nodeId>:<x>,<y>,<w>,<h>"``
    2. Sort tokens lexicographically and join with ``|``
    3. Prefix with ``"<columns>:"``
    4. 32-bit rolling hash (``h = h * 31 + ord(c)``), kept unsigned
    5. Render in base 36
"""

import logging

from responsive_layout.models.layout import LayoutConfig

logger = logging.getLogger(__name__)

_HASH_MASK = 0xFFFFFFFF
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def canonical_layout_string(layout: LayoutConfig) -> str:
    """Canonical text form of a layout's structure (item order removed)."""
    tokens = sorted(item.token() for item in layout.items)
    return f"{layout.columns}:" + "|".join(tokens)


def rolling_hash(text: str) -> int:
    """32-bit shift-and-accumulate hash, normalized to an unsigned value."""
    value = 0
    for char in text:
        value = ((value << 5) - value + ord(char)) & _HASH_MASK
    return value


def to_base36(value: int) -> str:
    """Render a non-negative integer in base 36."""
    if value < 0:
        raise ValueError(f"Cannot render negative value {value} in base 36")
    if value == 0:
        return "0"

    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_layout_hash(layout: LayoutConfig) -> str:
    """Fingerprint a layout.

    Args:
        layout: Layout to fingerprint (a LayoutConfig or its dict form)

    Returns:
        Base-36 fingerprint; equal for layouts with the same columns and items
        regardless of item order
    """
    layout = LayoutConfig.model_validate(layout)
    return to_base36(rolling_hash(canonical_layout_string(layout)))


# Short name used throughout the state transition code
fingerprint = generate_layout_hash
