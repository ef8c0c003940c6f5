"""Common types and helpers shared across models."""

import re
from typing import Any, TypeAlias

NOT_AVAILABLE = "N/A"

# Plain decimal degrees: optional sign, digits, optional fraction. No exponent.
COORDINATE_PATTERN = r"^[-+]?(?:\d+(?:\.\d*)?|\.\d+)$"

# An upstream reading or the NOT_AVAILABLE sentinel.
Reading: TypeAlias = int | float | str


def or_not_available(value: Any) -> Any:
    """Return ``value`` unless it is missing (None), else the sentinel."""
    return NOT_AVAILABLE if value is None else value


def parse_coordinate(text: str) -> str:
    """Check ``text`` is decimal degrees and return it exactly as supplied.

    Coordinates are forwarded upstream verbatim, so ``0.00001`` stays
    ``0.00001`` rather than becoming ``1e-05``.
    """
    text = text.strip()
    if not re.fullmatch(COORDINATE_PATTERN, text):
        raise ValueError(f"not a decimal-degree coordinate: {text!r}")
    return text
