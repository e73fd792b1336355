"""Recognition and parsing of monetary amount tokens."""

import re
from typing import Optional

_DIGIT_RE = re.compile(r"\d")


def is_amount(text: Optional[str]) -> bool:
    """Check whether a token reads as a monetary amount.

    Commas, dollar signs and surrounding whitespace are ignored. What is left
    must parse as a float and contain at least one digit, which rejects bare
    ``"."``, ``"-"``, ``"nan"`` and ``"inf"``.

    Args:
        text: Candidate token.

    Returns:
        True if the token is an amount.
    """
    if not text:
        return False

    stripped = text.replace(",", "").replace("$", "").strip()
    try:
        float(stripped)
    except ValueError:
        return False

    return bool(_DIGIT_RE.search(stripped))


def parse_amount(text: str) -> Optional[float]:
    """Parse amount text with thousands separators removed.

    Returns:
        Parsed value, or None if the text is not a number.
    """
    try:
        return float(text.replace(",", ""))
    except (ValueError, AttributeError):
        return None
