"""Weight-line parser for text-protocol scales.

Serial scales print one reading per line in a handful of formats:

    "123.4 g"      -> 123.4
    "1.25KG"       -> 1250.0
    "ST,GS, 0.500" -> 500.0   (bare trailing number below 10 is kilograms)
    "DATA,123.4"   -> 123.4

Lines matching none of these yield None.
"""

import re
from typing import Optional

# Values below this in a bare trailing number are read as kilograms
KILOGRAM_CUTOFF = 10.0

_NUMBER = r"(\d+\.?\d*)"
_KILOGRAM_RE = re.compile(_NUMBER + r"\s*kg")
_GRAM_RE = re.compile(_NUMBER + r"\s*g")
_TRAILING_RE = re.compile(_NUMBER + r"$")


def parse_line_to_grams(line: str) -> Optional[float]:
    """Extract a weight in grams from a line of scale output.

    Args:
        line: Raw text line (case-insensitive, surrounding whitespace ignored)

    Returns:
        Optional[float]: Weight in grams, None if the line carries no value

    Example:
        >>> parse_line_to_grams("0.5 kg")
        500.0
        >>> parse_line_to_grams("invalid") is None
        True
    """
    clean = line.strip().lower()
    if not clean:
        return None

    match = _KILOGRAM_RE.search(clean)
    if match:
        return _kilograms_to_grams(float(match.group(1)))

    match = _GRAM_RE.search(clean)
    if match:
        return float(match.group(1))

    match = _TRAILING_RE.search(clean)
    if match:
        value = float(match.group(1))
        return _kilograms_to_grams(value) if value < KILOGRAM_CUTOFF else value

    return None


def _kilograms_to_grams(value: float) -> float:
    # drop binary float noise from the multiplication
    return round(value * 1000, 6)
