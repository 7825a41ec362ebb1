import re
from typing import Optional

# One run of digits with an optional single decimal separator. ebay.de mixes
# "12,50" and "12.50" so either character counts as the decimal point.
DECIMAL_PATTERN = re.compile(r"(\d+([.,]\d+)?)")

GROUPING_PUNCTUATION = re.compile(r"[.,()]")

COUNT_DIGITS = re.compile(r"\d+")


def extract_decimal(text: Optional[str]) -> Optional[float]:
    """
    Extracts the first decimal number from free text.

    Examples:
        - "EUR 12,50" -> 12.5
        - "+ EUR 4.99 Versand" -> 4.99
        - "Kostenloser Versand" -> None

    Returns None when the text holds no digits; callers pick their own
    sentinel for that case.
    """
    if not text:
        return None
    match = DECIMAL_PATTERN.search(text)
    if not match:
        return None
    return float(match.group(1).replace(",", "."))


def strip_grouping_punctuation(text: str) -> int:
    """
    Parses a count that uses "." as thousands separator, e.g. "1.234" or "(2.051)".

    Raises ValueError unless only digits remain; counts are never signed.
    """
    digits = GROUPING_PUNCTUATION.sub("", text).strip()
    if not COUNT_DIGITS.fullmatch(digits):
        raise ValueError(f"not a count: {text!r}")
    return int(digits)
