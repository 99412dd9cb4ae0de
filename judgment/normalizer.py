"""
normalizer.py

Canonical comparison forms for OCR text and course fields.

Handles:
- Full-width digits and Latin letters -> ASCII
- Full-width roman numerals (I-V) and circled numbers (1-10) -> ASCII digits
- Ideographic space -> ASCII space
- Case folding and whitespace collapsing

Only the tabulated characters are substituted (no NFKC). Kana, kanji and
any other character pass through unchanged.
"""

import re
from typing import Dict, Optional

_WHITESPACE_RE = re.compile(r"\s+")


def _build_substitution_table() -> Dict[int, str]:
    table: Dict[int, str] = {}

    # Full-width digits: ０-９
    for offset in range(10):
        table[0xFF10 + offset] = chr(ord("0") + offset)

    # Full-width Latin letters: Ａ-Ｚ, ａ-ｚ
    for offset in range(26):
        table[0xFF21 + offset] = chr(ord("A") + offset)
        table[0xFF41 + offset] = chr(ord("a") + offset)

    # Roman numerals Ⅰ-Ⅴ
    for offset in range(5):
        table[0x2160 + offset] = str(offset + 1)

    # Circled numbers ①-⑩
    for offset in range(10):
        table[0x2460 + offset] = str(offset + 1)

    table[0x3000] = " "  # Ideographic space
    return table


SUBSTITUTION_TABLE = _build_substitution_table()


def transliterate(text: Optional[str]) -> str:
    """Apply only the character substitution table; no case or space changes."""
    if not text:
        return ""
    return text.translate(SUBSTITUTION_TABLE)


def normalize(text: Optional[str]) -> str:
    """
    Normalize raw OCR text into its canonical comparison form.

    Steps, in order:
    1. Substitute tabulated full-width / numeral characters
    2. Lowercase
    3. Collapse whitespace runs into a single space
    4. Strip leading/trailing whitespace

    Args:
        text: Raw OCR text. None and "" are accepted.

    Returns:
        Normalized text, or "" for empty input.
    """
    if not text:
        return ""

    text = transliterate(text).lower()
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def compact(text: Optional[str]) -> str:
    """
    Lowercase and remove all whitespace.

    Narrower than normalize(): no character substitution. Used for
    course names and instructors, and as the fallback form of OCR text
    when no normalized text is supplied.
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub("", text.lower())
