"""
Helper utilities
"""

import re
import string
import time
from typing import Optional

# Anything outside the slug alphabet, whitespace and hyphen is dropped
_DISALLOWED_CHARS = re.compile(r"[^a-z0-9가-힣@\s-]")
_SEPARATOR_RUNS = re.compile(r"[\s-]+")

_BASE36_DIGITS = string.digits + string.ascii_lowercase

def generate_slug(text: str) -> str:
    """
    Generate URL-friendly slug from text

    Lower-cases the text, drops characters outside the slug alphabet and
    collapses whitespace/hyphen runs into single hyphens. Never raises; the
    result may be empty, which callers must reject.

    Args:
        text: Input text

    Returns:
        Slug candidate
    """
    if not text:
        return ""

    slug = _DISALLOWED_CHARS.sub("", text.lower())
    slug = _SEPARATOR_RUNS.sub("-", slug.strip())
    return slug.strip("-")

def to_base36(number: int) -> str:
    """Encode a non-negative integer in base 36 (0-9a-z)"""
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "0"

    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))

def time_suffix(now: Optional[float] = None) -> str:
    """Base-36 encoded current time in milliseconds, used to disambiguate slugs"""
    if now is None:
        now = time.time()
    return to_base36(int(now * 1000))
