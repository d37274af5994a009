"""Custom validators"""

import re

# Groups of lowercase ASCII letters, digits, Hangul syllables or '@', joined by single hyphens
SLUG_PATTERN = re.compile(r"^[a-z0-9가-힣@]+(?:-[a-z0-9가-힣@]+)*$")

def is_valid_slug_format(slug: str) -> bool:
    """Check slug against the allowed alphabet"""
    if not isinstance(slug, str):
        return False
    return SLUG_PATTERN.fullmatch(slug) is not None
