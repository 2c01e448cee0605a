"""ISO 639-1 language codes used to drop localised (non-English) URLs."""

from __future__ import annotations

import re
from typing import Iterable, List

# Two-letter codes (plus ``haw``) excluding English.
LANGUAGE_CODES = [
    "fr", "de", "es", "it", "pt", "nl", "pl", "ru", "ja", "zh", "ko", "ar",
    "tr", "sv", "da", "no", "fi", "cs", "hu", "ro", "el", "he", "th", "vi",
    "id", "ms", "uk", "bg", "hr", "sk", "sl", "lt", "lv", "et", "is", "ga",
    "mt", "cy", "sq", "mk", "sr", "bs", "ka", "hy", "az", "kk", "uz", "mn",
    "ne", "si", "km", "lo", "my", "am", "ti", "or", "ta", "te", "kn",
    "ml", "tl", "jv", "su", "mg", "haw", "af", "sw", "zu", "xh",
    "ca", "gl", "eu", "be", "fa", "ur", "hi", "bn", "pa", "gu", "mr",
]

_CODES = "|".join(LANGUAGE_CODES)

# /fr, /fr/, /fr-ca, /fr-CA/...  (first path segment only)
_PATH_PATTERN = re.compile(
    rf"^https?://[^/]+/(?:{_CODES})(?:-[a-z]{{2}})?(?:[/?#]|$)", re.IGNORECASE
)
# fr.example.com
_SUBDOMAIN_PATTERN = re.compile(rf"^https?://(?:{_CODES})\.", re.IGNORECASE)


def is_non_english_url(url: str) -> bool:
    """Return ``True`` if *url* points at a localised, non-English section."""
    return bool(_PATH_PATTERN.search(url) or _SUBDOMAIN_PATTERN.search(url))


def filter_non_english_urls(urls: Iterable[str]) -> List[str]:
    return [u for u in urls if not is_non_english_url(u)]
