"""MPN normalization, ordering-suffix grammar and equivalence.

Vendors append ordering/packaging metadata to the base part number with a small
set of delimiters:

- Maxim:   MAX3483EESA+        -> "+" (lead-free), "+T" (tape and reel)
- Linear:  LTC2053HMS8#TRPBF   -> "#" + any run of ordering codes
- NXP/MCP: TJA1050T/CM,118     -> "/" + ordering tail (may hold commas)
- NXP:     NC7WZ04,315         -> "," + packing code

Stripping is anchored on those delimiters only. A trailing letter without a
delimiter (NC7WZ04G, LM358N) is part of the designator and is never removed.
None of this depends on which manufacturer made the part.
"""

import re
from dataclasses import dataclass


# Linear Technology / ADI ordering codes that may follow '#', in any combination
ORDERING_CODES = ("PBF", "TRM", "TR", "TP", "W")

_CODE_RUN = "|".join(sorted(ORDERING_CODES, key=len, reverse=True))

# Tried in order; the first that matches decides. Each captures (base, suffix);
# whitespace before the delimiter belongs to the suffix.
_SUFFIX_PATTERNS = [
    re.compile(r"^(.+?)(\s*\+T?)$", re.IGNORECASE),
    re.compile(rf"^(.+?)(\s*#(?:{_CODE_RUN})+)$", re.IGNORECASE),
    re.compile(r"^(.+?)(\s*/[A-Z0-9]+(?:,[A-Z0-9]+)*)$", re.IGNORECASE),
    re.compile(r"^([^,]+?)(\s*,[A-Z0-9]+)$", re.IGNORECASE),
]

_NON_ALNUM = re.compile(r"[^A-Z0-9]")

# Free-text labels that precede an MPN in BOM cells and descriptions
_LABEL_PREFIXES = ("IC-", "PART-", "MPN-", "MPN:", "PN:", "P/N:", "REF:", "REF-", "ITEM:", "ITEM-")
_MOUNTING_SUFFIXES = ("-SMD", "-THT", "-ROHS")


def _split(mpn: str | None) -> tuple[str, str | None]:
    """Return (base, suffix) for a trimmed MPN."""
    if not mpn:
        return "", None
    text = mpn.strip()
    if not text:
        return "", None
    for pattern in _SUFFIX_PATTERNS:
        match = pattern.match(text)
        if match and match.group(1).strip():
            return match.group(1), match.group(2)
    return text, None


@dataclass(frozen=True)
class NormalizedMPN:
    """View of an MPN split into base and ordering suffix.

    `base + (suffix or "") == original`, where `original` is the trimmed input.
    """

    original: str
    base: str
    suffix: str | None = None

    @classmethod
    def parse(cls, mpn: str | None) -> "NormalizedMPN":
        base, suffix = _split(mpn)
        original = base + (suffix or "")
        return cls(original=original, base=base, suffix=suffix)

    @property
    def has_suffix(self) -> bool:
        return self.suffix is not None


def strip_package_suffix(mpn: str | None) -> str:
    """'MAX3483EESA+' -> 'MAX3483EESA', 'TJA1050T/CM,118' -> 'TJA1050T'"""
    return _split(mpn)[0]


def get_package_suffix(mpn: str | None) -> str | None:
    """'LTC2053HMS8#PBF' -> '#PBF', 'ADS1115' -> None"""
    return _split(mpn)[1]


def get_search_variations(mpn: str | None) -> list[str]:
    """Strings to try when looking an MPN up, the literal input first.

    'LTC2053HMS8#PBF' -> ['LTC2053HMS8#PBF', 'LTC2053HMS8']
    """
    parsed = NormalizedMPN.parse(mpn)
    if not parsed.original:
        return []
    variations = [parsed.original]
    if parsed.suffix is not None and parsed.base != parsed.original:
        variations.append(parsed.base)
    return variations


def is_equivalent_mpn(mpn1: str | None, mpn2: str | None) -> bool:
    """True when both MPNs reduce to the same base part (case-insensitive)."""
    base1 = strip_package_suffix(mpn1)
    base2 = strip_package_suffix(mpn2)
    if not base1 or not base2:
        return False
    return base1.upper() == base2.upper()


def normalize(mpn: str | None) -> str:
    """Upper-case and drop everything but letters and digits: 'lm358-n' -> 'LM358N'"""
    if not mpn or not mpn.strip():
        return ""
    return _NON_ALNUM.sub("", mpn.strip().upper())


def clean_token(word: str | None) -> str:
    """Reduce a free-text token to a candidate MPN.

    'P/N:LM358N' -> 'LM358N', 'mpn=IRF540N' -> 'IRF540N', 'NE555-SMD' -> 'NE555'
    """
    if not word:
        return ""
    token = word.strip().upper()
    if "=" in token:
        token = token.split("=", 1)[1]
    for prefix in _LABEL_PREFIXES:
        if token.startswith(prefix):
            token = token[len(prefix):]
    for suffix in _MOUNTING_SUFFIXES:
        if token.endswith(suffix):
            token = token[: -len(suffix)]
    return token.strip()
