"""Manufacturer handler contract and the replacement policies families compose."""

import re
from types import MappingProxyType
from typing import Iterable, Mapping

from ..mpn import strip_package_suffix
from ..packages import resolve_code
from ..registry import PatternRegistry
from ..types import ComponentType, is_specialized, parent_type, supported_kinds


# Leading part number: optional digit prefix (2N, 1N), letters, digits, and one
# more letter+digits group (MC78L05, DS18B20)
_CORE_PATTERN = re.compile(r"^\d*[A-Z]+\d+(?:[A-Z]\d+)?")
_TRAILING_LETTERS = re.compile(r"[A-Z]+$")


def fold(mpn: str | None) -> str:
    """Trim and upper-case, '' for None."""
    return mpn.strip().upper() if mpn else ""


def base_part(mpn: str | None) -> str:
    """Folded MPN with any ordering suffix removed."""
    return strip_package_suffix(mpn).upper()


class ManufacturerHandler:
    """One manufacturer family's rules.

    Subclasses supply data through class attributes:

    - PATTERNS: (specialized kind, regex) rows, registered in order. Generic
      kinds are never listed; membership in them is derived.
    - SERIES_PREFIXES: product-line prefixes, any order. Sorted longest first
      when the subclass is created.
    - CROSS_REFERENCES: groups of base numbers that second-source each other.
    - PACKAGE_CODES: family suffix codes, consulted before packages.STANDARD_CODES.
    - SINGLE_LETTER_CODES: one-letter codes this family lets through to the
      shared table. Any other lone letter (Pb-free G, reel R) resolves to ''.

    Handlers hold no instance state, so instances are interchangeable. Tables
    are read-only mappings.
    """

    name: str = ""
    PATTERNS: tuple[tuple[ComponentType, str], ...] = ()
    SERIES_PREFIXES: tuple[str, ...] = ()
    CROSS_REFERENCES: tuple[frozenset[str], ...] = ()
    PACKAGE_CODES: Mapping[str, str] = MappingProxyType({})
    SINGLE_LETTER_CODES: frozenset[str] = frozenset()
    CORE_PATTERN: re.Pattern[str] = _CORE_PATTERN

    _supported: frozenset[ComponentType] = frozenset()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        for kind, _ in cls.PATTERNS:
            if not is_specialized(kind):
                raise ValueError(f"{cls.__name__} registers generic kind {kind}; only specialized kinds are allowed")
        prefixes = dict.fromkeys(p.upper() for p in cls.SERIES_PREFIXES)
        cls.SERIES_PREFIXES = tuple(sorted(prefixes, key=len, reverse=True))
        cls._supported = supported_kinds(kind for kind, _ in cls.PATTERNS)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # -- registration and matching ------------------------------------------

    def register_patterns(self, registry: PatternRegistry) -> None:
        for kind, pattern in self.PATTERNS:
            registry.register(kind, pattern)

    @property
    def supported_types(self) -> frozenset[ComponentType]:
        return self._supported

    def get_supported_types(self) -> frozenset[ComponentType]:
        return self._supported

    @property
    def specialized_types(self) -> tuple[ComponentType, ...]:
        """Specialized kinds in PATTERNS order, without duplicates."""
        return tuple(dict.fromkeys(kind for kind, _ in self.PATTERNS))

    def match(self, mpn: str | None, kind: ComponentType | None, registry: PatternRegistry) -> bool:
        """Whether `mpn` is a `kind` part of this family.

        A generic kind matches when any of this family's specializations of it
        matches, so a part recognised as MOSFET:Infineon is always a MOSFET.
        """
        text = fold(mpn)
        if not text or kind is None or kind not in self._supported:
            return False
        if is_specialized(kind):
            return registry.matches(text, kind)
        return any(
            registry.matches(text, child)
            for child in self.specialized_types
            if parent_type(child) is kind
        )

    def matched_types(self, mpn: str | None, registry: PatternRegistry) -> tuple[ComponentType, ...]:
        """Specialized kinds of this family that `mpn` matches, in PATTERNS order."""
        text = fold(mpn)
        if not text:
            return ()
        return tuple(kind for kind in self.specialized_types if registry.matches(text, kind))

    # -- extraction ---------------------------------------------------------

    def extract_package_code(self, mpn: str | None) -> str:
        """Package name from the trailing letters of the base part.

        Only known codes are returned; anything else gives ''.
        """
        part = base_part(mpn)
        if not part:
            return ""
        if "-" in part:
            part = part.rsplit("-", 1)[1]
        match = _TRAILING_LETTERS.search(part)
        if not match or match.start() == 0:
            return ""
        return self.lookup_package_code(match.group(0))

    def lookup_package_code(self, code: str) -> str:
        code = code.upper()
        if code in self.PACKAGE_CODES:
            return self.PACKAGE_CODES[code]
        if len(code) == 1 and code not in self.SINGLE_LETTER_CODES:
            return ""
        return resolve_code(code)

    def extract_series(self, mpn: str | None) -> str:
        text = fold(mpn)
        if not text:
            return ""
        for prefix in self.SERIES_PREFIXES:
            if text.startswith(prefix):
                return prefix
        return ""

    def core_number(self, mpn: str | None) -> str:
        """Part number without package, grade or ordering letters: 'LM358DR' -> 'LM358'."""
        part = base_part(mpn)
        match = self.CORE_PATTERN.match(part)
        return match.group(0) if match else ""

    # -- replacement --------------------------------------------------------

    def is_official_replacement(self, mpn1: str | None, mpn2: str | None) -> bool:
        """Whether `mpn1` can officially replace `mpn2`.

        Not necessarily symmetric: families with rating policies only let the
        higher-rated part stand in for the lower-rated one.
        """
        if mpn1 is None or mpn2 is None:
            return False
        a, b = base_part(mpn1), base_part(mpn2)
        if not a or not b:
            return False
        if self.same_part(a, b):
            return True
        if self.cross_referenced(a, b, self.CROSS_REFERENCES):
            return True
        return self.compatible(a, b)

    def compatible(self, part1: str, part2: str) -> bool:
        """Family policy for two distinct, suffix-stripped, upper-case parts.

        Default: same core number, differing only in package letters.
        """
        return self.package_only_difference(self.core_number(part1), self.core_number(part2))

    @staticmethod
    def same_part(mpn1: str | None, mpn2: str | None) -> bool:
        a, b = base_part(mpn1), base_part(mpn2)
        return bool(a) and a == b

    @staticmethod
    def package_only_difference(core1: str | None, core2: str | None) -> bool:
        """Both parts reduce to the same core number, so only packaging differs."""
        return bool(core1) and core1 == core2

    @staticmethod
    def rating_dominates(rating1: float | None, rating2: float | None) -> bool:
        """Part 1 replaces part 2 iff its rating is at least part 2's."""
        if rating1 is None or rating2 is None:
            return False
        return rating1 >= rating2

    @staticmethod
    def cross_referenced(mpn1: str | None, mpn2: str | None, groups: Iterable[frozenset[str]]) -> bool:
        """Both parts belong to the same second-source group."""
        a, b = fold(mpn1), fold(mpn2)
        if not a or not b:
            return False
        for group in groups:
            if _in_group(a, group) and _in_group(b, group):
                return True
        return False


def _in_group(part: str, group: frozenset[str]) -> bool:
    # MC7805CT belongs to MC7805, MC78051 would not
    for member in group:
        if part.startswith(member):
            rest = part[len(member):]
            if not rest or not rest[0].isdigit():
                return True
    return False
