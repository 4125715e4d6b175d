"""Pattern registry: component kind -> ordered, compiled MPN matchers.

Built once by letting each handler register its patterns, then frozen and
treated as read-only. A fresh registry can always be built for isolation.
"""

import logging
import re
from dataclasses import dataclass

from .types import ComponentType

logger = logging.getLogger(__name__)


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a registry that has been frozen."""


@dataclass(frozen=True)
class PatternEntry:
    """One registered matcher. `order` is the global registration index."""

    kind: ComponentType
    pattern: re.Pattern[str]
    order: int

    def matches(self, text: str) -> bool:
        return self.pattern.fullmatch(text) is not None


def _compile(matcher: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(matcher, re.Pattern):
        if matcher.flags & re.IGNORECASE:
            return matcher
        return re.compile(matcher.pattern, matcher.flags | re.IGNORECASE)
    return re.compile(matcher, re.IGNORECASE)


class PatternRegistry:
    """Ordered matchers per component kind.

    `matches` is the classification path: it ORs every matcher registered for
    the kind, in registration order. `first_pattern` only returns the first
    one and exists for introspection.
    """

    def __init__(self):
        self._entries: dict[ComponentType, list[PatternEntry]] = {}
        self._count = 0
        self._frozen = False

    def register(self, kind: ComponentType, matcher: str | re.Pattern[str]) -> PatternEntry:
        """Append a matcher for `kind`. Call order is match precedence."""
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {kind} pattern: registry is frozen")
        if not isinstance(kind, ComponentType):
            raise TypeError(f"Expected ComponentType, got {kind!r}")
        entry = PatternEntry(kind=kind, pattern=_compile(matcher), order=self._count)
        self._entries.setdefault(kind, []).append(entry)
        self._count += 1
        return entry

    def matches(self, text: str | None, kind: ComponentType | None) -> bool:
        if not text or kind is None:
            return False
        folded = text.strip().upper()
        if not folded:
            return False
        for entry in self._entries.get(kind, ()):
            if entry.matches(folded):
                return True
        return False

    def first_pattern(self, kind: ComponentType | None) -> re.Pattern[str] | None:
        """First-registered pattern for `kind`, or None.

        Later matchers for the same kind are not reachable here, so this must
        not be used to decide classification.
        """
        if kind is None:
            return None
        entries = self._entries.get(kind)
        return entries[0].pattern if entries else None

    def entries(self, kind: ComponentType) -> tuple[PatternEntry, ...]:
        return tuple(self._entries.get(kind, ()))

    def kinds(self) -> frozenset[ComponentType]:
        return frozenset(self._entries)

    def freeze(self) -> "PatternRegistry":
        if not self._frozen:
            self._frozen = True
            logger.debug(f"Pattern registry frozen: {self._count} patterns across {len(self._entries)} kinds")
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, kind: object) -> bool:
        return kind in self._entries

    def __len__(self) -> int:
        return self._count
