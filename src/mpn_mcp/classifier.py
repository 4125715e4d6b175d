"""Dispatch over a set of manufacturer handlers sharing one pattern registry."""

import logging
import re
import threading
from typing import Iterable

from .handlers import ManufacturerHandler, default_handlers
from .mpn import clean_token, strip_package_suffix
from .registry import PatternRegistry
from .types import ComponentType, parent_type

logger = logging.getLogger(__name__)

_TOKEN_SEPARATORS = re.compile(r"[\s;,|]+")


def build_registry(handlers: Iterable[ManufacturerHandler]) -> PatternRegistry:
    """Register every handler's patterns, in handler name order, and freeze."""
    registry = PatternRegistry()
    for handler in sorted(handlers, key=lambda h: type(h).__name__):
        handler.register_patterns(registry)
    return registry.freeze()


class Classifier:
    """Handlers plus the registry built from them.

    Each instance builds its own registry, so classifiers never share state.
    """

    def __init__(self, handlers: Iterable[ManufacturerHandler] | None = None):
        if handlers is None:
            handlers = default_handlers()
        self.handlers: tuple[ManufacturerHandler, ...] = tuple(
            sorted(handlers, key=lambda h: type(h).__name__)
        )
        self.registry = build_registry(self.handlers)
        logger.debug(f"Classifier ready: {len(self.handlers)} handlers, {len(self.registry)} patterns")

    def matches_type(self, mpn: str | None, kind: ComponentType | None) -> bool:
        return any(handler.match(mpn, kind, self.registry) for handler in self.handlers)

    def find_handler(self, mpn: str | None) -> ManufacturerHandler | None:
        """First handler that recognises `mpn` under any of its kinds."""
        for handler in self.handlers:
            if handler.matched_types(mpn, self.registry):
                return handler
        return None

    def determine_type(self, mpn: str | None) -> ComponentType | None:
        """Most specific kind for `mpn`, None if nothing recognises it."""
        for handler in self.handlers:
            kinds = handler.matched_types(mpn, self.registry)
            if kinds:
                logger.debug(f"{mpn} -> {kinds[0]} ({handler.name})")
                return kinds[0]
        return None

    def matching_types(self, mpn: str | None) -> frozenset[ComponentType]:
        """Every specialized kind `mpn` matches, plus their generic ancestors."""
        result: set[ComponentType] = set()
        for handler in self.handlers:
            for kind in handler.matched_types(mpn, self.registry):
                result.add(kind)
                ancestor = parent_type(kind)
                if ancestor is not None:
                    result.add(ancestor)
        return frozenset(result)

    def handlers_for_type(self, kind: ComponentType | None) -> tuple[ManufacturerHandler, ...]:
        if kind is None:
            return ()
        return tuple(h for h in self.handlers if kind in h.supported_types)

    def extract_package_code(self, mpn: str | None) -> str:
        handler = self.find_handler(mpn)
        return handler.extract_package_code(mpn) if handler else ""

    def extract_series(self, mpn: str | None) -> str:
        handler = self.find_handler(mpn)
        return handler.extract_series(mpn) if handler else ""

    def is_official_replacement(self, mpn1: str | None, mpn2: str | None) -> bool:
        """The handler recognising `mpn1` decides; unrecognised parts replace nothing."""
        handler = self.find_handler(mpn1)
        if handler is None:
            return False
        return handler.is_official_replacement(mpn1, mpn2)

    def find_mpn_in_text(self, text: str | None) -> str | None:
        """First token in free text that some handler recognises.

        'Use P/N:LM358N or similar' -> 'LM358N'
        """
        if not text:
            return None
        for word in _TOKEN_SEPARATORS.split(text):
            token = clean_token(word)
            if not token:
                continue
            if self.find_handler(token) or self.find_handler(strip_package_suffix(token)):
                return token
        return None


_classifier: Classifier | None = None
_classifier_lock = threading.Lock()


def get_classifier() -> Classifier:
    """Get or create the process-wide classifier (thread-safe)."""
    global _classifier
    if _classifier is None:
        with _classifier_lock:
            # Double-check locking pattern
            if _classifier is None:
                _classifier = Classifier()
                logger.info(f"Default classifier built with {len(_classifier.handlers)} handlers")
    return _classifier


def reset_classifier() -> None:
    """Drop the process-wide classifier so the next call rebuilds it."""
    global _classifier
    with _classifier_lock:
        _classifier = None
