"""Tool-facing operations. Every function returns a JSON-serializable dict."""

import logging
from typing import Any

from .classifier import Classifier, get_classifier
from .config import MAX_BATCH_MPNS, MAX_TEXT_LENGTH
from .mpn import NormalizedMPN, get_search_variations, is_equivalent_mpn
from .packages import are_compatible, mounting_style
from .types import base_type

logger = logging.getLogger(__name__)


def describe_mpn(mpn: str | None, classifier: Classifier | None = None) -> dict[str, Any]:
    """Everything the classifier can tell about one MPN.

    Unrecognised parts still get their suffix split and search variations;
    the handler-derived fields are then None or empty.
    """
    if not mpn or not mpn.strip():
        return {"error": "mpn is required"}
    classifier = classifier or get_classifier()

    parsed = NormalizedMPN.parse(mpn)
    handler = classifier.find_handler(parsed.original)
    kind = classifier.determine_type(parsed.original)
    package = handler.extract_package_code(parsed.original) if handler else ""

    return {
        "mpn": parsed.original,
        "base": parsed.base,
        "suffix": parsed.suffix,
        "search_variations": get_search_variations(parsed.original),
        "manufacturer": handler.name if handler else None,
        "type": str(kind) if kind else None,
        "base_type": str(base_type(kind)) if kind else None,
        "matching_types": sorted(str(k) for k in classifier.matching_types(parsed.original)),
        "series": handler.extract_series(parsed.original) if handler else "",
        "package": package,
        "mounting": mounting_style(package) if package else None,
    }


def check_replacement(
    original: str | None,
    candidate: str | None,
    classifier: Classifier | None = None,
) -> dict[str, Any]:
    """Can `candidate` stand in for `original`?

    `official_replacement` is the candidate-replaces-original direction;
    `reverse_replacement` is reported separately because rating policies are
    one-way. `package_compatible` compares the two extracted packages and is
    False when either is unknown.
    """
    if not original or not original.strip() or not candidate or not candidate.strip():
        return {"error": "original and candidate are both required"}
    classifier = classifier or get_classifier()

    original = original.strip()
    candidate = candidate.strip()
    handler = classifier.find_handler(candidate) or classifier.find_handler(original)
    original_package = classifier.extract_package_code(original)
    candidate_package = classifier.extract_package_code(candidate)

    return {
        "original": original,
        "candidate": candidate,
        "equivalent": is_equivalent_mpn(original, candidate),
        "official_replacement": classifier.is_official_replacement(candidate, original),
        "reverse_replacement": classifier.is_official_replacement(original, candidate),
        "original_package": original_package,
        "candidate_package": candidate_package,
        "package_compatible": are_compatible(original_package, candidate_package),
        "manufacturer": handler.name if handler else None,
    }


def classify_batch(mpns: list[str] | None, classifier: Classifier | None = None) -> dict[str, Any]:
    """describe_mpn for each entry, in input order."""
    if not mpns:
        return {"error": "mpns must be a non-empty list"}
    if len(mpns) > MAX_BATCH_MPNS:
        return {"error": f"Too many MPNs: {len(mpns)} (max {MAX_BATCH_MPNS})"}
    classifier = classifier or get_classifier()

    results = [describe_mpn(mpn, classifier) for mpn in mpns]
    recognised = sum(1 for r in results if r.get("manufacturer"))
    logger.debug(f"Batch classified: {recognised}/{len(results)} recognised")
    return {"results": results, "count": len(results), "recognised": recognised}


def find_mpn(text: str | None, classifier: Classifier | None = None) -> dict[str, Any]:
    """Pull the first recognisable MPN out of free text."""
    if not text or not text.strip():
        return {"error": "text is required"}
    if len(text) > MAX_TEXT_LENGTH:
        return {"error": f"Text too long: {len(text)} characters (max {MAX_TEXT_LENGTH})"}
    classifier = classifier or get_classifier()
    return {"text": text, "mpn": classifier.find_mpn_in_text(text)}
