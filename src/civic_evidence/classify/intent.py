"""Keyword-based intent classification."""

import re

from civic_evidence.data import Intent

# First match wins; do not reorder.
INTENT_RULES: tuple[tuple[Intent, re.Pattern[str]], ...] = (
    (Intent.LAW, re.compile(r"\b(law|act|bill|section|legal|court)\b")),
    (Intent.REPRESENTATIVE, re.compile(r"\b(mla|mp|representative|minister|politician)\b")),
    (Intent.FACT_CHECK, re.compile(r"\b(fact|true|false|verify|check|claim|fake)\b")),
    (Intent.GRIEVANCE, re.compile(r"\b(complaint|grievance|problem|issue)\b")),
)


def classify_intent(text: str) -> Intent:
    """Classify a query into an intent using ordered whole-word keyword rules.

    Args:
        text: Raw query text.

    Returns:
        The intent of the first matching rule, else ``Intent.GENERAL``.
    """
    lowered = text.lower()
    for intent, pattern in INTENT_RULES:
        if pattern.search(lowered):
            return intent
    return Intent.GENERAL
