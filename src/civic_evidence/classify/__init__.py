"""Query classification: language detection and intent rules."""

from civic_evidence.classify.intent import INTENT_RULES, classify_intent
from civic_evidence.classify.language import (
    SCRIPT_RULES,
    UnsupportedLanguageError,
    detect_language,
    resolve_language,
)

__all__ = [
    "INTENT_RULES",
    "SCRIPT_RULES",
    "UnsupportedLanguageError",
    "classify_intent",
    "detect_language",
    "resolve_language",
]
