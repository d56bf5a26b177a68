"""Script-range language detection."""

import re

from civic_evidence.data import Language

# Checked in order; the first script found in the text wins.
SCRIPT_RULES: tuple[tuple[Language, re.Pattern[str]], ...] = (
    (Language.HINDI, re.compile(r"[\u0900-\u097F]")),
    (Language.TAMIL, re.compile(r"[\u0B80-\u0BFF]")),
    (Language.MALAYALAM, re.compile(r"[\u0D00-\u0D7F]")),
    (Language.TELUGU, re.compile(r"[\u0C00-\u0C7F]")),
)


class UnsupportedLanguageError(ValueError):
    """Raised when a caller asks for a language we cannot answer in."""


def detect_language(text: str) -> Language:
    """Detect the language of ``text`` from the Unicode scripts it contains.

    Args:
        text: Raw query text.

    Returns:
        The language of the first matching script, else ``Language.ENGLISH``.
    """
    for language, pattern in SCRIPT_RULES:
        if pattern.search(text):
            return language
    return Language.ENGLISH


def resolve_language(text: str, override: Language | str | None = None) -> Language:
    """Return the caller's explicit language if given, else detect it.

    Args:
        text: Raw query text.
        override: Explicit language, as a ``Language`` or its value.

    Raises:
        UnsupportedLanguageError: If ``override`` is not a known language.
    """
    if override is None or override == "":
        return detect_language(text)
    if isinstance(override, Language):
        return override
    try:
        return Language(override.strip().lower())
    except ValueError:
        supported = ", ".join(lang.value for lang in Language)
        msg = f"Unsupported language '{override}' (expected one of: {supported})"
        raise UnsupportedLanguageError(msg) from None
