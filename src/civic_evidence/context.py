"""Rendering evidence bundles into a bounded prompt context."""

import re
from dataclasses import dataclass

from civic_evidence.data import EvidenceBundle, Intent

DEFAULT_MAX_CHARS = 4000
TRUNCATION_MARKER = " ..."

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class EvidenceContext:
    """Context block handed to the generation step."""

    text: str
    source: str
    urls: tuple[str, ...]
    truncated: bool = False


def normalize_evidence(data: str, max_chars: int = DEFAULT_MAX_CHARS) -> tuple[str, bool]:
    """Collapse whitespace runs and cap the length of evidence text.

    Returns:
        Tuple of (normalized text, whether it was truncated).
    """
    if max_chars <= len(TRUNCATION_MARKER):
        raise ValueError(f"max_chars must exceed {len(TRUNCATION_MARKER)}")
    normalized = _WHITESPACE.sub(" ", data).strip()
    if len(normalized) <= max_chars:
        return normalized, False
    cut = normalized[: max_chars - len(TRUNCATION_MARKER)].rstrip()
    return cut + TRUNCATION_MARKER, True


def build_context(
    bundle: EvidenceBundle,
    intent: Intent,
    max_chars: int = DEFAULT_MAX_CHARS,
) -> EvidenceContext:
    """Render a bundle as an ``INTENT / SOURCE / DATA`` block.

    Args:
        bundle: Aggregated evidence.
        intent: Intent the evidence was gathered for.
        max_chars: Upper bound on the length of the DATA section.
    """
    data, truncated = normalize_evidence(bundle.data, max_chars)
    text = f"INTENT: {intent}\nSOURCE: {bundle.source}\nDATA: {data}"
    return EvidenceContext(text=text, source=bundle.source, urls=bundle.urls, truncated=truncated)
