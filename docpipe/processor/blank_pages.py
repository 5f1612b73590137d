"""Text-based blank page detection.

Watermark-only pages can read as blank and stamp-only pages as non-blank;
no pixel analysis is done.
"""

from collections.abc import Sequence

BLANK_PAGE_THRESHOLD = 20
BLANK_MARKERS = frozenset({"[blank]", "[blank page]"})
BLANK_PHRASES = ("[blank page]", "intentionally blank", "intentionally left blank")


def is_blank_page(text: str | None, threshold: int = BLANK_PAGE_THRESHOLD) -> bool:
    if not text:
        return True
    stripped = text.strip()
    if len("".join(stripped.split())) < threshold:
        return True
    lowered = stripped.lower()
    if lowered in BLANK_MARKERS:
        return True
    return any(phrase in lowered for phrase in BLANK_PHRASES)


def filter_blank_pages(
    pages: Sequence[int],
    page_texts: Sequence[str],
    threshold: int = BLANK_PAGE_THRESHOLD,
) -> list[int]:
    """Drop 1-indexed pages whose text is blank. Pages without text are kept."""
    kept = []
    for page in pages:
        if 1 <= page <= len(page_texts) and is_blank_page(page_texts[page - 1], threshold):
            continue
        kept.append(page)
    return kept
