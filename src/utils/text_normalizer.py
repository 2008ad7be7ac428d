"""Text normalization helpers shared by sources, enrichment and moderation.

Three concerns live here:

1. **Diacritic folding** -- Romanian listings mix "Timișoara", "Timişoara"
   (cedilla variant) and plain "Timisoara".  Keyword tables are matched
   against the folded, lower-cased form so all three spellings agree.

2. **Language detection** -- a lightweight en/ro guess based on Romanian
   diacritics and stop-words.  Good enough to decide whether an original
   description is already in the target language; not a general detector.

3. **Tag normalization** -- comma-separated or list input into an ordered,
   de-duplicated list of short lower-case tags.
"""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")
_WORD_RE = re.compile(r"[a-zăâîșşțţ]+", re.IGNORECASE)

_ROMANIAN_DIACRITICS = frozenset("ăâîșşțţĂÂÎȘŞȚŢ")

_ROMANIAN_STOPWORDS = frozenset({
    "și", "si", "în", "in", "la", "de", "cu", "pentru", "este", "sunt",
    "din", "pe", "un", "o", "al", "ale", "care", "mai", "acest", "această",
    "unde", "vă", "va", "noastre", "nostru", "seară", "intrare",
})

_ENGLISH_STOPWORDS = frozenset({
    "the", "and", "of", "to", "in", "is", "for", "with", "at", "on",
    "this", "an", "a", "join", "our", "your", "will", "be", "are", "from",
    "evening", "night", "free", "entry",
})


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and strip the ends."""
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def strip_diacritics(text: str) -> str:
    """Fold accented characters to their base ASCII letter.

    >>> strip_diacritics("Timișoara, Piața Unirii")
    'Timisoara, Piata Unirii'
    """
    decomposed = unicodedata.normalize("NFKD", text or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold(text: str) -> str:
    """Lower-case, diacritic-free, whitespace-normalized form used for matching."""
    return normalize_whitespace(strip_diacritics(text)).lower()


def detect_language(text: str) -> str:
    """Guess whether *text* is Romanian (``"ro"``) or English (``"en"``).

    Any Romanian diacritic decides immediately.  Otherwise the stop-word
    hits for each language are counted; ties (including empty text) go to
    English.
    """
    if not text:
        return "en"
    if any(ch in _ROMANIAN_DIACRITICS for ch in text):
        return "ro"

    words = [w.lower() for w in _WORD_RE.findall(text)]
    ro_hits = sum(1 for w in words if w in _ROMANIAN_STOPWORDS)
    en_hits = sum(1 for w in words if w in _ENGLISH_STOPWORDS)
    return "ro" if ro_hits > en_hits else "en"


def normalize_tags(raw: str | list[str] | None, limit: int | None = None) -> list[str]:
    """Turn ``"Jazz, live ,jazz"`` or ``["Jazz", "live"]`` into ``["jazz", "live"]``.

    Order of first appearance is kept; blanks are dropped.
    """
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else list(raw)

    tags: list[str] = []
    for item in items:
        tag = normalize_whitespace(str(item)).lower()
        if tag and tag not in tags:
            tags.append(tag)
    if limit is not None:
        tags = tags[:limit]
    return tags
