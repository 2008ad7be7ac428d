"""Static domain knowledge for Timișoara's cultural event scene.

# ─── PURPOSE ──────────────────────────────────────────────────────────
#
# Hand-curated tables consumed by the deterministic (non-AI) code paths:
#
#   - CATEGORY_RULES drive the rule-based enhancement strategy: the first
#     rule whose keywords appear in an event's title (then description)
#     decides category, mood, audience and starting tags.
#   - DESCRIPTION_TEMPLATES give each category a fixed opening sentence in
#     both supported languages.
#   - LOCAL_AREA_KEYWORDS, CULTURAL_KEYWORDS, SPAM_PHRASES and
#     INAPPROPRIATE_TERMS feed submission moderation.
#
# All keyword entries are stored folded (lower-case, no diacritics) and are
# matched against ``text_normalizer.fold(...)`` output, so "Piața",
# "Piata" and "PIAŢA" all hit the same entry.
#
# Everything here is pure data built once at import time.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.models.event import Category, Mood, TargetAudience


# ═════════════════════════════════════════════════════════════════════════
# 1. CATEGORY RULES
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CategoryRule:
    """Keywords that select a category plus the values that come with it."""

    category: Category
    keywords: tuple[str, ...]
    tags: tuple[str, ...]
    mood: Mood
    audience: TargetAudience

    def matches(self, folded_text: str) -> bool:
        return _keyword_pattern(self.keywords).search(folded_text) is not None


# Order matters: first match wins.
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        Category.MUSIC,
        ("jazz", "music", "muzica", "concert", "band", "singer", "dj", "recital"),
        ("music", "live", "performance"),
        Mood.ENERGETIC,
        TargetAudience.YOUNG_ADULTS,
    ),
    CategoryRule(
        Category.ART,
        ("art", "arta", "exhibition", "expozitie", "museum", "muzeu", "gallery", "galerie", "painting"),
        ("art", "culture", "exhibition"),
        Mood.INTIMATE,
        TargetAudience.ARTISTS,
    ),
    CategoryRule(
        Category.FOOD,
        ("food", "restaurant", "culinary", "culinar", "taste", "festival", "gastronom"),
        ("food", "local", "festival"),
        Mood.FESTIVE,
        TargetAudience.FAMILIES,
    ),
    CategoryRule(
        Category.THEATER,
        ("theater", "theatre", "teatru", "teatrul", "play", "drama", "spectacol"),
        ("theater", "performance", "culture"),
        Mood.INTIMATE,
        TargetAudience.GENERAL,
    ),
    CategoryRule(
        Category.TECHNOLOGY,
        ("tech", "meetup", "conference", "coding", "development", "hackathon", "startup"),
        ("technology", "networking", "education"),
        Mood.PROFESSIONAL,
        TargetAudience.PROFESSIONALS,
    ),
    CategoryRule(
        Category.CULTURAL,
        ("cultural", "culture", "heritage", "traditional", "traditie", "christmas", "craciun", "market", "targ"),
        ("cultural", "heritage", "community"),
        Mood.FESTIVE,
        TargetAudience.GENERAL,
    ),
    CategoryRule(
        Category.OFFICIAL,
        ("council", "consiliul", "mayor", "primar", "primaria", "official", "public session", "city hall", "city day"),
        ("official", "civic", "community"),
        Mood.NEUTRAL,
        TargetAudience.GENERAL,
    ),
)

DEFAULT_RULE = CategoryRule(
    Category.ENTERTAINMENT,
    (),
    ("entertainment",),
    Mood.NEUTRAL,
    TargetAudience.GENERAL,
)

# Location substrings (folded) -> tags added for events held there.
LOCATION_TAGS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("piata", "square", "park", "parcul"), ("outdoor",)),
    (("museum", "muzeul", "muzeu"), ("indoor", "cultural")),
)

# Whole word found in title/description/price -> tag.
KEYWORD_TAGS: dict[str, str] = {
    "music": "music",
    "technology": "technology",
    "art": "art",
    "food": "food",
    "theater": "theater",
    "tech": "technology",
    "family": "family",
    "outdoor": "outdoor",
    "indoor": "indoor",
    "free": "free",
    "festival": "festival",
}

BASE_TAGS: tuple[str, ...] = ("local", "culture")

MAX_TAGS = 5


# ═════════════════════════════════════════════════════════════════════════
# 2. DESCRIPTION TEMPLATES
# ═════════════════════════════════════════════════════════════════════════
# {category: {language: opening sentence}}

DESCRIPTION_TEMPLATES: dict[Category, dict[str, str]] = {
    Category.MUSIC: {
        "en": "Join us for an exciting musical experience in the heart of Timișoara.",
        "ro": "Alătură-te unei experiențe muzicale captivante în inima Timișoarei.",
    },
    Category.ART: {
        "en": "Discover inspiring artworks in one of Timișoara's cultural venues.",
        "ro": "Descoperă opere de artă inspiraționale într-unul dintre spațiile culturale ale Timișoarei.",
    },
    Category.FOOD: {
        "en": "Taste the authentic flavors of Banat region in this culinary celebration.",
        "ro": "Gustă aromele autentice ale Banatului în această sărbătoare culinară.",
    },
    Category.THEATER: {
        "en": "Experience compelling storytelling in Timișoara's theatrical tradition.",
        "ro": "Trăiește povești captivante în tradiția teatrală a Timișoarei.",
    },
    Category.TECHNOLOGY: {
        "en": "Connect with fellow innovators in Timișoara's growing tech community.",
        "ro": "Conectează-te cu alți inovatori din comunitatea tech în creștere a Timișoarei.",
    },
    Category.CULTURAL: {
        "en": "Immerse yourself in the rich cultural heritage of Timișoara.",
        "ro": "Cufundă-te în bogata moștenire culturală a Timișoarei.",
    },
    Category.OFFICIAL: {
        "en": "Participate in important civic activities in our European Capital of Culture.",
        "ro": "Participă la activități civice importante în Capitala Europeană a Culturii.",
    },
}

DEFAULT_TEMPLATE: dict[str, str] = {
    "en": "Join this exciting event in Timișoara.",
    "ro": "Participă la acest eveniment captivant din Timișoara.",
}

LOCATION_SENTENCE: dict[str, str] = {
    "en": "Located in {location}, this event showcases the vibrant spirit of Timișoara's cultural scene.",
    "ro": "Situat în {location}, acest eveniment reflectă spiritul vibrant al scenei culturale din Timișoara.",
}

# Originals shorter than this are not worth repeating in the description.
MIN_APPENDED_DESCRIPTION = 20


# ═════════════════════════════════════════════════════════════════════════
# 3. SUBMISSION MODERATION
# ═════════════════════════════════════════════════════════════════════════

# City, county, square or district names; a submission's location must
# mention one at a word start to count as local.  Venue names alone do not.
LOCAL_AREA_KEYWORDS: tuple[str, ...] = (
    "timisoara", "timis", "banat",
    "piata unirii", "piata victoriei", "piata libertatii", "union square", "victory square",
    "iosefin", "elisabetin", "fratelia", "freidorf", "mehala",
    "dumbravita", "giroc", "ghiroda", "mosnita", "sanandrei",
)

CULTURAL_KEYWORDS: tuple[str, ...] = (
    "concert", "festival", "exhibition", "expozitie", "theater", "theatre", "teatru",
    "art", "arta", "music", "muzica", "culture", "cultural", "dance", "dans",
    "film", "cinema", "workshop", "atelier", "heritage", "traditional", "literature",
    "poetry", "poezie", "opera", "jazz", "gallery", "galerie", "museum", "muzeu",
    "book", "carte", "community", "comunitate",
)

SPAM_PHRASES: tuple[str, ...] = (
    "click here", "buy now", "limited offer", "act now", "make money", "earn money",
    "100% free", "casino", "crypto", "bitcoin", "lottery", "winner", "discount code",
    "work from home", "loan", "viagra", "subscribe now", "follow for follow",
)

INAPPROPRIATE_TERMS: tuple[str, ...] = (
    "porn", "xxx", "escort", "nude", "drugs for sale", "weapons", "hate speech",
)


# ═════════════════════════════════════════════════════════════════════════
# Helpers
# ═════════════════════════════════════════════════════════════════════════

_PATTERN_CACHE: dict[tuple[str, ...], re.Pattern[str]] = {}


def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    # Keywords match at a word start: "tech" hits "technology" but "art"
    # does not hit "party".
    pattern = _PATTERN_CACHE.get(keywords)
    if pattern is None:
        alternation = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
        pattern = re.compile(rf"(?<!\w)(?:{alternation})" if alternation else r"(?!x)x")
        _PATTERN_CACHE[keywords] = pattern
    return pattern


def find_keywords(folded_text: str, keywords: tuple[str, ...]) -> list[str]:
    """Return the distinct *keywords* present in *folded_text*, in table order."""
    return [k for k in keywords if _keyword_pattern((k,)).search(folded_text)]


def match_category_rule(folded_title: str, folded_description: str) -> CategoryRule:
    """First rule matching the title, else the description, else the default."""
    for text in (folded_title, folded_description):
        for rule in CATEGORY_RULES:
            if rule.matches(text):
                return rule
    return DEFAULT_RULE


def find_words(folded_text: str, words: tuple[str, ...]) -> list[str]:
    """Return the *words* that occur in *folded_text* as whole words."""
    return [w for w in words if re.search(rf"(?<!\w){re.escape(w)}(?!\w)", folded_text)]
