"""Response cache for common, non-personal questions."""

import hashlib
import json
import logging
import re
import time
from collections.abc import Callable
from enum import Enum

from beatrice.domain.services.protocols import CacheStore

logger = logging.getLogger(__name__)

KEY_PREFIX = "beatrice"


class QueryCategory(Enum):
    """Query categories with their own cache lifetime."""

    MOON_PHASE = "MOON_PHASE"
    RITUAL_INFO = "RITUAL_INFO"
    GENERAL_SPIRITUAL = "GENERAL_SPIRITUAL"
    PERSONALIZED = "PERSONALIZED"


CACHE_TTL_SECONDS: dict[QueryCategory, int] = {
    QueryCategory.MOON_PHASE: 3600 * 6,
    QueryCategory.RITUAL_INFO: 3600 * 24 * 7,
    QueryCategory.GENERAL_SPIRITUAL: 3600 * 24,
    QueryCategory.PERSONALIZED: 0,
}

# Checked in order; first match wins
QUERY_PATTERNS: dict[QueryCategory, list[re.Pattern[str]]] = {
    QueryCategory.MOON_PHASE: [
        re.compile(r"moon phase", re.IGNORECASE),
        re.compile(r"current moon", re.IGNORECASE),
        re.compile(r"lunar (cycle|calendar)", re.IGNORECASE),
        re.compile(r"full moon", re.IGNORECASE),
        re.compile(r"new moon", re.IGNORECASE),
    ],
    QueryCategory.RITUAL_INFO: [
        re.compile(r"protection ritual", re.IGNORECASE),
        re.compile(r"cleansing ritual", re.IGNORECASE),
        re.compile(r"basic ritual", re.IGNORECASE),
        re.compile(r"how to (do|perform) .* ritual", re.IGNORECASE),
        re.compile(r"ritual for beginners", re.IGNORECASE),
    ],
    QueryCategory.GENERAL_SPIRITUAL: [
        re.compile(r"what is (meditation|grounding|centering)", re.IGNORECASE),
        re.compile(r"how to meditate", re.IGNORECASE),
        re.compile(r"spiritual practice", re.IGNORECASE),
        re.compile(r"chakra", re.IGNORECASE),
        re.compile(r"crystal meanings", re.IGNORECASE),
    ],
}

PERSONAL_PATTERN = re.compile(r"\b(my|i|me|our|we)\b", re.IGNORECASE)

WARM_RESPONSES: list[tuple[str, QueryCategory, str]] = [
    (
        "What's the current moon phase?",
        QueryCategory.MOON_PHASE,
        "I sense the moon's energy shifting through its eternal dance. To give "
        "you the most accurate reading, I would need to check the current date "
        "and calculate the precise lunar position. The moon's phase affects our "
        "spiritual practices differently - new moons are perfect for setting "
        "intentions, while full moons amplify our manifestation power.",
    ),
    (
        "How do I do a protection ritual?",
        QueryCategory.RITUAL_INFO,
        "Protection rituals can be beautifully simple or elaborate, depending on "
        "your needs. A basic protection ritual involves: 1) Cleansing your space "
        "with sage or incense, 2) Visualizing white or golden light surrounding "
        "you, 3) Setting a clear intention for protection, 4) Using protective "
        "crystals like black tourmaline or obsidian, 5) Closing with gratitude. "
        "Remember, your intention is the most powerful element.",
    ),
    (
        "What is meditation?",
        QueryCategory.GENERAL_SPIRITUAL,
        "Meditation is a sacred practice of quieting the mind and connecting "
        "with your inner wisdom. It's about creating space between your "
        "thoughts, allowing you to observe without judgment. There are many "
        "forms - mindfulness, guided visualization, mantra meditation, and more. "
        "Even a few minutes daily can transform your spiritual journey by "
        "bringing clarity, peace, and deeper self-awareness.",
    ),
]


def categorize(query: str) -> QueryCategory:
    """Categorize a query by pattern.

    Args:
        query: User question.

    Returns:
        Matching category. Queries matching no pattern are PERSONALIZED
        when they contain a first-person pronoun, GENERAL_SPIRITUAL
        otherwise.
    """
    for category, patterns in QUERY_PATTERNS.items():
        if any(pattern.search(query) for pattern in patterns):
            return category

    if PERSONAL_PATTERN.search(query):
        return QueryCategory.PERSONALIZED

    return QueryCategory.GENERAL_SPIRITUAL


def normalize_query(query: str) -> str:
    """Normalize a query so word order and punctuation do not matter."""
    cleaned = re.sub(r"[^\w\s]", "", query.lower())
    return " ".join(sorted(cleaned.split()))


def cache_key(query: str, category: QueryCategory) -> str:
    """Build the cache key for a query.

    Args:
        query: User question.
        category: Query category.

    Returns:
        Key of the form ``beatrice:<CATEGORY>:<hash>``.
    """
    digest = hashlib.sha256(normalize_query(query).encode("utf-8")).hexdigest()
    return f"{KEY_PREFIX}:{category.value}:{digest[:16]}"


class ResponseCache:
    """Caches canned answers to common questions.

    Personalized questions are never cached. Store errors are logged and
    treated as a miss.
    """

    def __init__(
        self,
        cache_store: CacheStore,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the response cache.

        Args:
            cache_store: Key-value store shared with the context manager.
            clock: Wall-clock time source in seconds.
        """
        self._cache_store = cache_store
        self._clock = clock

    async def get_cached_response(self, query: str) -> str | None:
        """Return a cached answer for the query, if any.

        Args:
            query: User question.

        Returns:
            Cached answer, or None on a miss.
        """
        category = categorize(query)
        if category is QueryCategory.PERSONALIZED:
            return None
        if not self._cache_store.is_available:
            return None

        try:
            raw = await self._cache_store.get(cache_key(query, category))
        except Exception:
            logger.exception("Response cache read error (%s)", category.value)
            return None

        if raw is None:
            return None

        try:
            cached = json.loads(raw)
            content = cached["content"]
            timestamp = float(cached["timestamp"])
        except (TypeError, ValueError, KeyError):
            logger.warning("Discarding malformed cached response (%s)", category.value)
            return None

        if not self._is_fresh(timestamp, category):
            return None

        logger.info("Cache hit: %s", category.value)
        return content

    async def cache_response(
        self,
        query: str,
        response: str,
        category: QueryCategory | None = None,
    ) -> bool:
        """Cache an answer for future use.

        Args:
            query: User question.
            response: Answer to cache.
            category: Overrides the detected category.

        Returns:
            True if the answer was written.
        """
        category = category or categorize(query)
        ttl = CACHE_TTL_SECONDS[category]
        if ttl <= 0 or not self._cache_store.is_available:
            return False

        payload = json.dumps(
            {
                "content": response,
                "timestamp": self._clock(),
                "queryType": category.value,
            },
            ensure_ascii=False,
        )

        try:
            await self._cache_store.set(cache_key(query, category), payload, ttl)
        except Exception:
            logger.exception("Error caching response (%s)", category.value)
            return False

        logger.info("Cached response: %s (TTL: %ds)", category.value, ttl)
        return True

    async def warm_cache(self) -> int:
        """Pre-populate answers to the most common questions.

        Returns:
            Number of answers written.
        """
        written = 0
        for query, category, response in WARM_RESPONSES:
            if await self.cache_response(query, response, category):
                written += 1
        logger.info("Cache warmed with %d common queries", written)
        return written

    def _is_fresh(self, timestamp: float, category: QueryCategory) -> bool:
        return self._clock() - timestamp < CACHE_TTL_SECONDS[category]
