"""Tests for ResponseCache."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from beatrice.application.services.response_cache import (
    CACHE_TTL_SECONDS,
    QueryCategory,
    ResponseCache,
    cache_key,
    categorize,
    normalize_query,
)
from beatrice.infrastructure.cache import (
    CacheError,
    InMemoryCacheStore,
    NullCacheStore,
)


class FakeClock:
    """Settable wall clock."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Create fake clock."""
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryCacheStore:
    """Create in-memory store sharing the fake clock."""
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def response_cache(store: InMemoryCacheStore, clock: FakeClock) -> ResponseCache:
    """Create ResponseCache instance."""
    return ResponseCache(store, clock=clock)


class TestCategorize:
    """Tests for categorize."""

    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("What's the current moon phase?", QueryCategory.MOON_PHASE),
            ("When is the next FULL MOON", QueryCategory.MOON_PHASE),
            ("Explain the lunar calendar", QueryCategory.MOON_PHASE),
            ("How do I do a protection ritual?", QueryCategory.RITUAL_INFO),
            ("how to perform a candle ritual", QueryCategory.RITUAL_INFO),
            ("What is grounding?", QueryCategory.GENERAL_SPIRITUAL),
            ("Tell me about the heart chakra", QueryCategory.GENERAL_SPIRITUAL),
            ("Why do I feel drained lately?", QueryCategory.PERSONALIZED),
            ("Should we move house?", QueryCategory.PERSONALIZED),
            ("What does sage smell like?", QueryCategory.GENERAL_SPIRITUAL),
        ],
    )
    def test_categorize(self, query: str, expected: QueryCategory) -> None:
        """Test pattern-based categorization."""
        assert categorize(query) == expected

    def test_pronoun_must_be_whole_word(self) -> None:
        """Test that words merely containing a pronoun are not personal."""
        assert categorize("Is time linear?") == QueryCategory.GENERAL_SPIRITUAL


class TestCacheKey:
    """Tests for key generation."""

    def test_normalize_ignores_order_and_punctuation(self) -> None:
        """Test normalization."""
        assert normalize_query("What is  Meditation?!") == "is meditation what"

    def test_equivalent_queries_share_key(self) -> None:
        """Test that reordered queries map to the same key."""
        category = QueryCategory.GENERAL_SPIRITUAL
        assert cache_key("what is meditation", category) == cache_key(
            "Meditation is what?", category
        )

    def test_key_format(self) -> None:
        """Test the key prefix and category."""
        key = cache_key("full moon", QueryCategory.MOON_PHASE)

        assert key.startswith("beatrice:MOON_PHASE:")


class TestCacheResponse:
    """Tests for cache_response and get_cached_response."""

    async def test_cache_then_hit(self, response_cache: ResponseCache) -> None:
        """Test that a cached answer is returned for the same question."""
        written = await response_cache.cache_response(
            "What is meditation?", "Quiet the mind."
        )

        assert written is True
        assert await response_cache.get_cached_response("meditation is what") == (
            "Quiet the mind."
        )

    async def test_payload_and_ttl(self, clock: FakeClock) -> None:
        """Test the stored payload and expiry."""
        store = MagicMock()
        store.is_available = True
        store.set = AsyncMock()
        cache = ResponseCache(store, clock=clock)

        await cache.cache_response("full moon tonight", "Bright energy.")

        key, value, ttl = store.set.call_args.args
        assert key == cache_key("full moon tonight", QueryCategory.MOON_PHASE)
        assert ttl == CACHE_TTL_SECONDS[QueryCategory.MOON_PHASE]
        assert json.loads(value) == {
            "content": "Bright energy.",
            "timestamp": clock.now,
            "queryType": "MOON_PHASE",
        }

    async def test_personalized_never_cached(
        self, response_cache: ResponseCache, store: InMemoryCacheStore
    ) -> None:
        """Test that personal questions are neither written nor read."""
        written = await response_cache.cache_response(
            "Why am I so tired?", "Rest well."
        )

        assert written is False
        assert len(store) == 0
        assert await response_cache.get_cached_response("Why am I so tired?") is None

    async def test_miss(self, response_cache: ResponseCache) -> None:
        """Test that an unknown question misses."""
        assert await response_cache.get_cached_response("What is centering?") is None

    async def test_stale_entry_ignored(
        self,
        response_cache: ResponseCache,
        store: InMemoryCacheStore,
        clock: FakeClock,
    ) -> None:
        """Test that an entry older than its category TTL is ignored."""
        key = cache_key("full moon", QueryCategory.MOON_PHASE)
        payload = json.dumps(
            {
                "content": "old",
                "timestamp": clock.now - CACHE_TTL_SECONDS[QueryCategory.MOON_PHASE],
                "queryType": "MOON_PHASE",
            }
        )
        await store.set(key, payload, 60)

        assert await response_cache.get_cached_response("full moon") is None

    async def test_malformed_entry_ignored(
        self, response_cache: ResponseCache, store: InMemoryCacheStore
    ) -> None:
        """Test that an unreadable entry counts as a miss."""
        key = cache_key("full moon", QueryCategory.MOON_PHASE)
        await store.set(key, "garbage", 60)

        assert await response_cache.get_cached_response("full moon") is None

    async def test_store_errors_swallowed(self, clock: FakeClock) -> None:
        """Test that store failures are treated as a miss / no write."""
        store = MagicMock()
        store.is_available = True
        store.get = AsyncMock(side_effect=CacheError("down"))
        store.set = AsyncMock(side_effect=CacheError("down"))
        cache = ResponseCache(store, clock=clock)

        assert await cache.get_cached_response("full moon") is None
        assert await cache.cache_response("full moon", "x") is False

    async def test_unavailable_store(self) -> None:
        """Test that nothing happens without a backend."""
        cache = ResponseCache(NullCacheStore())

        assert await cache.cache_response("full moon", "x") is False
        assert await cache.get_cached_response("full moon") is None


class TestWarmCache:
    """Tests for warm_cache."""

    async def test_warm_cache(
        self, response_cache: ResponseCache, store: InMemoryCacheStore
    ) -> None:
        """Test that the common answers are written and readable."""
        written = await response_cache.warm_cache()

        assert written == 3
        assert len(store) == 3
        assert await response_cache.get_cached_response(
            "How do I do a protection ritual?"
        )
