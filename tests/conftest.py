"""
Shared fixtures for gateway tests.
"""

import asyncio
import re

import pytest

from gemstone_gateway.entities import CatalogItem, GenerationOptions, PriceRange
from gemstone_gateway.repositories import (
    InMemoryCatalogRepository,
    InMemoryQuotaStore,
    InMemoryResponseCache,
    InMemorySessionStore,
)
from gemstone_gateway.services import ChatService

TOPIC = "gemstone_recommendation"


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def echo_exact_reply(prompt: str) -> str:
    """Answer with the sentence the prompt asks for, like a well-behaved model."""
    match = re.search(r'RESPOND EXACTLY: "(.*)"', prompt)
    if match:
        return match.group(1)
    return "What's your name, the occasion and date, and your budget range?"


class FakeGenerator:
    """TextGenerator double that records prompts.

    ``reply`` may be a string or a callable taking the prompt. ``error`` is
    raised instead of replying when set. ``block`` makes the call wait until
    cancelled.
    """

    def __init__(self, reply=echo_exact_reply, error: Exception | None = None, configured: bool = True):
        self.reply = reply
        self.error = error
        self.configured = configured
        self.block = False
        self.started = asyncio.Event()
        self.prompts: list[str] = []
        self.options: list[GenerationOptions] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    def is_configured(self) -> bool:
        return self.configured

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        self.prompts.append(prompt)
        self.options.append(options)
        if self.block:
            self.started.set()
            await asyncio.Event().wait()
        if self.error is not None:
            raise self.error
        if callable(self.reply):
            return self.reply(prompt)
        return self.reply

    @property
    def calls(self) -> int:
        return len(self.prompts)


def make_item(
    item_id: str,
    name: str,
    category: str,
    color: str = "",
    price_min: float | None = None,
    price_max: float | None = None,
    **kwargs,
) -> CatalogItem:
    price_range = None
    if price_min is not None or price_max is not None:
        price_range = PriceRange(min=price_min, max=price_max)
    return CatalogItem(
        id=item_id,
        name=name,
        category=category,
        color=color,
        slug=item_id,
        price_range=price_range,
        **kwargs,
    )


@pytest.fixture
def catalog_items() -> list[CatalogItem]:
    return [
        make_item("royal-ruby", "Royal Ruby", "Ruby", "Deep Crimson Red", 45000, 90000,
                  alt_name="Yaqoot Sultani", is_trending=True, created_at=1.0),
        make_item("pigeon-ruby", "Pigeon Blood Ruby", "Ruby", "Pigeon Blood Red", 150000, 300000,
                  created_at=5.0),
        make_item("emerald-tranquility", "Emerald of Tranquility", "Emerald", "Vivid Forest Green",
                  15000, 40000, is_trending=True, created_at=2.0),
        make_item("panna-emerald", "Panna Emerald", "Emerald", "Green", 8000, 18000, created_at=3.0),
        make_item("colombian-emerald", "Colombian Emerald", "Emerald", "Blue Green", 80000, 160000,
                  created_at=4.0),
        make_item("old-emerald", "Old Stock Emerald", "Emerald", "Green", 5000, 9000,
                  is_active=False, created_at=6.0),
        make_item("celestial-sapphire", "Celestial Sapphire", "Sapphire", "Royal Blue", 60000, 120000,
                  alt_name="Neelam Aasmani", created_at=7.0),
        make_item("basra-pearl", "Basra Pearl", "Pearl", "Lustrous White", created_at=8.0),
    ]


@pytest.fixture
def catalog(catalog_items) -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository(catalog_items)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def quota_store(clock) -> InMemoryQuotaStore:
    return InMemoryQuotaStore(max_requests=15, window_seconds=3600, clock=clock)


@pytest.fixture
def session_store(clock) -> InMemorySessionStore:
    return InMemorySessionStore(min_interval=10, idle_ttl=3600, clock=clock)


@pytest.fixture
def response_cache(clock) -> InMemoryResponseCache:
    return InMemoryResponseCache(ttl=600, max_entries=100, clock=clock)


@pytest.fixture
def make_service(catalog, generator, quota_store, session_store, response_cache):
    """Factory for a ChatService wired with fakes; keyword overrides replace any collaborator."""

    def _make(**overrides) -> ChatService:
        kwargs = {
            "catalog": catalog,
            "generator": generator,
            "quota_store": quota_store,
            "session_store": session_store,
            "response_cache": response_cache,
            "generation_options": GenerationOptions(),
            "generation_timeout": 2,
            "catalog_timeout": 2,
            "max_candidates": 3,
            "max_message_length": 100,
            "topic": TOPIC,
            "currency_symbol": "₹",
        }
        kwargs.update(overrides)
        return ChatService(**kwargs)

    return _make


@pytest.fixture
def chat_service(make_service) -> ChatService:
    """ChatService with production limits, a fake clock and a fake generator."""
    return make_service()
