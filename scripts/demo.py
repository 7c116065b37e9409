#!/usr/bin/env python3
"""
Demo script for the gemstone gateway.

This script walks through parameter extraction, catalog matching and prompt
construction offline, then runs a few chat requests against Gemini when
GEMINI_API_KEY is set.
"""

import asyncio
import time

from gemstone_gateway.config import settings
from gemstone_gateway.errors import GatewayError
from gemstone_gateway.repositories import (
    GeminiTextGenerator,
    InMemoryCatalogRepository,
    InMemoryQuotaStore,
    InMemorySessionStore,
)
from gemstone_gateway.services import ChatService, build_prompt, extract_parameters
from gemstone_gateway.services.catalog_matcher import CatalogMatcher


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


QUERIES = [
    "What's a good ruby under 50000 for my wedding?",
    "budget 20000 emerald",
    "I want a blue sapphire ring",
    "Recommend something for an engagement necklace",
    "hello",
]


def demo_extraction() -> None:
    """Demonstrate rule-based parameter extraction."""
    print_section("Parameter Extraction")

    for query in QUERIES:
        params = extract_parameters(query)
        print(f"\n  Query: {query}")
        print(f"  Parameters: {params.present() or '(none)'}")


async def demo_matching(catalog: InMemoryCatalogRepository) -> None:
    """Demonstrate catalog matching and prompt construction."""
    print_section("Catalog Matching and Prompts")

    matcher = CatalogMatcher(catalog=catalog)
    print(f"\n📦 Catalog items: {catalog.count_all()}")

    for query in QUERIES:
        params = extract_parameters(query)
        start = time.time()
        candidates = await matcher.find_candidates(params)
        duration = (time.time() - start) * 1000

        print(f"\n  Query: {query}")
        if candidates:
            for item in candidates:
                print(f"  ✓ {item.display_name} ({item.category})")
        else:
            print("  ✗ No candidates, clarifying prompt")
        print(f"  Lookup time: {duration:.2f}ms")

        prompt = build_prompt(query, candidates, params)
        print(f"  Prompt: {prompt.splitlines()[0][:90]}...")


async def demo_chat(catalog: InMemoryCatalogRepository) -> None:
    """Demonstrate the full chat pipeline against Gemini."""
    print_section("Chat Pipeline")

    generator = GeminiTextGenerator.create()
    if not generator.is_configured():
        print("\n⚠️  GEMINI_API_KEY is not set, skipping live chat")
        return

    # No interval so the demo does not have to sleep between requests
    chat = ChatService.create(
        catalog=catalog,
        generator=generator,
        quota_store=InMemoryQuotaStore.create(),
        session_store=InMemorySessionStore.create(min_interval=0),
    )

    try:
        for query in QUERIES[:2] + QUERIES[:1]:
            start = time.time()
            try:
                result = await chat.chat(query, settings.chat_topic, "demo")
            except GatewayError as e:
                print(f"\n  Query: {query}")
                print(f"  ✗ {e.kind}: {e.message}")
                continue
            duration = (time.time() - start) * 1000

            print(f"\n  Query: {query}")
            print(f"  Reply: {result.response_text}")
            print(f"  Gems: {[item.display_name for item in result.candidates]}")
            print(f"  {'✓ CACHE HIT' if result.served_from_cache else '✗ Cache miss'}")
            print(f"  Remaining: {result.rate_limit_remaining}, Time: {duration:.0f}ms")
    finally:
        await generator.close()


def main() -> None:
    """Run all demos."""
    print("\n💎 Gemstone Gateway Demo")
    print("=" * 70)

    try:
        catalog = InMemoryCatalogRepository.create()
        demo_extraction()
        asyncio.run(demo_matching(catalog))
        asyncio.run(demo_chat(catalog))

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure the catalog seed exists:")
        print(f"  {settings.catalog_seed_path}")


if __name__ == "__main__":
    main()
