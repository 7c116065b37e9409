#!/usr/bin/env python3
"""
Load the gemstone catalog seed into Redis.

Clears every key under CATALOG_KEY_PREFIX, then writes the items from
CATALOG_SEED_PATH (or the path given as the first argument).
"""

import sys

import redis

from gemstone_gateway.config import settings
from gemstone_gateway.repositories import RedisCatalogRepository, load_seed_items


def main() -> int:
    """Seed the Redis catalog."""
    seed_path = sys.argv[1] if len(sys.argv) > 1 else settings.catalog_seed_path

    print(f"🔗 Connecting to Redis at {settings.redis_url}...")
    repository = RedisCatalogRepository.create()

    try:
        if not repository.health_check():
            print("❌ Redis is not reachable")
            return 1

        removed = repository.clear_all()
        print(f"🗑️  Removed {removed} existing catalog items")

        items = load_seed_items(seed_path)
        written = repository.add_items(items)
        print(f"🌱 Seeded {written} gemstones:")
        for index, item in enumerate(items, start=1):
            print(f"   {index}. {item.name} ({item.alt_name or '-'})")
            print(f"      Category: {item.category} | Trending: {'Yes' if item.is_trending else 'No'}")

    except (OSError, ValueError, redis.RedisError) as e:
        print(f"❌ Error during seeding: {e}")
        return 1

    print("\n🎉 Catalog seeding completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
