"""Data stores for persistence and caching.

Stores handle:
- PostgreSQL: document collections (Items, Cart, Community) as JSON rows
- Redis: cart cache, per-key locks, TTL policies

No merge/pagination logic in stores - that belongs in services.
"""
