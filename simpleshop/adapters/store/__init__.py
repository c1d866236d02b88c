"""Key-value store adapters for cart and session persistence.

Implementations support multiple backends:
- SQLite (single-file database via aiosqlite)
- JSON file (one object file, shaped like browser localStorage)
"""
