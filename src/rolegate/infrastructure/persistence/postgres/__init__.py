"""PostgreSQL persistence adapter (psycopg 3, async)."""
