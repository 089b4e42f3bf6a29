"""Domain layer (pure logic).

- Keep game rules and calculations here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI, no ledger clients.
- Prefer deterministic functions (time/random passed in as arguments if needed).
"""
