"""
Pydantic schema definitions for API payloads.

Schemas are separated from the in‑memory store so that the API
representation stays decoupled from how records are held.
"""
