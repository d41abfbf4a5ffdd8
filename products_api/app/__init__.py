"""
Application package initializer.

The API is organised into a handful of small pieces: ``core`` holds
configuration, logging, the in‑memory record store, error types and
the API key guard; ``services`` holds the query engine, payload
validation and the product service; ``api`` exposes the routers that
are mounted by ``main.create_app``.
"""

from .main import app, create_app  # noqa: F401
