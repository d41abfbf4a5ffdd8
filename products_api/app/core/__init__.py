"""Core infrastructure: settings, logging, errors, security and storage."""
