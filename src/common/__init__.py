"""Shared helpers: logging setup and the HTTP client."""
