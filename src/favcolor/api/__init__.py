# src/favcolor/api/__init__.py
"""HTTP API for the favcolor service."""
