"""Configuration, security primitives and domain errors."""
