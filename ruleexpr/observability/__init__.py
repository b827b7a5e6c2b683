"""Observability: structured logging.

Provides standardized logging primitives using structlog.
"""
