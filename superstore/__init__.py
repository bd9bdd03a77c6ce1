"""Superstore Analytics — retail sales schema, cleaning, and query catalog on pandas."""

__version__ = "1.0.0"
