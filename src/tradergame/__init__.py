"""Game tick and production simulation engine."""

__version__ = "0.1.0"
