"""Telc Mate exercise administration backend."""

__version__ = "0.1.0"
