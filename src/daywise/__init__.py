"""Daywise backend: meal log and local-LLM meal suggestions."""

__version__ = "0.1.0"
