"""Conversation context service for the Beatrice chat companion."""

__version__ = "0.1.0"
