"""Core facade, settings and exceptions."""
