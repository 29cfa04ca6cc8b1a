"""Presentation connectors (console)."""
