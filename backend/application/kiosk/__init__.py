"""Kiosk application layer - session runner, commands and queries."""
