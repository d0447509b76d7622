"""Shared errors, configuration and types."""
