"""Metrics feature."""
