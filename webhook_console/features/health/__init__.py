"""Health feature."""
