"""Core building blocks: settings, exceptions, pagination, dependencies."""
