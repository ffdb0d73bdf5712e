"""Core services: use cases and infrastructure services."""
