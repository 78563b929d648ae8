"""Retrieval core: domain models, ports and services."""
