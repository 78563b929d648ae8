"""Adapters connecting the retrieval core to frameworks and services."""
