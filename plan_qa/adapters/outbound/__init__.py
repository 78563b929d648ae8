"""Outbound adapters: document storage, text extraction, embeddings, completions."""
