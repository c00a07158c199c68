"""Vangmaya scripture library: document model, ingestion and HTTP API."""
