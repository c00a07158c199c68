"""FastAPI application serving scripture ingestion and reading endpoints."""
