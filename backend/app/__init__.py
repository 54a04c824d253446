"""Confluence signal service (FastAPI)."""
