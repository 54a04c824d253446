"""Core correlation logic and models.

This package contains pure business logic with no I/O dependencies
(no HTTP, Telegram or environment access). The FastAPI service in app/
wraps it.
"""
