"""FastAPI application for browsing extracted mod recipes."""
