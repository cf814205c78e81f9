"""Web (FastAPI) adapter."""
