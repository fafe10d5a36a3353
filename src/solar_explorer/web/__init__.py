"""Web API package (F3)."""
