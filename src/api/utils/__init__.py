"""API utilities: the orjson-backed default response class."""
