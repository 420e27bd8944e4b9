"""Pydantic models for request bodies, responses and error payloads."""
