"""Pydantic models for forms, results and API responses."""
