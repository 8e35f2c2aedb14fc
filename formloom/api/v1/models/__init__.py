"""API v1 OpenAPI models."""
