"""Library management REST API."""
