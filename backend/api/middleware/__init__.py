"""API middleware and access dependencies."""
