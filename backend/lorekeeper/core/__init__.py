"""Core modules shared across the API and the domains."""
