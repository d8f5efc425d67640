"""Core infrastructure: configuration, logging and shared exceptions."""
