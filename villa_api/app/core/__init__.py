"""Core infrastructure: configuration, logging, errors and the villa store."""
