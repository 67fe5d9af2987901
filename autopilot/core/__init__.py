"""Core infrastructure — configuration, logging and the HTTP transport."""
