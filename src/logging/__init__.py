"""Logging setup: formatters, rotating file handler, operation context."""
