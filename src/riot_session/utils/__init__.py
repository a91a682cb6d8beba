"""Shared utilities: configuration, HTTP transport and logging helpers."""
