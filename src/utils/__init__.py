"""Shared helpers: logging, errors, validation and calendar math."""
