"""Lambda handlers for the HTTP API."""
