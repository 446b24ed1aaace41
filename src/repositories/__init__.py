"""Persistence adapters for the customers, staff and sessions collections."""
