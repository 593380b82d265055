"""Notifications bounded context: an append-only message log per user."""
