"""Logging setup and the API event log."""
