"""Shared utilities: settings, errors, logging and small helpers."""
