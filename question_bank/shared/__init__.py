"""Shared utilities: request context, logging setup, datetime helpers."""
