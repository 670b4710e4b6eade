"""Middleware setup helpers."""
