"""Shorts services."""
