"""Shared helpers for uploads and dependency wiring."""
