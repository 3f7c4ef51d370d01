"""Utility helpers for cealloga."""
