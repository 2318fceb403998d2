"""Utility modules for modctl."""
