"""Core pipeline for modctl: discovery, hierarchy, filters and aggregation."""
