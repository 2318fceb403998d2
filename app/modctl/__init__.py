"""modctl - detect changed modules in repositories with nested modules."""

__version__ = "0.1.0"
