"""Module hierarchy domain models.

This module defines the data structures describing discovered modules,
their position in the nesting hierarchy, and the path-filter rules
generated for each of them.
"""

from collections.abc import Mapping
from dataclasses import dataclass

# Module path of a manifest sitting at the repository root
ROOT_MODULE = "."

# Evaluator result: rule id -> whether the changeset touched the module
ChangeResult = Mapping[str, bool]


def module_segments(path: str) -> tuple[str, ...]:
    """Split a normalized module path into its path segments.

    The repository root module has no segments.

    Args:
        path: Normalized module path (e.g., "a/v2").

    Returns:
        Tuple of path segments (e.g., ("a", "v2")).
    """
    if path == ROOT_MODULE:
        return ()
    return tuple(path.split("/"))


def module_sort_key(path: str) -> tuple[int, str]:
    """Sort key ordering modules shallowest first, then lexicographically."""
    return (len(module_segments(path)), path)


@dataclass(frozen=True, slots=True)
class ModuleNode:
    """A discovered module and its direct relatives in the hierarchy.

    Attributes:
        path: Module path, the identity of the node.
        parent: Path of the nearest enclosing module, or None for a
            top-level module.
        children: Paths of the direct child modules, sorted.
    """

    path: str
    parent: str | None = None
    children: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate node data after initialization."""
        if not self.path:
            msg = "Module path cannot be empty"
            raise ValueError(msg)
        if self.parent == self.path:
            msg = f"Module cannot be its own parent: {self.path}"
            raise ValueError(msg)

    @property
    def segments(self) -> tuple[str, ...]:
        """Path segments of the module."""
        return module_segments(self.path)

    @property
    def depth(self) -> int:
        """Number of path segments (0 for the repository root module)."""
        return len(self.segments)

    @property
    def is_root(self) -> bool:
        """Check if the module has no enclosing module."""
        return self.parent is None


@dataclass(frozen=True, slots=True)
class FilterRule:
    """Include/exclude path filter for a single module.

    Attributes:
        id: Module path the rule belongs to.
        include: Glob patterns covering the module subtree.
        excludes: One glob pattern per direct child module subtree.
    """

    id: str
    include: tuple[str, ...]
    excludes: tuple[str, ...] = ()

    def patterns(self) -> list[str]:
        """Render the rule as a flat pattern list.

        Exclusion patterns are prefixed with "!".

        Returns:
            Include patterns followed by negated exclude patterns.
        """
        return [*self.include, *(f"!{pattern}" for pattern in self.excludes)]

    def to_dict(self) -> dict[str, object]:
        """Convert to a dictionary for JSON serialization."""
        return {
            "id": self.id,
            "include": list(self.include),
            "excludes": list(self.excludes),
        }
