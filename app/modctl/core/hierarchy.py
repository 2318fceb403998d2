"""Module hierarchy resolution.

Computes, for a set of module paths, the nearest enclosing module of
every module and the direct children of every module. Ancestry is
decided on path segments, never on raw string prefixes: "a" encloses
"a/v2" but not "ab".
"""

import logging
from collections.abc import Iterable

from modctl.models.module import ModuleNode, module_segments, module_sort_key

logger = logging.getLogger(__name__)


class AmbiguousHierarchyError(Exception):
    """Raised when a module resolves to more than one nearest ancestor."""


def is_ancestor(candidate: str, path: str) -> bool:
    """Check if a module path strictly encloses another module path.

    Args:
        candidate: Possible ancestor module path.
        path: Module path to test.

    Returns:
        True if candidate's segments are a strict leading prefix of
        path's segments.
    """
    candidate_parts = module_segments(candidate)
    path_parts = module_segments(path)
    if len(candidate_parts) >= len(path_parts):
        return False
    return path_parts[: len(candidate_parts)] == candidate_parts


def resolve_hierarchy(paths: Iterable[str]) -> dict[str, ModuleNode]:
    """Resolve parent and direct children for every module.

    Modules are ordered shallowest first. Each module's parent is the
    deepest of the shallower modules that enclose it; its children are
    all modules whose resolved parent it is.

    Args:
        paths: Normalized module paths. Duplicates are collapsed.

    Returns:
        Mapping from module path to ModuleNode, ordered by depth then
        path.

    Raises:
        AmbiguousHierarchyError: If two enclosing modules share the
            deepest level.
    """
    ordered = sorted(set(paths), key=module_sort_key)

    parents: dict[str, str | None] = {}
    for index, path in enumerate(ordered):
        depth = len(module_segments(path))
        nearest: str | None = None
        nearest_depth = -1
        for candidate in ordered[:index]:
            candidate_depth = len(module_segments(candidate))
            if candidate_depth >= depth or not is_ancestor(candidate, path):
                continue
            if candidate_depth == nearest_depth:
                msg = f"Module {path} has ambiguous ancestors: {nearest}, {candidate}"
                raise AmbiguousHierarchyError(msg)
            if candidate_depth > nearest_depth:
                nearest = candidate
                nearest_depth = candidate_depth
        parents[path] = nearest

    children: dict[str, list[str]] = {path: [] for path in ordered}
    for path, parent in parents.items():
        if parent is not None:
            children[parent].append(path)

    hierarchy = {
        path: ModuleNode(
            path=path,
            parent=parents[path],
            children=tuple(sorted(children[path])),
        )
        for path in ordered
    }
    logger.debug(
        "Resolved hierarchy: %d module(s), %d top-level",
        len(hierarchy),
        sum(1 for node in hierarchy.values() if node.is_root),
    )
    return hierarchy
