"""Domain models for modctl."""

from modctl.models.module import (
    ROOT_MODULE,
    ChangeResult,
    FilterRule,
    ModuleNode,
    module_segments,
    module_sort_key,
)

__all__ = [
    "ROOT_MODULE",
    "ChangeResult",
    "FilterRule",
    "ModuleNode",
    "module_segments",
    "module_sort_key",
]
