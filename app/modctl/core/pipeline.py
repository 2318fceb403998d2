"""End-to-end change detection pipeline.

Discovery -> hierarchy -> filter rules -> evaluator -> aggregation.
Every stage completes before the next starts; nothing is cached
between invocations.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from modctl.core.aggregate import aggregate_changes
from modctl.core.config import ModctlConfig
from modctl.core.discovery import apply_root_policy, discover_modules
from modctl.core.filters import build_filter_rules, render_filters
from modctl.core.hierarchy import resolve_hierarchy
from modctl.models.module import ChangeResult, FilterRule, ModuleNode

logger = logging.getLogger(__name__)

# Callable receiving rendered filters and returning a boolean per rule id
Evaluator = Callable[[Mapping[str, list[str]]], ChangeResult]


@dataclass(frozen=True, slots=True)
class FilterPlan:
    """Modules of a repository and the filter rules generated for them.

    Attributes:
        hierarchy: Resolved module hierarchy.
        rules: Filter rules, one per module, sorted by id.
    """

    hierarchy: dict[str, ModuleNode]
    rules: list[FilterRule]

    @property
    def filters(self) -> dict[str, list[str]]:
        """Rules in evaluator wire format."""
        return render_filters(self.rules)


def plan_filters(root: Path, config: ModctlConfig | None = None) -> FilterPlan:
    """Discover modules below root and build their filter rules.

    Args:
        root: Repository root directory.
        config: Repository configuration. Defaults are used if None.

    Returns:
        FilterPlan with the hierarchy and rules.

    Raises:
        DiscoveryError: If root cannot be traversed.
        AmbiguousHierarchyError: If the hierarchy cannot be resolved.
    """
    config = config or ModctlConfig()

    modules = discover_modules(
        root,
        config.manifest,
        skip_dirs=config.skip_dirs,
        follow_symlinks=config.follow_symlinks,
    )
    modules = apply_root_policy(modules, config.root_module)

    hierarchy = resolve_hierarchy(modules)
    rules = build_filter_rules(hierarchy)
    logger.info("Built %d filter rule(s) for %s", len(rules), root)
    return FilterPlan(hierarchy=hierarchy, rules=rules)


def detect_changed_modules(
    root: Path,
    evaluator: Evaluator,
    config: ModctlConfig | None = None,
) -> list[str]:
    """Run the full pipeline and return the changed modules.

    Args:
        root: Repository root directory.
        evaluator: Callable matching the rendered filters against a
            changeset.
        config: Repository configuration. Defaults are used if None.

    Returns:
        Changed module paths, sorted by path.

    Raises:
        DiscoveryError: If root cannot be traversed.
        AmbiguousHierarchyError: If the hierarchy cannot be resolved.
        EvaluatorMismatchError: If evaluator results do not match the rules.
    """
    config = config or ModctlConfig()
    plan = plan_filters(root, config)
    results = evaluator(plan.filters)
    changed = aggregate_changes(plan.rules, results, on_missing=config.on_missing)
    logger.info("%d of %d module(s) changed", len(changed), len(plan.rules))
    return changed
