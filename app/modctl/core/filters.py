"""Filter specification builder.

Turns a resolved module hierarchy into one include/exclude path filter
per module. A module includes its whole subtree and excludes the
subtree of each *direct* child only. Deeper descendants are covered
transitively: a grandchild lies inside its parent's subtree, which the
module already excludes.

This relies on the evaluator treating a path as matched only if it
matches an include pattern and none of the exclude patterns of the same
rule. Any replacement evaluator must compose rules the same way.
"""

from modctl.models.module import ROOT_MODULE, FilterRule, ModuleNode

# Characters with a meaning in gitignore-style patterns
_GLOB_SPECIAL = frozenset("*?[]\\")

# Characters with a meaning only at the start of a pattern
_LEADING_SPECIAL = frozenset("!# ")


def escape_path(path: str) -> str:
    """Escape a literal path for use inside a glob pattern.

    Wildcards and brackets are backslash-escaped everywhere. A leading
    "!", "#" or space is escaped as well, since gitignore syntax gives
    it a special meaning at the start of a pattern.

    Args:
        path: Normalized module path.

    Returns:
        Path that matches only itself when used as a pattern prefix.
    """
    escaped = "".join(f"\\{char}" if char in _GLOB_SPECIAL else char for char in path)
    if escaped[:1] in _LEADING_SPECIAL:
        escaped = f"\\{escaped}"
    return escaped


def subtree_pattern(path: str) -> str:
    """Glob pattern matching every file below a module path.

    Args:
        path: Normalized module path.

    Returns:
        "<path>/**" with the path escaped, or "**" for the repository
        root module.
    """
    if path == ROOT_MODULE:
        return "**"
    return f"{escape_path(path)}/**"


def build_filter_rules(hierarchy: dict[str, ModuleNode]) -> list[FilterRule]:
    """Build one filter rule per module.

    Rules are ordered by module path and child excludes are sorted, so
    the same module set always produces the same specification.

    Args:
        hierarchy: Resolved hierarchy from resolve_hierarchy().

    Returns:
        FilterRule list sorted by id.
    """
    rules: list[FilterRule] = []
    for path in sorted(hierarchy):
        node = hierarchy[path]
        rules.append(
            FilterRule(
                id=path,
                include=(subtree_pattern(path),),
                excludes=tuple(subtree_pattern(child) for child in sorted(node.children)),
            )
        )
    return rules


def render_filters(rules: list[FilterRule]) -> dict[str, list[str]]:
    """Render filter rules in evaluator wire format.

    Args:
        rules: Filter rules to render.

    Returns:
        Mapping from rule id to pattern list, "!" marking exclusions.
    """
    return {rule.id: rule.patterns() for rule in rules}
