"""Changeset evaluator.

Matches a list of changed files against rendered filter rules. A rule
matches when at least one changed file matches one of its include
patterns and none of its "!" exclude patterns. Patterns use gitignore
wildcard syntax, so "**" matches across directories.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from pathspec import PathSpec

from modctl.core.discovery import normalize_module_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompiledRule:
    """Include and exclude pattern sets of one filter rule."""

    include: PathSpec
    exclude: PathSpec | None

    def matches(self, path: str) -> bool:
        """Check if a single file path is selected by the rule."""
        if not self.include.match_file(path):
            return False
        return self.exclude is None or not self.exclude.match_file(path)


def compile_rule(patterns: Iterable[str]) -> CompiledRule:
    """Compile a rendered pattern list into include/exclude specs.

    Args:
        patterns: Patterns where a leading "!" marks exclusion.

    Returns:
        CompiledRule for the pattern list.
    """
    include_lines: list[str] = []
    exclude_lines: list[str] = []
    for pattern in patterns:
        if pattern.startswith("!"):
            exclude_lines.append(pattern[1:])
        else:
            include_lines.append(pattern)
    return CompiledRule(
        include=PathSpec.from_lines("gitwildmatch", include_lines),
        exclude=PathSpec.from_lines("gitwildmatch", exclude_lines) if exclude_lines else None,
    )


class ChangesetEvaluator:
    """Evaluates filter rules against a fixed set of changed files.

    Instances are callable with the output of render_filters() and
    return one boolean per rule id.

    Args:
        changed_files: Repository-relative paths of changed files.
    """

    def __init__(self, changed_files: Iterable[str]) -> None:
        files = {normalize_module_path(f) for f in changed_files if f.strip()}
        self._files = sorted(files)
        self._matches: dict[str, list[str]] = {}

    @property
    def changed_files(self) -> list[str]:
        """Normalized changed file paths, sorted."""
        return list(self._files)

    def __call__(self, filters: Mapping[str, list[str]]) -> dict[str, bool]:
        """Evaluate every rule against the changeset.

        Args:
            filters: Mapping from rule id to rendered pattern list.

        Returns:
            Mapping from rule id to whether any changed file matched.
        """
        self._matches = {}
        results: dict[str, bool] = {}
        for rule_id, patterns in filters.items():
            rule = compile_rule(patterns)
            matched = [f for f in self._files if rule.matches(f)]
            self._matches[rule_id] = matched
            results[rule_id] = bool(matched)
            if matched:
                logger.debug("Rule %s matched %d file(s)", rule_id, len(matched))
        return results

    def matching_files(self, rule_id: str) -> list[str]:
        """Files that matched a rule during the last evaluation.

        Args:
            rule_id: Rule id to look up.

        Returns:
            Matched file paths, empty if the rule did not match or was
            not evaluated.
        """
        return list(self._matches.get(rule_id, []))
