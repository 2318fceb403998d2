"""Result aggregation.

Combines the emitted filter rules with the evaluator's per-rule
booleans into the ordered list of changed modules.
"""

import json
import logging
from typing import Literal

from modctl.models.module import ChangeResult, FilterRule

logger = logging.getLogger(__name__)

# Handling of rule ids absent from the evaluator result
MissingResultPolicy = Literal["unchanged", "error"]


class EvaluatorMismatchError(Exception):
    """Raised when evaluator results do not line up with the emitted rules."""


def aggregate_changes(
    rules: list[FilterRule],
    results: ChangeResult,
    *,
    on_missing: MissingResultPolicy = "unchanged",
) -> list[str]:
    """Collect the ids of changed modules in rule order.

    Args:
        rules: Filter rules as emitted by build_filter_rules().
        results: Evaluator result per rule id.
        on_missing: "unchanged" treats a missing id as not changed,
            "error" raises instead.

    Returns:
        Module paths whose result is true, in the order of rules.

    Raises:
        EvaluatorMismatchError: If results contain unknown ids, or an id
            is missing and on_missing is "error".
    """
    rule_ids = [rule.id for rule in rules]

    unexpected = set(results) - set(rule_ids)
    if unexpected:
        msg = f"Evaluator returned results for unknown modules: {sorted(unexpected)}"
        raise EvaluatorMismatchError(msg)

    missing = [rule_id for rule_id in rule_ids if rule_id not in results]
    if missing:
        if on_missing == "error":
            msg = f"Evaluator returned no result for modules: {missing}"
            raise EvaluatorMismatchError(msg)
        logger.warning("No evaluator result for %s, treating as unchanged", ", ".join(missing))

    return [rule_id for rule_id in rule_ids if results.get(rule_id, False)]


def format_module_list(modules: list[str]) -> str:
    """Serialize a module list as a compact JSON array.

    Args:
        modules: Ordered module paths.

    Returns:
        JSON array string (e.g., '["a","b"]').
    """
    return json.dumps(modules, separators=(",", ":"))
