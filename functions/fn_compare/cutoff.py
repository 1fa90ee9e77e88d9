"""
Result Cutoff Policy
====================

Decides how many ranked results to surface without per-query tuning.

Hybrid strategy over the score-descending list:

- always keep the first ``min_results`` (even poor matches)
- after that, keep a result that clears the absolute floor ``min_score``
  or the relative floor ``top_score * min_relative_score``
- never keep more than ``max_results``

A ``min_relative_score`` of 0 disables the relative floor; otherwise every
non-negative score would pass it.
"""

from typing import Any, Dict, List, Optional, Union

from shared.config import deep_merge, get_cutoff_defaults
from shared.models import ComparisonResult, ResultCutoff

BUILTIN_CUTOFF_DEFAULTS: Dict[str, Any] = {
    "min_score": 0.15,
    "min_relative_score": 0.2,
    "min_results": 5,
    "max_results": 50,
}


def resolve_cutoff(overrides: Optional[Union[ResultCutoff, Dict[str, Any]]] = None) -> ResultCutoff:
    """
    Build a fully populated cutoff configuration.

    Precedence (lowest first): built-in defaults, engine config
    ``cutoff_defaults``, per-query overrides. Only fields that are actually
    set override; an explicit 0 counts as set.
    """
    if isinstance(overrides, dict):
        overrides = ResultCutoff(**overrides)

    configured = {k: v for k, v in get_cutoff_defaults().items() if k in BUILTIN_CUTOFF_DEFAULTS and v is not None}
    resolved = deep_merge(BUILTIN_CUTOFF_DEFAULTS, configured)
    if overrides is not None:
        resolved = deep_merge(resolved, overrides.model_dump(exclude_none=True))

    return ResultCutoff(**resolved)


def apply_cutoff(
    results: List[ComparisonResult],
    cutoff: Optional[Union[ResultCutoff, Dict[str, Any]]] = None,
) -> List[ComparisonResult]:
    """
    Trim a ranked result list.

    Args:
        results: Results sorted by composite_score, descending
        cutoff: Overrides for the default thresholds

    Returns:
        The surfaced prefix-ordered subset of results
    """
    config = resolve_cutoff(cutoff)

    if not results:
        return []

    guaranteed_count = min(config.min_results, len(results))
    top_score = results[0].composite_score

    kept: List[ComparisonResult] = []
    for index, result in enumerate(results):
        if len(kept) >= config.max_results:
            break

        if index < guaranteed_count:
            kept.append(result)
            continue

        if result.composite_score >= config.min_score:
            kept.append(result)
            continue

        if config.min_relative_score > 0 and result.composite_score >= top_score * config.min_relative_score:
            kept.append(result)

    return kept
