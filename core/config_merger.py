"""
Config Merger Module
Merges user overrides from the config file into a base token table.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .token_store import FLAT_CATEGORIES, TokenTable

logger = logging.getLogger(__name__)


@dataclass
class MergeReport:
    tokens: TokenTable
    merged_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def total_merged(self) -> int:
        return sum(self.merged_counts.values())


def _merge_typography(base: Dict[str, Any], override: Mapping[str, Any], counts: Dict[str, int]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for sub, value in override.items():
        if isinstance(value, Mapping):
            current = merged.get(sub)
            if not isinstance(current, Mapping):
                current = {}
            merged[sub] = {**current, **copy.deepcopy(dict(value))}
            counts[f'typography.{sub}'] = len(value)
        elif value is not None:
            # A scalar replaces the whole sub-category
            merged[sub] = value
            counts[f'typography.{sub}'] = 1
    return merged


def merge_with_report(base: TokenTable, override: Optional[Mapping[str, Any]]) -> MergeReport:
    """Merge override values into a copy of base and report how many keys each category took.

    Flat categories are unioned with the override winning on collisions.
    Typography is merged one level deeper. Categories whose override is
    missing, None or not a mapping are left untouched, and non-token
    settings (output, scan, utilities) are ignored.
    """
    counts: Dict[str, int] = {}
    if not isinstance(override, Mapping):
        override = {}

    kwargs = {}
    for key, attr in FLAT_CATEGORIES.items():
        merged = copy.deepcopy(getattr(base, attr))
        value = override.get(key)
        if isinstance(value, Mapping):
            merged.update(copy.deepcopy(dict(value)))
            counts[key] = len(value)
        kwargs[attr] = merged

    typography = override.get('typography')
    if isinstance(typography, Mapping):
        kwargs['typography'] = _merge_typography(base.typography, typography, counts)
    else:
        kwargs['typography'] = copy.deepcopy(base.typography)

    return MergeReport(tokens=TokenTable(**kwargs), merged_counts=counts)


def log_merge_report(report: MergeReport) -> None:
    for category, count in report.merged_counts.items():
        if count:
            logger.info(f"Merged {count} custom {category} value(s)")


def merge(base: TokenTable, override: Optional[Mapping[str, Any]]) -> TokenTable:
    """Return a new token table with override values applied on top of base."""
    report = merge_with_report(base, override)
    log_merge_report(report)
    return report.tokens
