"""
Token Store Module
Holds the resolved design-token tables used to generate utility classes.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

# Flat categories as they appear in tokens.json, mapped to TokenTable fields
FLAT_CATEGORIES = {
    'colors': 'colors',
    'spacing': 'spacing',
    'shadows': 'shadows',
    'borderRadius': 'border_radius',
    'opacity': 'opacity',
    'zIndex': 'z_index',
}

TYPOGRAPHY_CATEGORIES = ('fontSize', 'fontWeight', 'lineHeight', 'letterSpacing')


def _mapping_or_empty(value: Any) -> Dict[str, Any]:
    """Copy a category mapping, treating anything that is not a mapping as empty."""
    if isinstance(value, Mapping):
        return copy.deepcopy(dict(value))
    return {}


def _typography_from(value: Any) -> Dict[str, Any]:
    typography = _mapping_or_empty(value)
    for sub in TYPOGRAPHY_CATEGORIES:
        if sub not in typography or typography[sub] is None:
            typography[sub] = {}
    return typography


@dataclass(frozen=True)
class TokenTable:
    colors: Dict[str, Any] = field(default_factory=dict)
    spacing: Dict[str, Any] = field(default_factory=dict)
    typography: Dict[str, Any] = field(default_factory=lambda: {sub: {} for sub in TYPOGRAPHY_CATEGORIES})
    shadows: Dict[str, Any] = field(default_factory=dict)
    border_radius: Dict[str, Any] = field(default_factory=dict)
    opacity: Dict[str, Any] = field(default_factory=dict)
    z_index: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'TokenTable':
        """Build a table from the tokens.json shape.

        Missing or malformed categories become empty mappings so every
        category is always present. Unknown top-level keys are dropped.
        """
        if not isinstance(data, Mapping):
            data = {}
        kwargs = {attr: _mapping_or_empty(data.get(key)) for key, attr in FLAT_CATEGORIES.items()}
        kwargs['typography'] = _typography_from(data.get('typography'))
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the table back to the tokens.json shape."""
        result = {key: copy.deepcopy(getattr(self, attr)) for key, attr in FLAT_CATEGORIES.items()}
        result['typography'] = copy.deepcopy(self.typography)
        return result

    def category(self, path: str) -> Any:
        """Return a category by its tokens.json path, e.g. 'colors' or 'typography.fontSize'.

        A typography sub-category may have been replaced by a scalar override,
        so callers must not assume a mapping comes back.
        """
        if path.startswith('typography.'):
            return self.typography.get(path.split('.', 1)[1])
        attr = FLAT_CATEGORIES.get(path)
        if attr is None:
            return None
        return getattr(self, attr)

    def summary(self) -> Dict[str, int]:
        """Count the tokens in each category."""
        counts = {key: len(getattr(self, attr)) for key, attr in FLAT_CATEGORIES.items()}
        for sub, values in self.typography.items():
            counts[sub] = len(values) if isinstance(values, Mapping) else 0
        return counts


DEFAULT_COLORS = {
    'blue': '#3b82f6',
    'red': '#ef4444',
    'green': '#22c55e',
    'yellow': '#eab308',
    'purple': '#a855f7',
    'pink': '#ec4899',
    'indigo': '#6366f1',
    'cyan': '#06b6d4',
    'teal': '#14b8a6',
    'orange': '#f97316',
    'gray': '#6b7280',
    'white': '#ffffff',
    'black': '#000000',
    'transparent': 'transparent',
}

DEFAULT_SPACING = {
    '0': '0',
    '1': '0.25rem',
    '2': '0.5rem',
    '3': '0.75rem',
    '4': '1rem',
    '5': '1.25rem',
    '6': '1.5rem',
    '8': '2rem',
    '10': '2.5rem',
    '12': '3rem',
    '16': '4rem',
    '20': '5rem',
    '24': '6rem',
    '32': '8rem',
    '40': '10rem',
    '48': '12rem',
    '56': '14rem',
    '64': '16rem',
}


def default_tokens() -> TokenTable:
    """Minimal built-in table used when no token file can be read."""
    return TokenTable.from_dict({'colors': DEFAULT_COLORS, 'spacing': DEFAULT_SPACING})
