"""
Utility Resolver Module
Maps a single utility class name to its CSS declarations.

Rules are kept in one ordered table and the first rule that produces
declarations wins. Exact literal names come first, then prefix lookups
into the token table, then prefixes whose suffix is substituted as-is.
Families overlap on prefixes (`text-` is used for alignment, color and
font size; `border` for width and color), so the table order is the
precedence and must not be re-sorted.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .token_store import TokenTable

Declaration = Tuple[str, str]


def format_declarations(declarations: Sequence[Declaration]) -> str:
    return ' '.join(f'{prop}: {value};' for prop, value in declarations)


def _token_value(value: Any) -> Optional[str]:
    """Render a token as CSS text, or None when it cannot be used as a value."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value if value.strip() else None
    # Nested palettes and lists are not single values
    return None


@dataclass(frozen=True)
class LiteralRule:
    """Exact class names with fixed declarations."""
    family: str
    table: Mapping[str, Tuple[Declaration, ...]]

    def apply(self, class_name: str, tokens: TokenTable) -> Optional[List[Declaration]]:
        declarations = self.table.get(class_name)
        return list(declarations) if declarations else None


@dataclass(frozen=True)
class TokenRule:
    """`<prefix><key>` looked up in a token category, with optional literal fallbacks."""
    family: str
    prefix: str
    category: str
    properties: Tuple[str, ...]
    fallbacks: Mapping[str, str] = field(default_factory=dict)

    def apply(self, class_name: str, tokens: TokenTable) -> Optional[List[Declaration]]:
        if not class_name.startswith(self.prefix):
            return None
        key = class_name[len(self.prefix):]
        if not key:
            return None
        values = tokens.category(self.category)
        value = _token_value(values.get(key)) if isinstance(values, Mapping) else None
        if value is None:
            value = self.fallbacks.get(key)
        if value is None:
            return None
        return [(prop, value) for prop in self.properties]


@dataclass(frozen=True)
class ComputedRule:
    """`<prefix><value>` where the suffix is substituted into fixed templates."""
    family: str
    prefix: str
    template: Tuple[Declaration, ...]

    def apply(self, class_name: str, tokens: TokenTable) -> Optional[List[Declaration]]:
        if not class_name.startswith(self.prefix):
            return None
        value = class_name[len(self.prefix):]
        if not value:
            return None
        return [(prop, text.format(value=value)) for prop, text in self.template]


def _literals(prop: str, values: Dict[str, str]) -> Dict[str, Tuple[Declaration, ...]]:
    return {name: ((prop, value),) for name, value in values.items()}


LITERAL_RULES = [
    LiteralRule('display', _literals('display', {
        'block': 'block',
        'inline-block': 'inline-block',
        'inline': 'inline',
        'flex': 'flex',
        'inline-flex': 'inline-flex',
        'grid': 'grid',
        'inline-grid': 'inline-grid',
        'hidden': 'none',
    })),
    LiteralRule('visibility', _literals('visibility', {
        'visible': 'visible',
        'invisible': 'hidden',
    })),
    LiteralRule('flexbox', {
        **_literals('flex-direction', {'flex-row': 'row', 'flex-col': 'column'}),
        **_literals('flex-wrap', {'flex-wrap': 'wrap', 'flex-nowrap': 'nowrap'}),
        **_literals('flex', {'flex-1': '1 1 0%', 'flex-auto': '1 1 auto', 'flex-none': 'none'}),
        **_literals('align-items', {
            'items-start': 'flex-start',
            'items-center': 'center',
            'items-end': 'flex-end',
            'items-baseline': 'baseline',
            'items-stretch': 'stretch',
        }),
        **_literals('justify-content', {
            'justify-start': 'flex-start',
            'justify-center': 'center',
            'justify-end': 'flex-end',
            'justify-between': 'space-between',
            'justify-around': 'space-around',
            'justify-evenly': 'space-evenly',
        }),
    }),
    LiteralRule('textAlign', _literals('text-align', {
        'text-left': 'left',
        'text-center': 'center',
        'text-right': 'right',
        'text-justify': 'justify',
    })),
    LiteralRule('position', _literals('position', {
        'static': 'static',
        'relative': 'relative',
        'absolute': 'absolute',
        'fixed': 'fixed',
        'sticky': 'sticky',
    })),
    LiteralRule('overflow', {
        **_literals('overflow', {
            'overflow-auto': 'auto',
            'overflow-hidden': 'hidden',
            'overflow-visible': 'visible',
            'overflow-scroll': 'scroll',
        }),
        **_literals('overflow-x', {
            'overflow-x-auto': 'auto',
            'overflow-x-hidden': 'hidden',
            'overflow-x-scroll': 'scroll',
        }),
        **_literals('overflow-y', {
            'overflow-y-auto': 'auto',
            'overflow-y-hidden': 'hidden',
            'overflow-y-scroll': 'scroll',
        }),
        'truncate': (('overflow', 'hidden'), ('text-overflow', 'ellipsis'), ('white-space', 'nowrap')),
    }),
    LiteralRule('cursor', _literals('cursor', {
        'cursor-pointer': 'pointer',
        'cursor-default': 'default',
        'cursor-not-allowed': 'not-allowed',
        'cursor-move': 'move',
        'cursor-wait': 'wait',
        'cursor-text': 'text',
    })),
    LiteralRule('whitespace', _literals('white-space', {
        'whitespace-normal': 'normal',
        'whitespace-nowrap': 'nowrap',
        'whitespace-pre': 'pre',
        'whitespace-pre-line': 'pre-line',
        'whitespace-pre-wrap': 'pre-wrap',
    })),
    LiteralRule('pointerEvents', _literals('pointer-events', {
        'pointer-events-none': 'none',
        'pointer-events-auto': 'auto',
    })),
    LiteralRule('userSelect', _literals('user-select', {
        'select-none': 'none',
        'select-text': 'text',
        'select-all': 'all',
        'select-auto': 'auto',
    })),
    LiteralRule('transform', _literals('transform', {
        'transform': (
            'translateX(var(--tw-translate-x, 0)) translateY(var(--tw-translate-y, 0)) '
            'rotate(var(--tw-rotate, 0)) skewX(var(--tw-skew-x, 0)) skewY(var(--tw-skew-y, 0)) '
            'scaleX(var(--tw-scale-x, 1)) scaleY(var(--tw-scale-y, 1))'
        ),
    })),
    LiteralRule('border', _literals('border-width', {'border': '1px'})),
    LiteralRule('borderRadius', _literals('border-radius', {
        'rounded': '0.25rem',
        'rounded-full': '9999px',
        'rounded-none': '0',
    })),
    LiteralRule('shadow', _literals('box-shadow', {
        'shadow': '0 1px 3px 0 rgba(0, 0, 0, 0.1), 0 1px 2px 0 rgba(0, 0, 0, 0.06)',
        'shadow-none': 'none',
    })),
]

WIDTH_FALLBACKS = {
    'full': '100%',
    'auto': 'auto',
    'screen': '100vw',
    'min': 'min-content',
    'max': 'max-content',
    'fit': 'fit-content',
}
HEIGHT_FALLBACKS = {**WIDTH_FALLBACKS, 'screen': '100vh'}
TOP_FALLBACKS = {'auto': 'auto', '1/2': '50%', 'full': '100%'}
INSET_FALLBACKS = {**TOP_FALLBACKS, '0': '0'}

TOKEN_RULES = [
    TokenRule('backgroundColors', 'bg-', 'colors', ('background-color',)),
    TokenRule('textColors', 'text-', 'colors', ('color',)),
    TokenRule('padding', 'p-', 'spacing', ('padding',)),
    TokenRule('padding', 'pt-', 'spacing', ('padding-top',)),
    TokenRule('padding', 'pb-', 'spacing', ('padding-bottom',)),
    TokenRule('padding', 'pl-', 'spacing', ('padding-left',)),
    TokenRule('padding', 'pr-', 'spacing', ('padding-right',)),
    TokenRule('margin', 'm-', 'spacing', ('margin',)),
    TokenRule('margin', 'mt-', 'spacing', ('margin-top',)),
    TokenRule('margin', 'mb-', 'spacing', ('margin-bottom',)),
    TokenRule('margin', 'ml-', 'spacing', ('margin-left',)),
    TokenRule('margin', 'mr-', 'spacing', ('margin-right',)),
    TokenRule('margin', 'mx-', 'spacing', ('margin-left', 'margin-right')),
    TokenRule('margin', 'my-', 'spacing', ('margin-top', 'margin-bottom')),
    TokenRule('padding', 'px-', 'spacing', ('padding-left', 'padding-right')),
    TokenRule('padding', 'py-', 'spacing', ('padding-top', 'padding-bottom')),
    TokenRule('width', 'w-', 'spacing', ('width',), WIDTH_FALLBACKS),
    TokenRule('height', 'h-', 'spacing', ('height',), HEIGHT_FALLBACKS),
    TokenRule('fontSize', 'text-', 'typography.fontSize', ('font-size',)),
    TokenRule('fontWeight', 'font-', 'typography.fontWeight', ('font-weight',)),
    TokenRule('borderRadius', 'rounded-', 'borderRadius', ('border-radius',)),
    TokenRule('opacity', 'opacity-', 'opacity', ('opacity',)),
    TokenRule('zIndex', 'z-', 'zIndex', ('z-index',)),
    TokenRule('position', 'top-', 'spacing', ('top',), TOP_FALLBACKS),
    TokenRule('position', 'right-', 'spacing', ('right',), INSET_FALLBACKS),
    TokenRule('position', 'bottom-', 'spacing', ('bottom',), INSET_FALLBACKS),
    TokenRule('position', 'left-', 'spacing', ('left',), INSET_FALLBACKS),
    TokenRule('border', 'border-', 'colors', ('border-color',)),
    TokenRule('shadow', 'shadow-', 'shadows', ('box-shadow',)),
    TokenRule('lineHeight', 'leading-', 'typography.lineHeight', ('line-height',)),
    TokenRule('letterSpacing', 'tracking-', 'typography.letterSpacing', ('letter-spacing',)),
]

COMPUTED_RULES = [
    ComputedRule('transition', 'transition-', (
        ('transition-property', '{value}'),
        ('transition-timing-function', 'cubic-bezier(0.4, 0, 0.2, 1)'),
        ('transition-duration', '150ms'),
    )),
    ComputedRule('transition', 'duration-', (('transition-duration', '{value}ms'),)),
    ComputedRule('transform', 'scale-', (
        ('--tw-scale-x', '{value}'),
        ('--tw-scale-y', '{value}'),
        ('transform', 'scale(var(--tw-scale-x), var(--tw-scale-y))'),
    )),
    ComputedRule('transform', 'rotate-', (
        ('--tw-rotate', '{value}deg'),
        ('transform', 'rotate(var(--tw-rotate))'),
    )),
    ComputedRule('transform', 'translate-', (
        ('--tw-translate-x', '{value}'),
        ('transform', 'translateX(var(--tw-translate-x))'),
    )),
]

UTILITY_RULES = [*LITERAL_RULES, *TOKEN_RULES, *COMPUTED_RULES]

UTILITY_FAMILIES = tuple(dict.fromkeys(rule.family for rule in UTILITY_RULES))


class UtilityResolver:
    """Resolves class names against one token table.

    `utilities` takes the config file's family switches; a family set to
    False is skipped so its class names fall through to later rules.
    """

    def __init__(self, tokens: TokenTable, utilities: Optional[Mapping[str, Any]] = None,
                 rules: Sequence[Any] = UTILITY_RULES):
        self.tokens = tokens
        if not isinstance(utilities, Mapping):
            utilities = {}
        self.disabled_families = {name for name, enabled in utilities.items() if enabled is False}
        self.rules = [rule for rule in rules if rule.family not in self.disabled_families]

    def declarations(self, class_name: str) -> Optional[List[Declaration]]:
        if not isinstance(class_name, str) or not class_name:
            return None
        for rule in self.rules:
            declarations = rule.apply(class_name, self.tokens)
            if declarations:
                return declarations
        return None

    def resolve(self, class_name: str) -> Optional[str]:
        """Return the rule body for a class name, or None if it is not a utility."""
        declarations = self.declarations(class_name)
        if declarations is None:
            return None
        return format_declarations(declarations)

    def css_rule(self, class_name: str) -> Optional[str]:
        body = self.resolve(class_name)
        if body is None:
            return None
        return f'.{class_name} {{ {body} }}'

    def matching_rules(self, class_name: str) -> List[Any]:
        """Every enabled rule that would claim the name if it were first in the table."""
        if not isinstance(class_name, str) or not class_name:
            return []
        return [rule for rule in self.rules if rule.apply(class_name, self.tokens)]


def resolve(class_name: str, tokens: TokenTable) -> Optional[str]:
    """Resolve one class name with every utility family enabled."""
    return UtilityResolver(tokens).resolve(class_name)
