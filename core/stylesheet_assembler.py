"""
Stylesheet Assembler Module
Builds the output stylesheet from extracted class names.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .token_store import TokenTable
from .utility_resolver import UtilityResolver

logger = logging.getLogger(__name__)

HEADER_LINES = (
    '/* Miniwing Generated CSS */',
    '/* Generated from design tokens */',
)


@dataclass
class AssemblyResult:
    css: str
    emitted: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class StylesheetAssembler:
    def __init__(self, resolver: UtilityResolver, include_header: bool = True):
        self.resolver = resolver
        self.include_header = include_header

    def build(self, class_names: Iterable[str]) -> AssemblyResult:
        """Emit one rule per resolvable class name, in the order given.

        Names are not deduplicated here. Names without a rule are collected
        in `skipped` for reporting only.
        """
        css = ''
        if self.include_header:
            css += '\n'.join(HEADER_LINES) + '\n\n'
        emitted: List[str] = []
        skipped: List[str] = []
        for class_name in class_names:
            rule = self.resolver.css_rule(class_name)
            if rule:
                css += rule + '\n'
                emitted.append(class_name)
            else:
                skipped.append(class_name)
        logger.debug(f"Assembled {len(emitted)} rule(s), skipped {len(skipped)} class name(s)")
        return AssemblyResult(css=css, emitted=emitted, skipped=skipped)


def assemble(class_names: Sequence[str], tokens: TokenTable) -> str:
    """Generate the stylesheet text for the given class names."""
    return StylesheetAssembler(UtilityResolver(tokens)).build(class_names).css
