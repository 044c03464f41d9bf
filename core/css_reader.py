"""
CSS Reader Module
Parses generated stylesheets back into selector -> declarations maps.
"""

from collections import defaultdict
from typing import Dict

import tinycss2


def parse_rules(css_content: str) -> Dict[str, Dict[str, str]]:
    """
    Parse top-level qualified rules into selector -> {property: value}.

    At-rules are ignored; miniwing never emits them. A selector that
    appears more than once has its declarations merged in source order.
    """
    stylesheet = tinycss2.parse_stylesheet(css_content, skip_comments=True, skip_whitespace=True)
    rules = defaultdict(dict)
    for rule in stylesheet:
        if rule.type != 'qualified-rule':
            continue
        selector = tinycss2.serialize(rule.prelude).strip()
        declarations = tinycss2.parse_declaration_list(rule.content, skip_comments=True, skip_whitespace=True)
        for decl in declarations:
            if decl.type == 'declaration':
                rules[selector][decl.name] = tinycss2.serialize(decl.value).strip()
    return dict(rules)


def count_rules(css_content: str) -> int:
    """Count qualified rules, including repeated selectors."""
    stylesheet = tinycss2.parse_stylesheet(css_content, skip_comments=True, skip_whitespace=True)
    return sum(1 for rule in stylesheet if rule.type == 'qualified-rule')
