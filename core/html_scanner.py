"""
HTML Scanner Module
Extracts class names from HTML and JSX/TSX sources.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Union

from bs4 import BeautifulSoup

from utils.file_utils import read_file_content
from .utility_resolver import COMPUTED_RULES, LITERAL_RULES, TOKEN_RULES

logger = logging.getLogger(__name__)

CLASS_ATTR_REGEX = re.compile(r'''(?:class|className)\s*=\s*["']([^"']+)["']''')

# Hyphenated names such as bg-blue, px-4, top-1/2, scale-1.5
UTILITY_SHAPE_REGEX = re.compile(r'^[a-z][a-z0-9]*(?:-[a-z0-9./]+)+$')

# Every exact utility name (flex, hidden, rounded, overflow-x-auto, ...)
LITERAL_UTILITIES = frozenset(name for rule in LITERAL_RULES for name in rule.table)

# Token keys come from user config and may use any case or underscores
UTILITY_PREFIXES = tuple(dict.fromkeys(rule.prefix for rule in [*TOKEN_RULES, *COMPUTED_RULES]))

FILETYPES = {
    'html': 'html',
    'htm': 'html',
    'jsx': 'jsx',
    'tsx': 'jsx',
}


def _unique(names: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(names))


def extract_classes_html(content: str) -> List[str]:
    """Extract class names from HTML in document order using BeautifulSoup."""
    soup = BeautifulSoup(content, 'html.parser')
    classes = []
    for tag in soup.find_all(True):
        class_attr = tag.get('class')
        if not class_attr:
            continue
        # html.parser splits class into a list; guard against a bare string anyway
        if isinstance(class_attr, str):
            class_attr = class_attr.split()
        classes.extend(cls.strip() for cls in class_attr if cls.strip())
    return classes


def extract_classes_jsx(content: str) -> List[str]:
    """Extract class names from JSX/TSX string attributes using a regex."""
    classes = []
    for match in CLASS_ATTR_REGEX.finditer(content):
        classes.extend(cls for cls in match.group(1).split() if cls)
    return classes


def extract_classes(content: str, filetype: str = 'html') -> List[str]:
    """Unified extraction function for HTML and JSX/TSX."""
    kind = FILETYPES.get(filetype.lower().lstrip('.'))
    if kind == 'html':
        return extract_classes_html(content)
    if kind == 'jsx':
        return extract_classes_jsx(content)
    return []


def scan_files(paths: Iterable[Union[str, Path]]) -> List[str]:
    """Read each file and return its unique class names in first-seen order.

    Missing or unreadable files are logged and skipped.
    """
    found: List[str] = []
    for raw_path in paths:
        path = Path(raw_path).resolve()
        if not path.is_file():
            logger.warning(f"File not found: {path}")
            continue
        try:
            content = read_file_content(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            continue
        classes = extract_classes(content, path.suffix)
        logger.debug(f"Found {len(classes)} class name(s) in {path}")
        found.extend(classes)
    return _unique(found)


def filter_utility_classes(class_names: Iterable[str]) -> List[str]:
    """Keep names that are known utilities, start with a utility prefix, or look like one."""
    return [
        cls for cls in class_names
        if cls in LITERAL_UTILITIES
        or cls.startswith(UTILITY_PREFIXES)
        or UTILITY_SHAPE_REGEX.match(cls)
    ]
