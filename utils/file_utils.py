"""
File Utilities Module
File discovery and read/write helpers for the build.
"""

import os
from pathlib import Path
from typing import Iterable, List

# Markup the scanner understands
MARKUP_EXTENSIONS = ('.html', '.htm', '.jsx', '.tsx')

# Directories never worth scanning
SKIP_DIRS = {'node_modules', 'dist', 'build', '__pycache__'}


def normalize_path(path: str | Path) -> Path:
    """Convert string path to normalized Path object."""
    return Path(path).resolve()


def is_hidden(path: Path) -> bool:
    """Check if a file or directory is hidden (dot-prefixed)."""
    return path.name.startswith('.')


def find_markup_files(path: str | Path, extensions: Iterable[str] = MARKUP_EXTENSIONS) -> List[Path]:
    """
    Recursively collect markup files under a directory.

    Args:
        path: Base directory path
        extensions: File extensions to collect (e.g., ['.html'])

    Returns:
        Sorted list of Path objects for matching files
    """
    base_path = normalize_path(path)
    extensions = tuple(ext.lower() for ext in extensions)
    matching_files = []

    for root, dirs, files in os.walk(base_path):
        dirs[:] = [d for d in dirs if d not in SKIP_DIRS and not is_hidden(Path(root) / d)]

        for file in files:
            file_path = Path(root) / file
            if is_hidden(file_path):
                continue
            if file.lower().endswith(extensions):
                matching_files.append(file_path)

    # os.walk order depends on the filesystem; keep builds reproducible
    return sorted(matching_files)


def ensure_directory(directory: Path) -> None:
    """Ensure directory exists, create if necessary."""
    directory.mkdir(parents=True, exist_ok=True)


def read_file_content(file_path: Path) -> str:
    """
    Read file content as UTF-8.

    Raises:
        FileNotFoundError: If file doesn't exist
        OSError: If file can't be read
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError:
        # Fallback to system default encoding if UTF-8 fails
        with open(file_path, 'r') as f:
            return f.read()


def write_file_content(file_path: Path, content: str) -> Path:
    """Write content as UTF-8, creating parent directories first."""
    file_path = Path(file_path)
    ensure_directory(file_path.parent)
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(content)
    return file_path
