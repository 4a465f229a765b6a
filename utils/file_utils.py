"""
File Utilities Module
Common file operations and path handling functions.
"""

from pathlib import Path


def normalize_path(path: str | Path) -> Path:
    """Convert string path to normalized Path object."""
    return Path(path).expanduser().resolve()


def read_file_content(file_path: Path) -> str:
    """
    Safely read file content with proper encoding.

    Args:
        file_path: Path to the file to read

    Returns:
        File contents as string

    Raises:
        FileNotFoundError: If file doesn't exist
        IOError: If file can't be read
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError:
        # Fallback to system default encoding if UTF-8 fails
        with open(file_path, 'r') as f:
            return f.read()
