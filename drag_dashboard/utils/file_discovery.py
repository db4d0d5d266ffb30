"""
File discovery utilities for drag_dashboard.

Provides functions to find and filter result files in directories.
"""

import logging
from pathlib import Path

from drag_dashboard.constants import RESULT_FILE_EXTENSION

logger = logging.getLogger(__name__)


def find_result_files(
    results_dir: Path,
    marker: str,
    extensions: list[str] | None = None,
) -> list[Path]:
    """
    Find result files directly inside the results directory.

    A file is kept when its name ends with one of the extensions and
    contains the marker substring (e.g. "Acme_2023_DRAG.json").

    Args:
        results_dir: Directory containing result files
        marker: Substring identifying the result file family
        extensions: Optional list of extensions (default: ['.json'])

    Returns:
        Sorted list of file paths

    Raises:
        FileNotFoundError: If results_dir does not exist
    """
    if extensions is None:
        extensions = [RESULT_FILE_EXTENSION]

    if not results_dir.is_dir():
        raise FileNotFoundError(f"Results directory not found: {results_dir}")

    files = [
        path
        for path in results_dir.iterdir()
        if path.is_file()
        and marker in path.name
        and any(path.name.endswith(ext) for ext in extensions)
    ]

    skipped = sum(1 for path in results_dir.iterdir() if path.is_file()) - len(files)
    if skipped:
        logger.debug(f"Skipped {skipped} non-result files in {results_dir}")

    return sorted(files)
