"""
Argument parsing utilities for drag_dashboard CLI.

Provides standard argument patterns used across commands.
"""

from pathlib import Path


def add_execute_argument(parser):
    """
    Add standard --execute argument to an ArgumentParser.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Also write a log file under logs/ (default is console only)",
    )


def add_results_dir_argument(parser):
    """
    Add standard --results-dir argument to an ArgumentParser.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument(
        "--results-dir",
        type=Path,
        default=None,
        help="Directory of D-RAG result files (default: DRAG_RESULTS_DIR or data/results)",
    )
