"""
CLI utilities for drag_dashboard.

This package provides shared functionality for commands:
- Logging setup
- Argument parsing
- Command entry points
"""

from drag_dashboard.cli.args import add_execute_argument, add_results_dir_argument
from drag_dashboard.cli.commands import build_summary, run_summary
from drag_dashboard.cli.logging import print_header, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "print_header",
    # Arguments
    "add_execute_argument",
    "add_results_dir_argument",
    # Commands
    "build_summary",
    "run_summary",
]
