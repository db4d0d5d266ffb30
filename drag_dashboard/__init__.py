"""
D-RAG Dashboard - data layer for compliance/risk analysis results.

This package provides utilities for:
- Loading and normalizing D-RAG result files per company and fiscal year
- Mapping question categories and classifications to display metadata
- Extracting, converting and highlighting monetary amounts in evidence text
- Common CLI utilities
"""

import logging

# Set up NullHandler to prevent "No handler found" warnings
# when used as a library. Applications should configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Re-export commonly used items
from drag_dashboard.config import (
    get_category_mapping_path,
    get_exchange_rates_path,
    get_questions_metadata_path,
    get_results_dir,
)
from drag_dashboard.constants import CLASSIFICATIONS

__all__ = [
    "__version__",
    # Config
    "get_results_dir",
    "get_questions_metadata_path",
    "get_category_mapping_path",
    "get_exchange_rates_path",
    # Constants
    "CLASSIFICATIONS",
]
