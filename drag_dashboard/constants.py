"""
Constants for drag_dashboard package.

Centralizes display fallbacks, classification values and magnitude factors.
"""

# Classification values (canonical order: best to worst coverage)
CLASSIFICATION_YES = "YES"
CLASSIFICATION_PARTIAL = "PARTIAL"
CLASSIFICATION_UNCLEAR = "UNCLEAR"
CLASSIFICATION_NONE = "NONE"
CLASSIFICATIONS = (
    CLASSIFICATION_YES,
    CLASSIFICATION_PARTIAL,
    CLASSIFICATION_UNCLEAR,
    CLASSIFICATION_NONE,
)

# Legacy value rewritten at load time
LEGACY_CLASSIFICATION_UNSURE = "UNSURE"

# Question sectors
SECTOR_P = "P"
SECTOR_F = "F"
SECTOR_PF = "PF"

# Category fallbacks
UNKNOWN_CATEGORY = "Unknown"
FALLBACK_GROUP_NAME = "Other"
FALLBACK_GROUP_COLOR = "#6b7280"
FALLBACK_GROUP_ICON = "❓"
FALLBACK_GROUP_DESCRIPTION = "Other risk categories"

# Classification fallback
FALLBACK_CLASSIFICATION_SCORE = 0
FALLBACK_CLASSIFICATION_LABEL = "Unknown"
FALLBACK_CLASSIFICATION_COLOR = "#6b7280"
FALLBACK_CLASSIFICATION_BG_COLOR = "#f3f4f6"

# Currency
BASE_CURRENCY = "USD"
SYMBOL_TO_CURRENCY = {
    "€": "EUR",
    "£": "GBP",
    "¥": "JPY",
}
MILLION = 1_000_000
BILLION = 1_000_000_000
THOUSAND = 1_000

# Result files
RESULT_FILE_EXTENSION = ".json"
QUESTION_ID_SEPARATOR = "-"
