"""
Category and classification display mapping.

Organizes questions into display groups and labels classifications
using the static category_mapping.json table.
"""

from drag_dashboard.mapping.category_mapper import (
    CategoryMapping,
    CategoryMappingError,
    calculate_category_stats,
    get_category_group,
    get_classification_info,
    group_questions_by_category,
    load_category_mapping,
    map_drag_classification,
)

__all__ = [
    "CategoryMapping",
    "CategoryMappingError",
    "load_category_mapping",
    "get_category_group",
    "get_classification_info",
    "group_questions_by_category",
    "calculate_category_stats",
    "map_drag_classification",
]
