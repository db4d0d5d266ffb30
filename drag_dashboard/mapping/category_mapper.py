"""
Category and classification display mapping.

Maps a question's category to a display group (name, color, icon,
description) and a classification value to display metadata (score, label,
colors). The table comes from category_mapping.json:

    {
        "category_groups": {
            "<group name>": {
                "includes": ["<category>", ...],
                "display_color": "#...",
                "icon": "...",
                "description": "..."
            }
        },
        "classification_colors": {
            "YES": {"score": 3, "label": "...", "color": "#...", "bg_color": "#..."}
        },
        "drag_mapping": {"<external label>": "<classification>"}
    }

Group order in the file is significant: the first group whose includes
contains a category wins.
"""

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

from drag_dashboard.config import get_category_mapping_path
from drag_dashboard.constants import (
    CLASSIFICATIONS,
    FALLBACK_CLASSIFICATION_BG_COLOR,
    FALLBACK_CLASSIFICATION_COLOR,
    FALLBACK_CLASSIFICATION_LABEL,
    FALLBACK_CLASSIFICATION_SCORE,
    FALLBACK_GROUP_COLOR,
    FALLBACK_GROUP_DESCRIPTION,
    FALLBACK_GROUP_ICON,
    FALLBACK_GROUP_NAME,
    UNKNOWN_CATEGORY,
)
from drag_dashboard.domain.models import (
    CategoryGroup,
    CategoryStats,
    ClassificationInfo,
    Question,
)

logger = logging.getLogger(__name__)

FALLBACK_GROUP = CategoryGroup(
    name=FALLBACK_GROUP_NAME,
    color=FALLBACK_GROUP_COLOR,
    icon=FALLBACK_GROUP_ICON,
    description=FALLBACK_GROUP_DESCRIPTION,
)

FALLBACK_CLASSIFICATION = ClassificationInfo(
    score=FALLBACK_CLASSIFICATION_SCORE,
    label=FALLBACK_CLASSIFICATION_LABEL,
    color=FALLBACK_CLASSIFICATION_COLOR,
    bg_color=FALLBACK_CLASSIFICATION_BG_COLOR,
)


class CategoryMappingError(ValueError):
    """Raised when category_mapping.json is missing required structure."""


@dataclass(frozen=True)
class CategoryMapping:
    """Validated category mapping table."""

    # (group, included categories) in file order
    groups: list[tuple[CategoryGroup, frozenset[str]]] = field(default_factory=list)
    classifications: dict[str, ClassificationInfo] = field(default_factory=dict)
    drag_mapping: dict[str, str] = field(default_factory=dict)

    def group_for(self, category: str) -> CategoryGroup | None:
        """Return the first group including category, or None if unmapped."""
        for group, includes in self.groups:
            if category in includes:
                return group
        return None

    def classification_for(self, classification: str) -> ClassificationInfo | None:
        """Return display info for classification, or None if unmapped."""
        return self.classifications.get(classification)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategoryMapping":
        """
        Build a mapping from the parsed JSON table.

        Raises:
            CategoryMappingError: If a group or classification entry lacks a
                required key, or a top-level section has the wrong type.
        """
        if not isinstance(data, dict):
            raise CategoryMappingError("Category mapping must be a JSON object")

        groups = []
        for name, group_data in _section(data, "category_groups").items():
            try:
                group = CategoryGroup(
                    name=name,
                    color=group_data["display_color"],
                    icon=group_data.get("icon", ""),
                    description=group_data.get("description", ""),
                )
                includes = frozenset(group_data["includes"])
            except (KeyError, TypeError) as e:
                raise CategoryMappingError(f"Invalid category group '{name}': {e}") from e
            groups.append((group, includes))

        classifications = {}
        for value, info in _section(data, "classification_colors").items():
            try:
                classifications[value] = ClassificationInfo(
                    score=info["score"],
                    label=info["label"],
                    color=info["color"],
                    bg_color=info["bg_color"],  # snake_case in the JSON
                )
            except (KeyError, TypeError) as e:
                raise CategoryMappingError(f"Invalid classification '{value}': {e}") from e

        unknown = set(classifications) - set(CLASSIFICATIONS)
        if unknown:
            logger.debug(f"Category mapping defines extra classifications: {sorted(unknown)}")

        return cls(
            groups=groups,
            classifications=classifications,
            drag_mapping={str(k): str(v) for k, v in _section(data, "drag_mapping").items()},
        )


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise CategoryMappingError(f"'{key}' must be a JSON object")
    return section


@lru_cache
def load_category_mapping(path: Path | None = None) -> CategoryMapping:
    """
    Load and validate the category mapping table (once per path).

    Args:
        path: Mapping file (default: configured category_mapping.json)

    Returns:
        Validated CategoryMapping
    """
    mapping_path = path or get_category_mapping_path()
    with open(mapping_path, encoding="utf-8") as f:
        data = json.load(f)
    return CategoryMapping.from_dict(data)


def _resolve(mapping: CategoryMapping | None) -> CategoryMapping:
    return mapping if mapping is not None else load_category_mapping()


def get_category_group(
    question: Question | None, mapping: CategoryMapping | None = None
) -> CategoryGroup:
    """
    Get the display group for a question based on its category field.

    Never raises for bad input: a missing question or an unmapped category
    returns the "Other" group.
    """
    if question is None:
        return FALLBACK_GROUP

    category = getattr(question, "category", None) or UNKNOWN_CATEGORY
    return _resolve(mapping).group_for(category) or FALLBACK_GROUP


def get_classification_info(
    classification: str, mapping: CategoryMapping | None = None
) -> ClassificationInfo:
    """Get score, label and colors for a classification value."""
    return _resolve(mapping).classification_for(classification) or FALLBACK_CLASSIFICATION


def group_questions_by_category(
    questions: list[Question] | None, mapping: CategoryMapping | None = None
) -> dict[str, list[Question]]:
    """
    Group answered questions by display group name.

    Questions that are None or have no answer are skipped. Input order is
    preserved within each group.
    """
    grouped: dict[str, list[Question]] = {}

    if not isinstance(questions, list):
        return grouped

    for question in questions:
        if question is None or getattr(question, "answer", None) is None:
            continue
        group = get_category_group(question, mapping=mapping)
        grouped.setdefault(group.name, []).append(question)

    return grouped


def calculate_category_stats(questions: list[Question] | None) -> CategoryStats:
    """
    Count questions per classification.

    The four canonical classifications are always present (possibly zero);
    unrecognized values are counted under their own key.
    """
    by_classification = {value: 0 for value in CLASSIFICATIONS}

    if not isinstance(questions, list):
        return CategoryStats(total=0, by_classification=by_classification)

    valid = [
        q
        for q in questions
        if q is not None
        and getattr(q, "answer", None) is not None
        and q.answer.classification
    ]
    for question in valid:
        classification = question.answer.classification
        by_classification[classification] = by_classification.get(classification, 0) + 1

    return CategoryStats(total=len(valid), by_classification=by_classification)


def map_drag_classification(value: str, mapping: CategoryMapping | None = None) -> str:
    """Map an external D-RAG classification label to ours (passthrough if unknown)."""
    return _resolve(mapping).drag_mapping.get(value, value)
