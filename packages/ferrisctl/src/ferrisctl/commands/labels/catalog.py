from __future__ import annotations

from collections.abc import Iterable

from ...config.defaults import LABEL_CATEGORIES
from ...config.model import LabelSpec

CATEGORY_ICONS = {
    "Priority": "📌",
    "Type": "🏷️",
    "Status": "📊",
    "Difficulty": "🎯",
    "Component": "🔧",
}


def group_by_category(labels: Iterable[LabelSpec]) -> list[tuple[str, list[LabelSpec]]]:
    """Group labels by category, known categories first, catalog order kept."""
    groups: dict[str, list[LabelSpec]] = {}
    for label in labels:
        groups.setdefault(label.category, []).append(label)
    ordered = [name for name in LABEL_CATEGORIES if name in groups]
    ordered.extend(sorted(name for name in groups if name not in LABEL_CATEGORIES))
    return [(name, groups[name]) for name in ordered]


def category_heading(category: str) -> str:
    icon = CATEGORY_ICONS.get(category, "•")
    return f"{icon} Creating {category} Labels..."
