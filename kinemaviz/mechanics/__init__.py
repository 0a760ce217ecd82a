"""Позиционный анализ плоских механизмов (геометрия, решатели, каталог)."""

from kinemaviz.mechanics.catalog import (
    MECHANISMS,
    MechanismDefinition,
    MechanismType,
    get_mechanism,
    mechanisms_by_category,
    solve,
)
from kinemaviz.mechanics.geometry import distance, intersect_two_circles

__all__ = [
    "MECHANISMS",
    "MechanismDefinition",
    "MechanismType",
    "get_mechanism",
    "mechanisms_by_category",
    "solve",
    "distance",
    "intersect_two_circles",
]
