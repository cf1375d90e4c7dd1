"""Ratio Normalizer: rescales component weights so they sum to 100."""

from typing import List

from scentlab.engine import tables
from scentlab.models.models import ScentComponent


def normalize_components(components: List[ScentComponent]) -> List[ScentComponent]:
    """Rescale ratios to percentages, preserving order and every other field.

    A list whose weights sum to zero (including an empty list) is replaced by a
    single default blend at 100%.
    """
    total = sum(component.ratio for component in components)

    if total == 0:
        return [
            ScentComponent(
                name=tables.DEFAULT_BLEND_NAME,
                ratio=100.0,
                category=tables.DEFAULT_CATEGORY,
            )
        ]

    return [
        component.model_copy(update={"ratio": component.ratio / total * 100})
        for component in components
    ]
