"""Component Selector: turns a base profile and feedback into weighted components.

Three independent sources are concatenated in a fixed order, which later
truncation depends on:

1. Base components - the three highest-scoring categories of the base profile.
2. Adjustment components - category preferences, then user characteristics.
3. Specific-scent components - ``add`` requests carrying a ratio.

Weights are relative and unnormalized; names are never merged.
"""

from typing import List

from scentlab.engine import tables
from scentlab.models.models import BaseProfile, Category, Feedback, ScentComponent
from scentlab.utils.logger import logger


def profile_scent_index(profile_id: str, table_size: int) -> int:
    """Stable index of a base profile into a per-category ingredient table.

    The checksum is the sum of the code points of ``profile_id`` modulo
    ``table_size``; the same profile always yields the same ingredient names.
    """
    return sum(ord(char) for char in profile_id) % table_size


def category_scent_name(category: Category, profile_id: str) -> str:
    """Representative ingredient for ``category`` on the given base profile."""
    names = tables.CATEGORY_SCENTS[category]
    return names[profile_scent_index(profile_id, len(names))]


def estimate_scent_category(name: str) -> Category:
    """Guess the category of a user-named ingredient by keyword substring.

    Falls back to woody when no keyword matches.
    """
    lowered = name.lower()
    for category, keywords in tables.CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return tables.DEFAULT_CATEGORY


def base_components(profile: BaseProfile, feedback: Feedback) -> List[ScentComponent]:
    """Weighted components for the three highest-scoring base categories.

    Ties keep the profile's own category order (``sorted`` is stable).
    """
    retention = feedback.retention_percentage / 100
    top_categories = sorted(
        profile.category_scores.items(), key=lambda item: item[1], reverse=True
    )[: tables.BASE_COMPONENT_COUNT]

    return [
        ScentComponent(
            name=category_scent_name(category, profile.id),
            ratio=(score / 10) * tables.BASE_WEIGHT_CEILING * retention,
            category=category,
        )
        for category, score in top_categories
    ]


def adjustment_components(feedback: Feedback) -> List[ScentComponent]:
    """Components for category preferences and non-medium user characteristics.

    Decreasing a category never produces a negative weight: the opposite
    category's decrease ingredient is boosted instead.
    """
    components: List[ScentComponent] = []

    for category, preference in feedback.category_preferences.items():
        if preference == "increase":
            components.append(
                ScentComponent(
                    name=tables.CATEGORY_ADJUSTMENT_SCENTS[category][0],
                    ratio=tables.INCREASE_WEIGHT,
                    category=category,
                )
            )
        elif preference == "decrease":
            opposite = category.opposite
            components.append(
                ScentComponent(
                    name=tables.CATEGORY_ADJUSTMENT_SCENTS[opposite][1],
                    ratio=tables.DECREASE_WEIGHT,
                    category=opposite,
                )
            )

    for characteristic, level in feedback.user_characteristics.items():
        if level == "medium":
            continue
        name, category, ratio = tables.CHARACTERISTIC_ADJUSTMENTS[(characteristic, level)]
        components.append(ScentComponent(name=name, ratio=ratio, category=category))

    return components


def specific_scent_components(feedback: Feedback) -> List[ScentComponent]:
    """Components for specific scents the user asked to add with a ratio.

    Each request is capped at 30 before normalization.
    """
    return [
        ScentComponent(
            name=scent.name,
            ratio=min(scent.ratio / 100 * tables.SPECIFIC_SCENT_CAP, tables.SPECIFIC_SCENT_CAP),
            category=estimate_scent_category(scent.name),
        )
        for scent in feedback.added_scents()
        if scent.ratio
    ]


def select_components(profile: BaseProfile, feedback: Feedback) -> List[ScentComponent]:
    """Full unnormalized component list in source order."""
    base = base_components(profile, feedback)
    adjustments = adjustment_components(feedback)
    specific = specific_scent_components(feedback)

    logger.debug(
        f"Selected components: base={len(base)}, adjustments={len(adjustments)}, specific={len(specific)}",
        extra={"perfume_id": profile.id},
    )
    return base + adjustments + specific
