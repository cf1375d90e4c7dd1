"""Templated rationale and one-line description for a recipe.

All sentences come from fixed phrase templates filled with category and
characteristic names; nothing is generated free-form.
"""

from typing import Dict, List

from scentlab.engine import tables
from scentlab.models.models import BaseProfile, Category, Explanation, Feedback, ScentComponent


def category_totals(components: List[ScentComponent]) -> Dict[Category, float]:
    """Summed ratio per category, every category present, in enum order."""
    totals = {category: 0.0 for category in Category}
    for component in components:
        totals[component.category] += component.ratio
    return totals


def top_categories(components: List[ScentComponent], count: int = 2) -> List[Category]:
    """Categories with the largest summed ratio; ties resolve in enum order."""
    totals = category_totals(components)
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [category for category, _ in ranked[:count]]


def format_percentage(value: float) -> str:
    return f"{value:g}"


def specific_scent_sentence(feedback: Feedback) -> str:
    names = [scent.name for scent in feedback.added_scents()]
    if not names:
        return ""
    return f"특별히 요청하신 {', '.join(names)} 향료를 추가하여 개성을 더했습니다."


def characteristic_adjectives(feedback: Feedback) -> List[str]:
    """Adjectives for every non-medium characteristic, in a fixed order."""
    adjectives = []
    for characteristic in tables.CHARACTERISTIC_ORDER:
        level = feedback.user_characteristics.get(characteristic)
        high, low = tables.CHARACTERISTIC_ADJECTIVES[characteristic]
        if level in ("high", "veryHigh"):
            adjectives.append(high)
        elif level in ("low", "veryLow"):
            adjectives.append(low)
    return adjectives


def characteristics_sentence(feedback: Feedback) -> str:
    adjectives = characteristic_adjectives(feedback)
    if not adjectives:
        return ""
    return f"특히 {', '.join(adjectives)} 특성이 두드러집니다."


def season_recommendation(categories: List[Category]) -> str:
    """Seasons suited to the given categories, de-duplicated in first-seen order."""
    seasons: List[str] = []
    for category in categories:
        for season in tables.CATEGORY_SEASONS[category]:
            if season not in seasons:
                seasons.append(season)
    return "과 ".join(seasons)


def occasion_recommendation(category: Category) -> str:
    first, second, best = tables.CATEGORY_OCCASIONS[category]
    return f"{first}이나 {second}에 사용하기 좋으며, 특히 {best}에 사용하면 좋은 인상을 줄 수 있습니다."


def _sentence(*parts: str) -> str:
    return " ".join(part for part in parts if part).strip()


def generate_explanation(
    feedback: Feedback,
    components: List[ScentComponent],
    profile: BaseProfile,
) -> Explanation:
    """Rationale, expected result and recommendation for normalized components."""
    top = top_categories(components)
    names = "과 ".join(tables.CATEGORY_DISPLAY_NAMES[category] for category in top)

    rationale = _sentence(
        f"{profile.name} 향수를 기반으로 하여, {format_percentage(feedback.retention_percentage)}%의 "
        f"기존 향을 유지하면서 사용자의 피드백에 따라 {names} 노트를 강조했습니다.",
        specific_scent_sentence(feedback),
    )
    expected_result = _sentence(
        f"이 조합은 {tables.CATEGORY_DESCRIPTIONS[top[0]]}와(과) {tables.CATEGORY_DESCRIPTIONS[top[1]]}가 "
        "조화롭게 어우러진 향을 제공합니다.",
        characteristics_sentence(feedback),
    )
    recommendation = _sentence(
        f"이 향수는 {season_recommendation(top)}에 특히 잘 어울립니다.",
        occasion_recommendation(top[0]),
    )

    return Explanation(
        rationale=rationale,
        expected_result=expected_result,
        recommendation=recommendation,
    )


def recipe_characteristic(feedback: Feedback) -> str:
    """Adjective for the first extreme characteristic, or "balanced"."""
    for characteristic, level in feedback.user_characteristics.items():
        if level in ("veryHigh", "veryLow"):
            high, low = tables.EXTREME_CHARACTERISTIC_ADJECTIVES[characteristic]
            return high if level == "veryHigh" else low
    return tables.BALANCED_ADJECTIVE


def describe_recipe(feedback: Feedback, profile: BaseProfile) -> str:
    return f"{profile.name} 향수를 기반으로 맞춤 제작된, {recipe_characteristic(feedback)} 향수입니다."
