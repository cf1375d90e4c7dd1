"""Recipe generation entry point.

Runs the linear pipeline (select -> normalize -> calculate -> guide/explain)
and never raises: any failure along the way collapses into the base recipe,
whose rationale says that a fallback occurred.
"""

from typing import Any, Dict, Union

from scentlab.engine.calculator import GRAMS_10ML, GRAMS_50ML, calculate_recipe, format_amount
from scentlab.engine.explanation import describe_recipe, generate_explanation
from scentlab.engine.guide import generate_test_guide, scent_code
from scentlab.engine.normalizer import normalize_components
from scentlab.engine.selector import select_components
from scentlab.hooks.normalize_feedback import normalize_feedback_payload
from scentlab.models.models import (
    BaseProfile,
    Explanation,
    Feedback,
    LineItem,
    Recipe,
    ScentMixture,
    TestGuide,
)
from scentlab.utils.logger import logger


FALLBACK_RATIONALE = "오류로 인해 기본 레시피가 제공됩니다."


def fallback_recipe(profile: BaseProfile) -> Recipe:
    """Single-ingredient recipe: the base profile itself at 100%."""
    return Recipe(
        based_on=profile.name,
        recipe_10ml=[LineItem(name=profile.name, amount=format_amount(GRAMS_10ML), percentage=100)],
        recipe_50ml=[LineItem(name=profile.name, amount=format_amount(GRAMS_50ML), percentage=100)],
        description=f"{profile.name} 향수의 기본 레시피입니다.",
        test_guide=TestGuide(
            instructions="기본 향수를 그대로 시향해보세요.",
            scent_mixtures=[
                ScentMixture(id=scent_code(profile.name), name=profile.name, count=10, ratio=100)
            ],
        ),
        explanation=Explanation(
            rationale=FALLBACK_RATIONALE,
            expected_result="기존 향수의 향을 유지합니다.",
            recommendation="모든 상황에 무난하게 어울립니다.",
        ),
    )


def is_fallback(recipe: Recipe) -> bool:
    return recipe.explanation.rationale == FALLBACK_RATIONALE


def generate_custom_recipe(profile: BaseProfile, feedback: Union[Feedback, Dict[str, Any]]) -> Recipe:
    """Derive a customized recipe from a base profile and user feedback.

    Args:
        profile: Base profile resolved from the persona catalog.
        feedback: Validated Feedback, or a raw payload dict to normalize and validate.

    Returns:
        Recipe with 10ml/50ml line items, test guide and explanation. Never raises;
        malformed feedback or any internal failure yields ``fallback_recipe(profile)``.
    """
    log_extra = {"perfume_id": profile.id}
    try:
        if not isinstance(feedback, Feedback):
            feedback = Feedback.model_validate(normalize_feedback_payload(feedback))

        components = select_components(profile, feedback)
        normalized = normalize_components(components)
        logger.debug(f"Normalized {len(components)} components into {len(normalized)}", extra=log_extra)

        recipe = Recipe(
            based_on=profile.name,
            recipe_10ml=calculate_recipe(normalized, GRAMS_10ML),
            recipe_50ml=calculate_recipe(normalized, GRAMS_50ML),
            description=describe_recipe(feedback, profile),
            test_guide=generate_test_guide(normalized, feedback, profile),
            explanation=generate_explanation(feedback, normalized, profile),
        )
        logger.info(f"Generated recipe with {len(recipe.recipe_10ml)} ingredients", extra=log_extra)
        return recipe

    except Exception as e:
        logger.error(f"Recipe generation failed, returning base recipe: {e}", exc_info=True, extra=log_extra)
        return fallback_recipe(profile)
