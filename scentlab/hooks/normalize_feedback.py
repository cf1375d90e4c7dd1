"""Payload normalization hook for unified Feedback format.

Handles the shapes the web application has sent over time:
1. Current form payloads (``specificScents`` with ``action``)
2. Older payloads (``specificScentAdjustments`` with ``adjustmentType`` and
   ``scentCategoryPreferences`` using keep/remove)

Result: ``Feedback.model_validate`` always receives the current shape.
"""

from typing import Any, Dict

from scentlab.models.models import Category
from scentlab.utils.logger import logger


CHARACTERISTICS = ("weight", "sweetness", "freshness", "uniqueness")

# Older preference vocabulary -> current vocabulary
LEGACY_PREFERENCES = {
    "increase": "increase",
    "decrease": "decrease",
    "keep": "maintain",
    "maintain": "maintain",
    "remove": "decrease",
}

_CATEGORY_VALUES = {category.value for category in Category}


def _normalize_scent(scent: Any) -> Any:
    if not isinstance(scent, dict):
        return scent
    scent = dict(scent)
    if not scent.get("action"):
        scent["action"] = scent.pop("adjustmentType", None) or "add"
    else:
        scent.pop("adjustmentType", None)
    return scent


def normalize_feedback_payload(payload: Any) -> Any:
    """Normalize a raw feedback payload before validation.

    Never raises: anything it cannot interpret is passed through untouched and
    left for validation to reject.

    Args:
        payload: Raw request payload (usually a dict parsed from JSON).

    Returns:
        A new dict in the current Feedback shape, or ``payload`` unchanged.
    """
    if not isinstance(payload, dict):
        return payload

    try:
        data: Dict[str, Any] = dict(payload)

        # Specific scents: merge the legacy list into the current one
        scents = list(data.get("specificScents") or [])
        scents.extend(data.pop("specificScentAdjustments", None) or [])
        data["specificScents"] = [_normalize_scent(scent) for scent in scents]

        # Category preferences: current values win over legacy ones
        preferences: Dict[str, Any] = {}
        for category, preference in (data.pop("scentCategoryPreferences", None) or {}).items():
            if preference in LEGACY_PREFERENCES:
                preferences[category] = LEGACY_PREFERENCES[preference]
        preferences.update(data.get("categoryPreferences") or {})

        unknown = [key for key in preferences if key not in _CATEGORY_VALUES]
        if unknown:
            logger.warning(f"Dropping unknown categories from feedback: {unknown}")
        data["categoryPreferences"] = {
            key: value for key, value in preferences.items() if key in _CATEGORY_VALUES
        }

        characteristics = data.get("userCharacteristics") or {}
        unknown = [key for key in characteristics if key not in CHARACTERISTICS]
        if unknown:
            logger.warning(f"Dropping unknown characteristics from feedback: {unknown}")
        data["userCharacteristics"] = {
            key: value for key, value in characteristics.items() if key in CHARACTERISTICS
        }

        retention = data.get("retentionPercentage")
        if isinstance(retention, str) and retention.strip():
            data["retentionPercentage"] = float(retention)
        elif retention is None:
            data.pop("retentionPercentage", None)

        logger.debug(
            f"Normalized feedback: {len(data['specificScents'])} scents, "
            f"{len(data['categoryPreferences'])} preferences, "
            f"{len(data['userCharacteristics'])} characteristics"
        )
        return data

    except (AttributeError, TypeError, ValueError) as e:
        logger.warning(f"Feedback normalization failed, validating payload as-is: {e}")
        return payload
