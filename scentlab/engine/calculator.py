"""Recipe Calculator: converts normalized ratios into ingredient masses."""

import math
from typing import List

from scentlab.models.models import LineItem, ScentComponent
from scentlab.utils.config import config


# Fragrance concentrate per finished bottle: 1g for every 10ml
GRAMS_PER_10ML = 1.0
GRAMS_10ML = GRAMS_PER_10ML
GRAMS_50ML = GRAMS_PER_10ML * 5

# Amounts are allocated in hundredths of a gram
AMOUNT_STEPS_PER_GRAM = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero for non-negative input."""
    return int(math.floor(value + 0.5))


def format_amount(grams: float) -> str:
    """Two-decimal mass with the configured unit suffix, e.g. ``0.35g``."""
    return f"{grams:.2f}{config.AMOUNT_UNIT}"


def allocate_hundredths(ratios: List[float], total_grams: float) -> List[int]:
    """Split ``total_grams`` into hundredths of a gram by the largest-remainder method.

    Every share is floored, then the hundredths left over go one each to the
    shares with the largest fractional parts (earlier shares win ties). The
    result sums to exactly ``total_grams`` and each share is within one
    hundredth of ``ratio / 100 * total_grams``.

    Args:
        ratios: Normalized ratios (percentages summing to 100).
        total_grams: Concentrate mass of the batch.

    Returns:
        Hundredths of a gram per ratio, in input order.
    """
    total_steps = round_half_up(total_grams * AMOUNT_STEPS_PER_GRAM)
    exact = [ratio / 100 * total_steps for ratio in ratios]
    steps = [int(math.floor(share)) for share in exact]

    leftover = total_steps - sum(steps)
    by_remainder = sorted(range(len(exact)), key=lambda i: exact[i] - steps[i], reverse=True)
    for index in by_remainder[: max(leftover, 0)]:
        steps[index] += 1
    return steps


def calculate_recipe(components: List[ScentComponent], total_grams: float) -> List[LineItem]:
    """Line items for a batch containing ``total_grams`` of concentrate.

    Args:
        components: Normalized components (ratios are percentages).
        total_grams: Concentrate mass of the batch.

    Returns:
        One line item per component, in component order. The formatted amounts
        add up to ``total_grams``.
    """
    steps = allocate_hundredths([component.ratio for component in components], total_grams)
    return [
        LineItem(
            name=component.name,
            amount=format_amount(share / AMOUNT_STEPS_PER_GRAM),
            percentage=round_half_up(component.ratio),
        )
        for component, share in zip(components, steps)
    ]
