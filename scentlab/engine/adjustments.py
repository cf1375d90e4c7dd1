"""Adjustment advisor for quick five-point feedback.

Each dimension is rated 1-5 with 3 meaning "keep as is". Ratings above 3 add
more of the matching note, ratings below 3 add a counter-note; the retained
base is always listed first.
"""

from types import MappingProxyType
from typing import List, NamedTuple, Optional

from scentlab.models.models import AdjustmentFeedback, AdjustmentRecommendation, BaseProfile, NoteAdjustment


NEUTRAL_RATING = 3
BASE_VOLUME_ML = 50.0


class NoteRule(NamedTuple):
    note_id: str
    note_name: str
    description: str
    factor: float
    unit: str


# dimension -> (rule above neutral, rule below neutral)
ADJUSTMENT_RULES = MappingProxyType({
    "intensity": (
        NoteRule("intensity", "향 농도", "향의 농도 증가", 2.0, "ml"),
        NoteRule("dilution", "희석액", "향 희석을 위한 무향 베이스 추가", 5.0, "ml"),
    ),
    "sweetness": (
        NoteRule("vanilla", "바닐라", "바닐라 노트 추가 (단맛 증가)", 1.5, "g"),
        NoteRule("wood", "샌달우드", "우디 노트 추가 (단맛 상쇄)", 0.5, "g"),
    ),
    "bitterness": (
        NoteRule("coffee", "커피 / 카카오", "커피/카카오 노트 추가 (쓴맛 증가)", 1.2, "g"),
        NoteRule("honey", "허니", "허니 노트 추가 (쓴맛 상쇄)", 1.0, "g"),
    ),
    "sourness": (
        NoteRule("citrus", "시트러스", "시트러스 노트 추가 (시큼함 증가)", 1.3, "g"),
        NoteRule("amber", "앰버", "앰버 노트 추가 (시큼함 상쇄)", 0.8, "g"),
    ),
    "freshness": (
        NoteRule("mint", "민트 / 유칼립투스", "민트/유칼립투스 노트 추가 (신선함 증가)", 1.5, "g"),
        NoteRule("warm", "시나몬 / 바닐라", "따뜻한 노트 추가 (신선함 감소)", 1.2, "g"),
    ),
})


def _note_adjustment(rule: NoteRule, steps: int) -> NoteAdjustment:
    return NoteAdjustment(
        type="increase",
        note_id=rule.note_id,
        note_name=rule.note_name,
        description=rule.description,
        amount=f"{steps * rule.factor:.1f}{rule.unit}",
    )


def _rule_for(dimension: str, rating: int) -> Optional[NoteAdjustment]:
    above, below = ADJUSTMENT_RULES[dimension]
    if rating > NEUTRAL_RATING:
        return _note_adjustment(above, rating - NEUTRAL_RATING)
    if rating < NEUTRAL_RATING:
        return _note_adjustment(below, NEUTRAL_RATING - rating)
    return None


def _purpose(adjustment: NoteAdjustment) -> str:
    """Parenthesized purpose of a description, or the whole description."""
    if "(" in adjustment.description:
        return adjustment.description.split("(", 1)[1].replace(")", "")
    return adjustment.description


def explain_adjustments(feedback: AdjustmentFeedback, adjustments: List[NoteAdjustment], profile: BaseProfile) -> str:
    if feedback.retention_percentage == 100:
        base_text = f"{profile.name} 향수의 기본 배합을 그대로 유지합니다."
    elif feedback.retention_percentage == 0:
        base_text = f"{profile.name} 향수의 기본 배합을 완전히 변경합니다."
    else:
        base_text = f"{profile.name} 향수의 기본 배합을 {feedback.retention_percentage}% 유지합니다."

    clauses = []
    for adjustment in adjustments:
        if adjustment.type == "increase":
            clauses.append(f"{adjustment.note_name}을(를) {adjustment.amount} 추가하여 {_purpose(adjustment)}")
        elif adjustment.type == "reduce":
            clauses.append(f"{adjustment.note_name}을(를) {adjustment.amount} 감소시켜 {_purpose(adjustment)}")

    if not clauses:
        return f"{base_text} 추가 조정 없이 원래의 배합 그대로 유지합니다."
    return f"{base_text} 여기에 {', '.join(clauses)}의 변화를 주어 고객님의 취향에 맞게 조정합니다."


def recommend_adjustments(feedback: AdjustmentFeedback, profile: BaseProfile) -> AdjustmentRecommendation:
    """Adjustment plan for the given quick feedback on ``profile``."""
    base_amount = f"{BASE_VOLUME_ML * feedback.retention_percentage / 100:.1f}ml"
    adjustments = [NoteAdjustment(type="base", description="기존 향수 베이스", amount=base_amount)]

    for dimension in ADJUSTMENT_RULES:
        adjustment = _rule_for(dimension, getattr(feedback, dimension))
        if adjustment is not None:
            adjustments.append(adjustment)

    return AdjustmentRecommendation(
        perfume_id=profile.id,
        perfume_name=profile.name,
        base_retention=feedback.retention_percentage,
        base_amount=base_amount,
        adjustments=adjustments,
        total_adjustments=len(adjustments),
        explanation=explain_adjustments(feedback, adjustments[1:], profile),
    )
