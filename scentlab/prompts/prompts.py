"""Perfumer prompt template and response parsing.

The web application can ask a generative model for a recipe instead of (or
alongside) the rule engine. This module renders the fixed perfumer prompt from
structured feedback and turns the model's free-text reply back into a Recipe.
"""

import json
import re
from typing import Optional

from pydantic import ValidationError

from scentlab.engine.guide import granule_count, scent_code
from scentlab.models.models import Explanation, Feedback, LineItem, Recipe, ScentMixture, TestGuide
from scentlab.utils.logger import logger


RESPONSE_SHAPE = """{
  "recipe": {
    "10ml": [
      { "name": "향료 이름", "amount": "0.xx g", "percentage": xx }
    ],
    "50ml": [
      { "name": "향료 이름", "amount": "0.xx g", "percentage": xx }
    ]
  },
  "testGuide": {
    "instructions": "테스트 방법에 대한 설명",
    "scentMixtures": [
      { "name": "향료1", "ratio": 60 },
      { "name": "향료2", "ratio": 40 }
    ]
  },
  "explanation": {
    "rationale": "배합 이유에 대한 설명",
    "expectedResult": "예상되는 향의 특징",
    "recommendation": "이 향수가 어울리는 상황이나 계절 등 추천 사항"
  }
}"""

DEFAULT_SCENT = "Default Scent"


def _bullet_list(lines: list, empty: str) -> str:
    return "\n".join(lines) if lines else empty


def build_custom_recipe_prompt(feedback: Feedback, perfume_name: Optional[str] = None) -> str:
    """Render the perfumer prompt for ``feedback``.

    Args:
        feedback: Validated feedback.
        perfume_name: Display name of the base profile; falls back to feedback.perfume_name.

    Returns:
        str: Prompt text asking for a JSON recipe in RESPONSE_SHAPE.
    """
    name = perfume_name or feedback.perfume_name or "미지정 향수"
    retention = f"{feedback.retention_percentage:g}"

    categories = _bullet_list(
        [f"- {category.value}: {preference}" for category, preference in feedback.category_preferences.items()],
        "카테고리 선호도 없음",
    )
    characteristics = _bullet_list(
        [f"- {characteristic}: {level}" for characteristic, level in feedback.user_characteristics.items()],
        "특성 조정 없음",
    )
    scents = _bullet_list(
        [
            f"- {'추가' if scent.action == 'add' else '제거'}: {scent.name}"
            + (f" ({scent.description})" if scent.description else "")
            for scent in feedback.specific_scents
        ],
        "특정 향 조정 없음",
    )

    return f"""당신은 전문 조향사입니다. 사용자의 피드백을 바탕으로 커스텀 향수 레시피를 생성해야 합니다.

## 피드백 정보
- 기본 향수: {name} (ID: {feedback.perfume_id or '-'})
- 첫인상: {feedback.impression or '평가 없음'}
- 기존 향 유지 비율: {retention}%

## 향 카테고리 선호도
{categories}

## 향 특성 조정
{characteristics}

## 특정 향 조정
{scents}

## 추가 코멘트
{feedback.notes or '추가 코멘트 없음'}

## 요구사항:
1. 피드백을 바탕으로 10ml와 50ml 용량의 향수에 대한 향료 배합량 레시피를 제안하세요.
   - 10ml 향수: 총 1g의 향료 사용 (향료 비율 유지)
   - 50ml 향수: 총 5g의 향료 사용 (향료 비율 유지)
2. 각 향료의 양은 g 단위로 표시하고, 소수점 둘째 자리까지 정확하게 계산하세요.
3. 향료 알갱이를 사용한 간단한 테스트 방법도 안내해주세요 (예: "MS-1234567와 MS-7654321를 1:2 비율로 섞어보세요").
4. 향의 강도나 지속력에 대한 고려는 제외하고 향 자체에 집중하세요.
5. 기존 향 유지 비율({retention}%)을 고려하여 기존 향의 특성을 해당 비율만큼 유지하세요.

응답은 다음 JSON 형식으로 정확히 반환하세요:
{RESPONSE_SHAPE}
"""


def extract_json_object(response_text: str) -> Optional[dict]:
    """Parse JSON from a model response, handling text before/after the object.

    Returns:
        Parsed dict, or None when no JSON object can be recovered.
    """
    try:
        parsed = json.loads(response_text)
        return parsed if isinstance(parsed, dict) else None
    except json.JSONDecodeError:
        pass

    json_match = re.search(r"\{.*\}", response_text, re.DOTALL)
    if json_match:
        try:
            parsed = json.loads(json_match.group())
            return parsed if isinstance(parsed, dict) else None
        except json.JSONDecodeError:
            pass

    return None


def default_parsed_recipe() -> Recipe:
    return Recipe(
        based_on="Default Recipe",
        recipe_10ml=[LineItem(name=DEFAULT_SCENT, amount="1.00g", percentage=100)],
        recipe_50ml=[LineItem(name=DEFAULT_SCENT, amount="5.00g", percentage=100)],
        description="",
        test_guide=TestGuide(
            instructions="테스트 데이터를 생성하는 중 오류가 발생했습니다.",
            scent_mixtures=[ScentMixture(id="DEFAULT-SCENT", name=DEFAULT_SCENT, count=10, ratio=100)],
        ),
        explanation=Explanation(
            rationale="파싱 오류로 인해 기본 레시피가 생성되었습니다.",
            expected_result="기본 향을 유지합니다.",
            recommendation="원본 향수를 그대로 사용하는 것을 권장합니다.",
        ),
    )


def _mixture(entry: dict) -> ScentMixture:
    """Model mixtures carry name and ratio only; code and granules are derived."""
    ratio = int(round(float(entry["ratio"])))
    return ScentMixture(
        id=entry.get("id") or scent_code(entry["name"]),
        name=entry["name"],
        count=entry.get("count") or granule_count(ratio),
        ratio=ratio,
    )


def parse_custom_recipe_response(response_text: str) -> Recipe:
    """Turn a model reply into a Recipe; any problem yields the default recipe."""
    parsed = extract_json_object(response_text or "")
    if parsed is None:
        logger.warning("Failed to find a JSON object in the model response")
        return default_parsed_recipe()

    missing = [key for key in ("recipe", "testGuide", "explanation") if key not in parsed]
    if missing:
        logger.warning(f"Model response is missing required keys: {missing}")
        return default_parsed_recipe()

    try:
        guide = parsed["testGuide"]
        return Recipe(
            based_on="Custom Perfume Recipe",
            recipe_10ml=[LineItem.model_validate(item) for item in parsed["recipe"]["10ml"]],
            recipe_50ml=[LineItem.model_validate(item) for item in parsed["recipe"]["50ml"]],
            description=parsed.get("description", ""),
            test_guide=TestGuide(
                instructions=guide["instructions"],
                scent_mixtures=[_mixture(entry) for entry in guide.get("scentMixtures", [])],
            ),
            explanation=Explanation.model_validate(parsed["explanation"]),
        )
    except (KeyError, TypeError, ValueError, ValidationError) as e:
        logger.warning(f"Model response does not describe a valid recipe: {e}")
        return default_parsed_recipe()
