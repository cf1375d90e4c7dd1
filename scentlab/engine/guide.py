"""Test guide generation: a granule sampling protocol for the proposed blend.

The guide is derived from the normalized components (not the gram recipe):

1. Prepend the base profile itself unless a component already carries its name.
2. Insert each requested ``add`` scent, or overwrite the ratio of a matching one.
3. Keep the three largest ratios and renormalize them to 100.
4. Convert each share into 1-10 granules and a short scent code.
"""

from typing import List, Optional

from scentlab.engine import tables
from scentlab.engine.calculator import round_half_up
from scentlab.models.models import BaseProfile, Feedback, ScentComponent, ScentMixture, TestGuide
from scentlab.utils.logger import logger


MAX_GUIDE_SCENTS = 3
MIN_GRANULES = 1
MAX_GRANULES = 10
BASE_PROFILE_SHARE = 50.0
DEFAULT_SPECIFIC_RATIO = 50.0
UNKNOWN_CODE = "UNKNOWN-ID"


def canonical_name(name: str) -> str:
    """Case-insensitive, whitespace-trimmed form used to compare ingredient names."""
    return name.strip().casefold()


def names_match(left: str, right: str) -> bool:
    return left == right or canonical_name(left) == canonical_name(right)


def scent_code(name: str) -> str:
    """Short code printed on the granule jar for an ingredient.

    Names that already look like catalog codes (``BK-2201``) are kept, upper-cased.
    Anything else gets ``SC-`` plus a four-digit position-weighted checksum of
    its canonical name.
    """
    stripped = name.strip()
    if not stripped:
        return UNKNOWN_CODE
    if "-" in stripped:
        return stripped.upper()
    checksum = sum((index + 1) * ord(char) for index, char in enumerate(canonical_name(stripped)))
    return f"SC-{checksum % 10000:04d}"


def granule_count(ratio: int) -> int:
    """Granules for a share of the guide, always between 1 and 10."""
    return max(MIN_GRANULES, min(MAX_GRANULES, round_half_up(ratio / 10)))


def _candidate_scents(
    components: List[ScentComponent],
    feedback: Feedback,
    profile: Optional[BaseProfile],
) -> List[ScentComponent]:
    selected = list(components)

    if profile is not None and not any(component.name == profile.name for component in selected):
        selected.insert(
            0,
            ScentComponent(
                name=profile.name,
                ratio=BASE_PROFILE_SHARE * feedback.retention_percentage / 100,
                category=tables.DEFAULT_CATEGORY,
            ),
        )

    for scent in feedback.added_scents():
        index = next(
            (i for i, component in enumerate(selected) if names_match(component.name, scent.name)),
            None,
        )
        if index is None:
            selected.append(
                ScentComponent(
                    name=scent.name,
                    ratio=scent.ratio or DEFAULT_SPECIFIC_RATIO,
                    category=scent.category or tables.DEFAULT_CATEGORY,
                )
            )
        elif scent.ratio:
            selected[index] = selected[index].model_copy(update={"ratio": scent.ratio})

    return selected


def build_instructions(mixtures: List[ScentMixture]) -> str:
    """Single formatted block listing granules per code and the share breakdown."""
    granules = ", ".join(f"{mixture.id} {mixture.count}알" for mixture in mixtures)
    ratios = ", ".join(f"{mixture.name} ({mixture.id}) {mixture.ratio}%" for mixture in mixtures)
    return (
        "다음과 같이 향료 알갱이를 준비하여 시향해보세요:\n"
        f"{granules}\n"
        "\n"
        "알갱이들을 작은 용기에 함께 넣고 섞어서 완성된 향의 조합을 경험해보세요.\n"
        f"각 향료의 비율은 {ratios} 입니다.\n"
        "\n"
        "이 테스팅 레시피는 향수 제작 전 시향(향 테스트)을 위한 것입니다."
    )


def generate_test_guide(
    components: List[ScentComponent],
    feedback: Feedback,
    profile: Optional[BaseProfile] = None,
) -> TestGuide:
    """Build the sampling protocol from normalized components.

    Args:
        components: Normalized components of the recipe.
        feedback: Feedback the recipe was generated from.
        profile: Base profile; when given it is sampled alongside the blend.

    Returns:
        TestGuide with at most three mixtures whose ratios sum to 100 (+/- 1).
    """
    candidates = _candidate_scents(components, feedback, profile)
    top = sorted(candidates, key=lambda component: component.ratio, reverse=True)[:MAX_GUIDE_SCENTS]
    total = sum(component.ratio for component in top)

    mixtures = []
    for component in top:
        ratio = round_half_up(component.ratio / total * 100)
        mixtures.append(
            ScentMixture(
                id=scent_code(component.name),
                name=component.name,
                count=granule_count(ratio),
                ratio=ratio,
            )
        )

    logger.debug(f"Test guide: {[(m.id, m.count, m.ratio) for m in mixtures]}")
    return TestGuide(instructions=build_instructions(mixtures), scent_mixtures=mixtures)
