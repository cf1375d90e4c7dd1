"""Data models for the fragrance recipe engine.

Defines Pydantic models for the customization request (base profile + feedback),
the components flowing through the recipe pipeline, and the recipe record returned
to the web application. All models use Pydantic v2; field names are snake_case in
Python and camelCase on the wire (e.g. ``retentionPercentage``, ``recipe10ml``).
"""

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from scentlab.utils.config import config


class Category(str, Enum):
    """Closed set of olfactory families scored on every base profile."""

    citrus = "citrus"
    floral = "floral"
    woody = "woody"
    musky = "musky"
    fruity = "fruity"
    spicy = "spicy"

    @property
    def opposite(self) -> "Category":
        """Antagonist family boosted when the user asks to decrease this one."""
        return _OPPOSITES[self]


_OPPOSITES = {
    Category.citrus: Category.woody,
    Category.woody: Category.citrus,
    Category.floral: Category.spicy,
    Category.spicy: Category.floral,
    Category.musky: Category.fruity,
    Category.fruity: Category.musky,
}

CategoryPreference = Literal["increase", "decrease", "maintain"]
Characteristic = Literal["weight", "sweetness", "freshness", "uniqueness"]
CharacteristicLevel = Literal["veryLow", "low", "medium", "high", "veryHigh"]


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class BaseProfile(CamelModel):
    """Pre-defined fragrance (persona) being customized."""

    model_config = ConfigDict(frozen=True)

    id: Annotated[str, Field(min_length=1, description="Catalog identifier, e.g. BK-2201")]
    name: Annotated[str, Field(min_length=1, description="Display name of the fragrance")]
    category_scores: Annotated[
        Dict[Category, float],
        Field(default_factory=dict, description="Score per category (0-10), iteration order breaks ties"),
    ]
    description: Annotated[str, Field("", description="Persona description shown in the catalog")]

    @field_validator("category_scores")
    @classmethod
    def validate_scores(cls, v: Dict[Category, float]) -> Dict[Category, float]:
        """Each category score must lie within 0-10."""
        for category, score in v.items():
            if not (0 <= score <= 10):
                raise ValueError(f"Category score must be between 0 and 10, got {score} for {category.value}")
        return v


class SpecificScent(CamelModel):
    """A named ingredient the user explicitly asked to add or remove."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: Annotated[str, Field(min_length=1, max_length=100)]
    action: Optional[Literal["add", "remove"]] = None
    ratio: Annotated[Optional[float], Field(None, ge=0, le=100, description="Requested share (0-100)")]
    category: Optional[Category] = None
    description: Optional[str] = None


class Feedback(CamelModel):
    """Structured user feedback on a base profile."""

    model_config = ConfigDict(frozen=True)

    perfume_id: Optional[str] = None
    perfume_name: Optional[str] = None
    impression: Optional[str] = None
    retention_percentage: Annotated[
        float,
        Field(
            default_factory=lambda: config.DEFAULT_RETENTION_PERCENTAGE,
            ge=0,
            le=100,
            description="How much of the base profile to preserve (0-100)",
        ),
    ]
    category_preferences: Annotated[Dict[Category, CategoryPreference], Field(default_factory=dict)]
    user_characteristics: Annotated[Dict[Characteristic, CharacteristicLevel], Field(default_factory=dict)]
    specific_scents: Annotated[List[SpecificScent], Field(default_factory=list)]
    notes: Optional[str] = None

    def added_scents(self) -> List[SpecificScent]:
        """Specific scents whose action is ``add``, in request order."""
        return [scent for scent in self.specific_scents if scent.action == "add"]


class ScentComponent(CamelModel):
    """Unit flowing through the pipeline.

    ``ratio`` is a relative weight before normalization and a percentage after it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    ratio: Annotated[float, Field(ge=0)]
    category: Category


class LineItem(CamelModel):
    """One ingredient's mass and share in a finished-size recipe."""

    name: str
    amount: Annotated[str, Field(description="Formatted mass, e.g. 0.35g")]
    percentage: Annotated[int, Field(ge=0, le=100)]


class ScentMixture(CamelModel):
    """One ingredient of the granule sampling protocol."""

    id: Annotated[str, Field(description="Short scent code used in the instructions")]
    name: str
    count: Annotated[int, Field(ge=1, le=10, description="Number of granules")]
    ratio: Annotated[int, Field(ge=0, le=100)]


class TestGuide(CamelModel):
    """Sampling protocol: at most three ingredients, 1-10 granules each."""

    __test__ = False

    instructions: str
    scent_mixtures: Annotated[List[ScentMixture], Field(default_factory=list, max_length=3)]


class Explanation(CamelModel):
    """Templated rationale for a recipe."""

    rationale: str
    expected_result: str
    recommendation: str


class Recipe(CamelModel):
    """Customized recipe returned to the web application."""

    based_on: str
    recipe_10ml: Annotated[List[LineItem], Field(alias="recipe10ml")]
    recipe_50ml: Annotated[List[LineItem], Field(alias="recipe50ml")]
    description: str
    test_guide: TestGuide
    explanation: Explanation


class AvailableScent(CamelModel):
    """Catalog entry offered to the user as a specific scent to add."""

    id: str
    name: str
    category: Category
    description: str


class AdjustmentFeedback(CamelModel):
    """Quick five-point feedback on a base profile (3 = keep as is)."""

    perfume_id: Annotated[str, Field(min_length=1)]
    retention_percentage: Annotated[
        int, Field(default_factory=lambda: config.DEFAULT_RETENTION_PERCENTAGE, ge=0, le=100)
    ]
    intensity: Annotated[int, Field(3, ge=1, le=5)]
    sweetness: Annotated[int, Field(3, ge=1, le=5)]
    bitterness: Annotated[int, Field(3, ge=1, le=5)]
    sourness: Annotated[int, Field(3, ge=1, le=5)]
    freshness: Annotated[int, Field(3, ge=1, le=5)]
    notes: str = ""


class NoteAdjustment(CamelModel):
    """A single change applied on top of the retained base."""

    type: Literal["base", "increase", "reduce"]
    note_id: Optional[str] = None
    note_name: Optional[str] = None
    description: str
    amount: str


class AdjustmentRecommendation(CamelModel):
    """Adjustment plan derived from quick feedback."""

    perfume_id: str
    perfume_name: str
    base_retention: int
    base_amount: str
    adjustments: List[NoteAdjustment]
    total_adjustments: int
    explanation: str
