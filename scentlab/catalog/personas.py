"""Persona catalog: the pre-loaded base profiles customers can customize.

The built-in catalog ships with the package; ``CATALOG_PATH`` points at a JSON
file (``{"personas": [...]}``) that replaces it. Lookups by unknown id raise
PersonaNotFoundError before the recipe engine is ever invoked.
"""

import json
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from pydantic import ValidationError

from scentlab.models.models import AvailableScent, BaseProfile, Category
from scentlab.utils.config import config
from scentlab.utils.logger import logger


class PersonaNotFoundError(LookupError):
    """Raised when a perfume id does not resolve to a catalog persona."""

    def __init__(self, perfume_id: str) -> None:
        super().__init__(f"Perfume not found: {perfume_id}")
        self.perfume_id = perfume_id


BUILTIN_PERSONAS = (
    {
        "id": "BK-2201",
        "name": "블랙베리",
        "description": "블랙베리와 월계수 잎, 베티버가 어우러진 신비롭고 깊이 있는 향으로 도회적인 카리스마를 표현합니다.",
        "categoryScores": {"citrus": 2, "floral": 3, "woody": 7, "musky": 5, "fruity": 8, "spicy": 4},
    },
    {
        "id": "MD-8675",
        "name": "만다린 오렌지",
        "description": "만다린 오렌지와 그레이프프루트의 상큼함에 화이트 머스크를 더한 밝고 자유로운 향입니다.",
        "categoryScores": {"citrus": 9, "floral": 4, "woody": 3, "musky": 4, "fruity": 6, "spicy": 2},
    },
    {
        "id": "RS-9438",
        "name": "로즈 가든",
        "description": "갓 피어난 장미와 피오니가 어우러진 우아하고 로맨틱한 향으로 순수한 매력을 담았습니다.",
        "categoryScores": {"citrus": 3, "floral": 9, "woody": 2, "musky": 5, "fruity": 4, "spicy": 2},
    },
    {
        "id": "SD-5173",
        "name": "샌달우드 나이트",
        "description": "샌달우드와 시더우드, 앰버가 만드는 따뜻하고 관능적인 잔향으로 깊은 밤의 분위기를 표현합니다.",
        "categoryScores": {"citrus": 1, "floral": 2, "woody": 9, "musky": 7, "fruity": 1, "spicy": 5},
    },
    {
        "id": "PP-3326",
        "name": "핑크페퍼",
        "description": "핑크페퍼와 카다멈의 스파이시함에 라벤더를 더해 독특하고 대담한 개성을 드러내는 향입니다.",
        "categoryScores": {"citrus": 4, "floral": 3, "woody": 5, "musky": 3, "fruity": 2, "spicy": 9},
    },
    {
        "id": "VN-7740",
        "name": "바닐라 머스크",
        "description": "바닐라와 통카빈, 화이트 머스크가 포근하게 감싸는 달콤하고 사랑스러운 향입니다.",
        "categoryScores": {"citrus": 2, "floral": 4, "woody": 3, "musky": 9, "fruity": 5, "spicy": 3},
    },
)


def _summary(description: str, length: int = 50) -> str:
    return description[:length] + "..."


class PersonaCatalog:
    """Read-only collection of base profiles keyed by string id."""

    def __init__(self, personas: List[BaseProfile]) -> None:
        self._personas: Dict[str, BaseProfile] = {}
        for persona in personas:
            if persona.id in self._personas:
                logger.warning(f"Duplicate persona id in catalog, keeping first: {persona.id}")
                continue
            self._personas[persona.id] = persona

    @classmethod
    def from_records(cls, records: List[dict]) -> "PersonaCatalog":
        return cls([BaseProfile.model_validate(record) for record in records])

    @classmethod
    def from_file(cls, path: str | Path) -> "PersonaCatalog":
        """Load a catalog from a JSON file with a top-level ``personas`` list.

        Raises:
            ValueError: If the file cannot be read or does not hold a valid persona list.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Cannot read persona catalog {path}: {e}") from e

        records = data.get("personas") if isinstance(data, dict) else None
        if not isinstance(records, list):
            raise ValueError(f"Persona catalog {path} has no 'personas' list")

        try:
            catalog = cls.from_records(records)
        except ValidationError as e:
            raise ValueError(f"Invalid persona in catalog {path}: {e}") from e

        logger.info(f"Loaded {len(catalog)} personas from {path}")
        return catalog

    def __len__(self) -> int:
        return len(self._personas)

    def __iter__(self) -> Iterator[BaseProfile]:
        return iter(self._personas.values())

    def __contains__(self, perfume_id: object) -> bool:
        return perfume_id in self._personas

    def get(self, perfume_id: str) -> BaseProfile:
        """Resolve a perfume id.

        Raises:
            PersonaNotFoundError: If the id is not in the catalog.
        """
        try:
            return self._personas[perfume_id]
        except KeyError:
            raise PersonaNotFoundError(perfume_id) from None

    def available_scents(self) -> List[AvailableScent]:
        """Every persona offered as a specific scent, tagged with its strongest category."""
        scents = []
        for persona in self:
            category = Category.woody
            highest = 0.0
            for candidate, score in persona.category_scores.items():
                if score > highest:
                    highest = score
                    category = candidate
            scents.append(
                AvailableScent(
                    id=persona.id,
                    name=persona.name,
                    category=category,
                    description=_summary(persona.description),
                )
            )
        return scents


_default_catalog: Optional[PersonaCatalog] = None


def get_catalog() -> PersonaCatalog:
    """Process-wide catalog, loaded once from CATALOG_PATH or the built-in personas."""
    global _default_catalog
    if _default_catalog is None:
        if config.CATALOG_PATH:
            _default_catalog = PersonaCatalog.from_file(config.CATALOG_PATH)
        else:
            _default_catalog = PersonaCatalog.from_records(list(BUILTIN_PERSONAS))
    return _default_catalog
