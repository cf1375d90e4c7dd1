"""Static lookup tables for the recipe engine.

Every key set here is closed and finite; tables are read-only mappings so a
request can never alter what the next request sees.
"""

from types import MappingProxyType

from scentlab.models.models import Category


# Representative ingredients per category; the base profile id picks one of four.
CATEGORY_SCENTS = MappingProxyType({
    Category.citrus: ("베르가못", "레몬", "라임", "오렌지"),
    Category.floral: ("로즈", "자스민", "튤립", "라벤더"),
    Category.woody: ("샌달우드", "시더우드", "베티버", "파인"),
    Category.musky: ("머스크", "앰버", "바닐라", "통카빈"),
    Category.fruity: ("복숭아", "딸기", "블랙베리", "레드베리"),
    Category.spicy: ("핑크페퍼", "블랙페퍼", "진저", "시나몬"),
})

# (increase ingredient, decrease ingredient) per category
CATEGORY_ADJUSTMENT_SCENTS = MappingProxyType({
    Category.citrus: ("베르가못", "레몬"),
    Category.floral: ("로즈", "자스민"),
    Category.woody: ("샌달우드", "시더우드"),
    Category.musky: ("머스크", "앰버"),
    Category.fruity: ("복숭아", "블랙베리"),
    Category.spicy: ("핑크페퍼", "진저"),
})

INCREASE_WEIGHT = 15.0
DECREASE_WEIGHT = 10.0

# Retained categories claim at most this share of the blend before normalization.
BASE_WEIGHT_CEILING = 70.0
BASE_COMPONENT_COUNT = 3

SPECIFIC_SCENT_CAP = 30.0

# (characteristic, level) -> (ingredient, category, weight); "medium" is a no-op
CHARACTERISTIC_ADJUSTMENTS = MappingProxyType({
    ("weight", "veryLow"): ("베르가못", Category.citrus, 15.0),
    ("weight", "low"): ("시트러스 블렌드", Category.citrus, 10.0),
    ("weight", "high"): ("샌달우드", Category.woody, 10.0),
    ("weight", "veryHigh"): ("앰버 블렌드", Category.musky, 15.0),
    ("sweetness", "veryLow"): ("시더우드", Category.woody, 15.0),
    ("sweetness", "low"): ("우디 블렌드", Category.woody, 10.0),
    ("sweetness", "high"): ("바닐라", Category.musky, 10.0),
    ("sweetness", "veryHigh"): ("허니 블렌드", Category.fruity, 15.0),
    ("freshness", "veryLow"): ("스파이스 블렌드", Category.spicy, 15.0),
    ("freshness", "low"): ("앰버 블렌드", Category.musky, 10.0),
    ("freshness", "high"): ("시트러스 블렌드", Category.citrus, 10.0),
    ("freshness", "veryHigh"): ("민트 블렌드", Category.citrus, 15.0),
    ("uniqueness", "veryLow"): ("앰버", Category.musky, 15.0),
    ("uniqueness", "low"): ("머스크 블렌드", Category.musky, 10.0),
    ("uniqueness", "high"): ("이국적 블렌드", Category.spicy, 10.0),
    ("uniqueness", "veryHigh"): ("스모키 블렌드", Category.woody, 15.0),
})

# Substring keywords used to guess the category of a user-named ingredient.
# Checked in this order; no match means woody.
CATEGORY_KEYWORDS = (
    (Category.citrus, ("레몬", "오렌지", "베르가못", "라임", "자몽", "시트러스",
                       "lemon", "orange", "bergamot", "lime", "grapefruit", "citrus")),
    (Category.floral, ("장미", "로즈", "자스민", "라벤더", "튤립", "꽃", "플로럴",
                       "rose", "jasmine", "lavender", "tulip", "flower", "floral")),
    (Category.woody, ("우디", "샌달우드", "시더", "나무", "흙", "이끼", "파인",
                      "wood", "sandalwood", "cedar", "vetiver", "moss")),
    (Category.musky, ("머스크", "앰버", "바닐라", "통카", "따뜻",
                      "musk", "amber", "vanilla", "tonka")),
    (Category.fruity, ("복숭아", "딸기", "베리", "과일", "망고", "프루티",
                       "peach", "strawberry", "berry", "fruit", "mango")),
    (Category.spicy, ("페퍼", "시나몬", "진저", "카다멈", "스파이시", "후추",
                      "pepper", "cinnamon", "ginger", "cardamom", "spicy")),
)

DEFAULT_CATEGORY = Category.woody
DEFAULT_BLEND_NAME = "기본 블렌드"

CATEGORY_DISPLAY_NAMES = MappingProxyType({
    Category.citrus: "시트러스",
    Category.floral: "플로럴",
    Category.woody: "우디",
    Category.musky: "머스크",
    Category.fruity: "프루티",
    Category.spicy: "스파이시",
})

CATEGORY_DESCRIPTIONS = MappingProxyType({
    Category.citrus: "상쾌하고 활기찬 시트러스 향",
    Category.floral: "우아하고 여성스러운 꽃향기",
    Category.woody: "깊고 따뜻한 나무의 향",
    Category.musky: "포근하고 관능적인 머스크 향",
    Category.fruity: "달콤하고 즙이 많은 과일 향",
    Category.spicy: "자극적이고 강렬한 스파이시 향",
})

CATEGORY_SEASONS = MappingProxyType({
    Category.citrus: ("봄", "여름"),
    Category.floral: ("봄", "여름"),
    Category.woody: ("가을", "겨울"),
    Category.musky: ("가을", "겨울"),
    Category.fruity: ("봄", "여름"),
    Category.spicy: ("가을", "겨울"),
})

CATEGORY_OCCASIONS = MappingProxyType({
    Category.citrus: ("일상적인 활동", "스포츠 활동", "야외 행사"),
    Category.floral: ("데이트", "결혼식", "사교 모임"),
    Category.woody: ("사무실", "비즈니스 미팅", "정장을 입는 자리"),
    Category.musky: ("저녁 약속", "특별한 밤", "로맨틱한 자리"),
    Category.fruity: ("캐주얼한 모임", "쇼핑", "친구와의 만남"),
    Category.spicy: ("중요한 프레젠테이션", "격식 있는 자리", "파티"),
})

# characteristic -> (adjective when high/veryHigh, adjective when low/veryLow)
CHARACTERISTIC_ADJECTIVES = MappingProxyType({
    "weight": ("무게감 있는", "가벼운"),
    "sweetness": ("달콤한", "건조한"),
    "freshness": ("청량한", "따뜻한"),
    "uniqueness": ("독특한", "부드러운"),
})

# Adjectives used in the one-line description for veryHigh / veryLow characteristics
EXTREME_CHARACTERISTIC_ADJECTIVES = MappingProxyType({
    "weight": ("무게감 있는", "가벼운"),
    "sweetness": ("달콤한", "건조한"),
    "freshness": ("청량한", "따뜻한"),
    "uniqueness": ("독특한", "편안한"),
})

BALANCED_ADJECTIVE = "균형 잡힌"

# Order in which characteristics are described in the expected-result sentence
CHARACTERISTIC_ORDER = ("weight", "sweetness", "freshness", "uniqueness")
