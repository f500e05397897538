"""
Sexagenary cycle (六十甲子) tables.

Handles:
- The 10 Heavenly Stems and 12 Earthly Branches with their fixed tags
- Pillar (stem + branch) records with parity checking
- The 60-term cycle: index -> pillar and pillar -> index

A pillar's sexagenary index is its canonical identity:
stem = index % 10, branch = index % 12. Only pairs whose stem and
branch indices share parity exist in the cycle.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


# ============================================================
# FUNDAMENTAL DATA STRUCTURES
# ============================================================

class Polarity(Enum):
    YANG = "yang"
    YIN = "yin"


class Element(Enum):
    WOOD = "wood"
    FIRE = "fire"
    EARTH = "earth"
    METAL = "metal"
    WATER = "water"


@dataclass(frozen=True)
class HeavenlyStem:
    chinese: str
    pinyin: str
    element: Element
    polarity: Polarity
    index: int  # 0-9 in the cycle

    def __str__(self):
        return self.chinese


@dataclass(frozen=True)
class EarthlyBranch:
    chinese: str
    pinyin: str
    animal: str
    element: Element  # primary/season element
    polarity: Polarity
    index: int  # 0-11 in the cycle

    def __str__(self):
        return self.chinese

    @property
    def hour_window(self) -> tuple[int, int]:
        """Local clock hours [start, end) covered by this branch. Zi wraps midnight."""
        return (2 * self.index - 1) % 24, (2 * self.index + 1) % 24


@dataclass(frozen=True)
class Pillar:
    stem: HeavenlyStem
    branch: EarthlyBranch

    def __post_init__(self):
        if self.stem.index % 2 != self.branch.index % 2:
            raise ValueError(
                f"{self.stem.chinese}{self.branch.chinese} is not in the sexagenary cycle "
                f"(stem and branch parity differ)"
            )

    def __str__(self):
        return f"{self.stem.chinese}{self.branch.chinese}"

    @property
    def index(self) -> int:
        """Position of this pillar in the 60-term cycle."""
        # stem and branch share parity, so 6*stem - 5*branch lands on the CRT solution
        return (6 * self.stem.index - 5 * self.branch.index) % 60

    def to_dict(self):
        return {
            "pillar": str(self),
            "index": self.index,
            "stem": {
                "chinese": self.stem.chinese,
                "pinyin": self.stem.pinyin,
                "element": self.stem.element.value,
                "polarity": self.stem.polarity.value,
            },
            "branch": {
                "chinese": self.branch.chinese,
                "pinyin": self.branch.pinyin,
                "animal": self.branch.animal,
                "element": self.branch.element.value,
                "polarity": self.branch.polarity.value,
            },
            "description": f"{self.stem.pinyin} {self.branch.pinyin} "
                           f"({self.stem.polarity.value} {self.stem.element.value} {self.branch.animal})",
        }


# ============================================================
# STEM AND BRANCH DEFINITIONS
# ============================================================

HEAVENLY_STEMS = (
    HeavenlyStem("甲", "Jia", Element.WOOD, Polarity.YANG, 0),
    HeavenlyStem("乙", "Yi", Element.WOOD, Polarity.YIN, 1),
    HeavenlyStem("丙", "Bing", Element.FIRE, Polarity.YANG, 2),
    HeavenlyStem("丁", "Ding", Element.FIRE, Polarity.YIN, 3),
    HeavenlyStem("戊", "Wu", Element.EARTH, Polarity.YANG, 4),
    HeavenlyStem("己", "Ji", Element.EARTH, Polarity.YIN, 5),
    HeavenlyStem("庚", "Geng", Element.METAL, Polarity.YANG, 6),
    HeavenlyStem("辛", "Xin", Element.METAL, Polarity.YIN, 7),
    HeavenlyStem("壬", "Ren", Element.WATER, Polarity.YANG, 8),
    HeavenlyStem("癸", "Gui", Element.WATER, Polarity.YIN, 9),
)

EARTHLY_BRANCHES = (
    EarthlyBranch("子", "Zi", "Rat", Element.WATER, Polarity.YANG, 0),
    EarthlyBranch("丑", "Chou", "Ox", Element.EARTH, Polarity.YIN, 1),
    EarthlyBranch("寅", "Yin", "Tiger", Element.WOOD, Polarity.YANG, 2),
    EarthlyBranch("卯", "Mao", "Rabbit", Element.WOOD, Polarity.YIN, 3),
    EarthlyBranch("辰", "Chen", "Dragon", Element.EARTH, Polarity.YANG, 4),
    EarthlyBranch("巳", "Si", "Snake", Element.FIRE, Polarity.YIN, 5),
    EarthlyBranch("午", "Wu", "Horse", Element.FIRE, Polarity.YANG, 6),
    EarthlyBranch("未", "Wei", "Goat", Element.EARTH, Polarity.YIN, 7),
    EarthlyBranch("申", "Shen", "Monkey", Element.METAL, Polarity.YANG, 8),
    EarthlyBranch("酉", "You", "Rooster", Element.METAL, Polarity.YIN, 9),
    EarthlyBranch("戌", "Xu", "Dog", Element.EARTH, Polarity.YANG, 10),
    EarthlyBranch("亥", "Hai", "Pig", Element.WATER, Polarity.YIN, 11),
)

# Lookup helpers
STEM_BY_CHINESE = {s.chinese: s for s in HEAVENLY_STEMS}
BRANCH_BY_CHINESE = {b.chinese: b for b in EARTHLY_BRANCHES}


# ============================================================
# THE SIXTY-TERM CYCLE
# ============================================================

SIXTY_JIAZI = tuple(
    Pillar(HEAVENLY_STEMS[i % 10], EARTHLY_BRANCHES[i % 12]) for i in range(60)
)

_INDEX_BY_NAME = {str(p): i for i, p in enumerate(SIXTY_JIAZI)}


def pillar_at(index: int) -> Pillar:
    """Return the pillar at position ``index`` (0-59) of the cycle."""
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < 60:
        raise ValueError(f"Sexagenary index must be an integer in [0, 60), got {index!r}")
    return SIXTY_JIAZI[index]


def index_of(pillar: Union[Pillar, str]) -> int:
    """
    Reverse lookup of a pillar in the cycle.

    Args:
        pillar: a Pillar, or its two-character rendering such as "甲子"

    Returns:
        The sexagenary index (0-59)
    """
    if isinstance(pillar, Pillar):
        return pillar.index
    try:
        return _INDEX_BY_NAME[pillar]
    except (KeyError, TypeError):
        raise ValueError(f"Not a sexagenary pillar: {pillar!r}") from None


def parse_pillar(name: str) -> Pillar:
    """Parse a two-character pillar such as "庚辰"."""
    return SIXTY_JIAZI[index_of(name)]


def as_stem(stem: Union[HeavenlyStem, str]) -> HeavenlyStem:
    """Accept a HeavenlyStem or its character such as "甲"."""
    if isinstance(stem, HeavenlyStem):
        return stem
    try:
        return STEM_BY_CHINESE[stem]
    except (KeyError, TypeError):
        raise ValueError(f"Not a heavenly stem: {stem!r}") from None


def shift(pillar: Pillar, steps: int) -> Pillar:
    """Walk ``steps`` positions along the cycle (negative walks backward)."""
    return SIXTY_JIAZI[(pillar.index + steps) % 60]
