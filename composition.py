import math
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Tuple

from config import CONFIG

# ====================================================================
# Water ratio <-> hydration
#
#   a = water content, b = everything else
#   water ratio  w = a / (a + b)
#   hydration    h = a / b
#
#   1/w = 1 + 1/h  =>  w = h / (h + 1)  and  h = w / (1 - w)
# ====================================================================

def hydration_to_water_ratio(hydration: float) -> float:
    assert hydration >= 0, f"hydration must be >= 0, got {hydration}"
    assert hydration != math.inf, "infinite hydration (pure water) is not supported"
    water_ratio = hydration / (hydration + 1.0)
    assert 0.0 <= water_ratio <= 1.0
    return water_ratio

def water_ratio_to_hydration(water_ratio: float) -> float:
    """Inverse of hydration_to_water_ratio. A water ratio of 1 gives +inf."""
    assert water_ratio >= 0, f"water ratio must be >= 0, got {water_ratio}"
    assert water_ratio <= 1, f"water ratio must be <= 1, got {water_ratio}"
    if water_ratio == 1.0:
        return math.inf
    return water_ratio / (1.0 - water_ratio)


class IngredientKind(str, Enum):
    # Flours
    WHITE_FLOUR_UNBLEACHED = "white_flour_unbleached"
    WHITE_FLOUR_BLEACHED = "white_flour_bleached"
    WHOLE_WHEAT_FLOUR = "whole_wheat_flour"
    WHITE_RYE_FLOUR = "white_rye_flour"
    MEDIUM_RYE_FLOUR = "medium_rye_flour"
    DARK_RYE_FLOUR = "dark_rye_flour"
    PUMPERNICKEL_FLOUR = "pumpernickel_flour"
    GLUTEN_POWDER = "gluten_powder"  # over 70% protein, boosts weak flours
    # Leaveners
    SOURDOUGH_STARTER = "sourdough_starter"
    ACTIVE_DRY_YEAST = "active_dry_yeast"
    INSTANT_DRY_YEAST = "instant_dry_yeast"
    FRESH_YEAST = "fresh_yeast"
    BEER = "beer"
    # Liquids
    WATER = "water"
    MILK = "milk"
    JUICE = "juice"
    BROTH = "broth"
    # Fats
    SHORTENING = "shortening"
    BUTTER = "butter"
    MARGARINE = "margarine"
    REDUCED_FAT_SUBSTITUTE = "reduced_fat_substitute"
    OIL = "oil"
    # Salts
    TABLE_SALT = "table_salt"
    MISO_PASTE = "miso_paste"
    DASHI_POWDER = "dashi_powder"
    # Mixed
    EGGS = "eggs"

    OTHER = "other"


class IngredientCategory(str, Enum):
    FLOUR = "flour"
    LEAVENER = "leavener"
    LIQUID = "liquid"
    FAT = "fat"
    NUTS = "nuts"
    SEEDS = "seeds"
    SALT = "salt"
    MIXED = "mixed"

    def kinds(self) -> Tuple[IngredientKind, ...]:
        return CATEGORY_KINDS[self]


K = IngredientKind
CATEGORY_KINDS = {
    IngredientCategory.FLOUR: (
        K.WHITE_FLOUR_UNBLEACHED, K.WHITE_FLOUR_BLEACHED, K.WHOLE_WHEAT_FLOUR,
        K.WHITE_RYE_FLOUR, K.MEDIUM_RYE_FLOUR, K.DARK_RYE_FLOUR,
        K.PUMPERNICKEL_FLOUR, K.GLUTEN_POWDER, K.OTHER,
    ),
    IngredientCategory.LEAVENER: (
        K.SOURDOUGH_STARTER, K.ACTIVE_DRY_YEAST, K.INSTANT_DRY_YEAST,
        K.FRESH_YEAST, K.BEER,
    ),
    IngredientCategory.LIQUID: (K.WATER, K.MILK, K.JUICE, K.BROTH, K.OTHER),
    IngredientCategory.FAT: (
        K.SHORTENING, K.BUTTER, K.MARGARINE, K.REDUCED_FAT_SUBSTITUTE, K.OIL, K.OTHER,
    ),
    IngredientCategory.NUTS: (K.OTHER,),
    IngredientCategory.SEEDS: (K.OTHER,),
    IngredientCategory.SALT: (K.TABLE_SALT, K.MISO_PASTE, K.DASHI_POWDER, K.OTHER),
    IngredientCategory.MIXED: (K.EGGS, K.OTHER),
}
del K

RATIO_FIELDS = ("proteins", "ash", "water", "sugar", "salt", "fat")


def new_ingredient_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Ingredient:
    """
    Catalog ingredient. Every composition field is a ratio of the
    ingredient's own total mass (water is the water ratio, not hydration).
    """
    name: str
    category: IngredientCategory
    kind: IngredientKind
    proteins: float = 0.0
    ash: float = 0.0      # mineral content, how much bran and germ is left
    water: float = 0.0
    sugar: float = 0.0
    salt: float = 0.0
    fat: float = 0.0
    id: str = field(default_factory=new_ingredient_id)
    brand: Optional[str] = None
    notes: Optional[str] = None
    reference: Optional[str] = None

    def __post_init__(self):
        # accept raw strings from CSV/JSON rows
        object.__setattr__(self, "category", IngredientCategory(self.category))
        object.__setattr__(self, "kind", IngredientKind(self.kind))
        if self.kind not in self.category.kinds():
            raise ValueError(
                f"{self.name}: kind '{self.kind.value}' is not a {self.category.value} kind"
            )
        for name in RATIO_FIELDS:
            value = float(getattr(self, name))
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{self.name}: {name} ratio must be within [0, 1], got {value}")
            object.__setattr__(self, name, value)

    @classmethod
    def from_hydration(cls, name: str, category, kind, hydration: float, **ratios) -> "Ingredient":
        """Build an ingredient described by its hydration, e.g. a 100% starter."""
        return cls(name, category, kind, water=hydration_to_water_ratio(hydration), **ratios)

    def hydration(self) -> float:
        return water_ratio_to_hydration(self.water)

    @property
    def has_flour(self) -> bool:
        return (self.category == IngredientCategory.FLOUR
                or self.kind == IngredientKind.SOURDOUGH_STARTER)

    @property
    def flour_ratio(self) -> float:
        return 1.0 - self.water if self.has_flour else 0.0

    @property
    def has_water(self) -> bool:
        return self.water > CONFIG["not_zero_threshold"]

    @property
    def has_salt(self) -> bool:
        return self.salt > CONFIG["not_zero_threshold"]

    @property
    def is_leavener(self) -> bool:
        return self.category == IngredientCategory.LEAVENER


class Roles(NamedTuple):
    flour: bool
    water: bool
    salt: bool
    leavener: bool


def classify(ingredient: Ingredient) -> Roles:
    return Roles(
        flour=ingredient.has_flour,
        water=ingredient.has_water,
        salt=ingredient.has_salt,
        leavener=ingredient.is_leavener,
    )
