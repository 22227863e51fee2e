"""
Pytest configuration and shared ingredient fixtures.
"""
import sys
from pathlib import Path

import pytest

# Add repo root to path for imports
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from composition import Ingredient, IngredientCategory, IngredientKind  # noqa: E402
from config import CONFIG  # noqa: E402


@pytest.fixture
def white_flour():
    return Ingredient("White flour", IngredientCategory.FLOUR,
                      IngredientKind.WHITE_FLOUR_UNBLEACHED, proteins=0.12)


@pytest.fixture
def gluten_powder():
    return Ingredient("Gluten powder", IngredientCategory.FLOUR,
                      IngredientKind.GLUTEN_POWDER, proteins=0.75)


@pytest.fixture
def starter():
    return Ingredient.from_hydration("Starter", IngredientCategory.LEAVENER,
                                     IngredientKind.SOURDOUGH_STARTER, hydration=0.5, proteins=0.08)


@pytest.fixture
def tap_water():
    return Ingredient("Tap water", IngredientCategory.LIQUID, IngredientKind.WATER, water=1.0)


@pytest.fixture
def table_salt():
    return Ingredient("Table salt", IngredientCategory.SALT, IngredientKind.TABLE_SALT, salt=1.0)


@pytest.fixture
def restore_config():
    """Undo CONFIG tweaks made by a test."""
    saved = dict(CONFIG)
    yield CONFIG
    CONFIG.clear()
    CONFIG.update(saved)
