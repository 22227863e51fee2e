"""Tests for water ratio / hydration conversions and ingredient roles."""
import math

import pytest

from composition import (
    Ingredient,
    IngredientCategory,
    IngredientKind,
    Roles,
    classify,
    hydration_to_water_ratio,
    water_ratio_to_hydration,
)


@pytest.mark.parametrize("water_ratio,hydration", [
    (1 / 3, 0.5),   # stiff starter
    (0.5, 1.0),     # standard starter
    (5 / 6, 5.0),   # liquid starter
    (0.0, 0.0),
])
def test_water_ratio_to_hydration(water_ratio, hydration):
    assert water_ratio_to_hydration(water_ratio) == pytest.approx(hydration, rel=1e-3)


@pytest.mark.parametrize("water_ratio,hydration", [
    (1 / 3, 0.5),
    (0.5, 1.0),
    (5 / 6, 5.0),
    (0.0, 0.0),
])
def test_hydration_to_water_ratio(water_ratio, hydration):
    assert hydration_to_water_ratio(hydration) == pytest.approx(water_ratio, rel=1e-3)


def test_pure_water_has_infinite_hydration():
    assert water_ratio_to_hydration(1.0) == math.inf


@pytest.mark.parametrize("hydration", [-0.01, -5.0, math.inf])
def test_hydration_out_of_domain_fails_loudly(hydration):
    with pytest.raises(AssertionError):
        hydration_to_water_ratio(hydration)


@pytest.mark.parametrize("water_ratio", [-0.01, 1.01])
def test_water_ratio_out_of_domain_fails_loudly(water_ratio):
    with pytest.raises(AssertionError):
        water_ratio_to_hydration(water_ratio)


@pytest.mark.parametrize("water_ratio", [0.0, 0.05, 0.25, 0.5, 0.75, 0.9, 0.999])
def test_water_ratio_round_trip(water_ratio):
    back = hydration_to_water_ratio(water_ratio_to_hydration(water_ratio))
    assert back == pytest.approx(water_ratio, rel=1e-3)


@pytest.mark.parametrize("hydration", [0.0, 0.1, 0.65, 1.0, 3.0, 250.0])
def test_hydration_round_trip(hydration):
    back = water_ratio_to_hydration(hydration_to_water_ratio(hydration))
    assert back == pytest.approx(hydration, rel=1e-3)


def test_flour_roles(white_flour):
    assert white_flour.has_flour
    assert white_flour.flour_ratio == 1.0
    assert not white_flour.has_water
    assert not white_flour.has_salt
    assert not white_flour.is_leavener


def test_starter_counts_as_flour_and_leavener(starter):
    assert starter.water == pytest.approx(1 / 3)
    assert starter.hydration() == pytest.approx(0.5)
    assert classify(starter) == Roles(flour=True, water=True, salt=False, leavener=True)
    assert starter.flour_ratio == pytest.approx(2 / 3)


def test_yeast_is_leavener_without_flour():
    yeast = Ingredient("Fresh yeast", IngredientCategory.LEAVENER, IngredientKind.FRESH_YEAST, water=0.7)
    roles = classify(yeast)
    assert roles.leavener and roles.water
    assert not roles.flour
    assert yeast.flour_ratio == 0.0


def test_tiny_ratios_are_absent():
    flour = Ingredient("Rye", IngredientCategory.FLOUR, IngredientKind.WHITE_RYE_FLOUR,
                       water=0.001, salt=0.0005)
    assert not flour.has_water
    assert not flour.has_salt


def test_ingredient_accepts_raw_strings():
    milk = Ingredient("Milk", "liquid", "milk", water=0.9, fat=0.035)
    assert milk.category is IngredientCategory.LIQUID
    assert milk.kind is IngredientKind.MILK


def test_kind_must_belong_to_category():
    with pytest.raises(ValueError, match="not a flour kind"):
        Ingredient("Butter flour", IngredientCategory.FLOUR, IngredientKind.BUTTER)


@pytest.mark.parametrize("field", ["proteins", "ash", "water", "sugar", "salt", "fat"])
def test_ratio_out_of_range(field):
    with pytest.raises(ValueError, match=field):
        Ingredient("Odd", IngredientCategory.MIXED, IngredientKind.OTHER, **{field: 1.5})


def test_ratios_are_not_checked_for_sum():
    # catalog data is trusted
    odd = Ingredient("Odd", IngredientCategory.MIXED, IngredientKind.EGGS, water=0.8, fat=0.8)
    assert odd.water + odd.fat > 1


def test_category_kinds():
    assert IngredientKind.SOURDOUGH_STARTER in IngredientCategory.LEAVENER.kinds()
    assert IngredientKind.OTHER not in IngredientCategory.LEAVENER.kinds()
    assert IngredientCategory.NUTS.kinds() == (IngredientKind.OTHER,)


def test_ids_are_unique(white_flour, gluten_powder):
    assert white_flour.id != gluten_powder.id
