import math
from typing import Iterable, List

import pandas as pd

from composition import Ingredient, hydration_to_water_ratio, new_ingredient_id
from config import CONFIG

# ====================================================================

OPTIONAL_TEXT_COLUMNS = ["brand", "notes", "reference"]

def normalize_token(s: str) -> str:
    return str(s).strip().lower().replace(" ", "_")

def _text_or_none(value):
    if pd.isna(value) or str(value).strip() == "":
        return None
    return str(value).strip()

def load_ingredients(csv_path: str) -> List[Ingredient]:
    """
    Read an ingredient table. Ratio columns are fractions of the
    ingredient's mass; a `hydration` cell, when present, replaces `water`.
    """
    df = pd.read_csv(csv_path)
    needed = CONFIG["required_columns"]
    missing = [c for c in needed if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing columns: {missing}")

    df["category"] = df["category"].map(normalize_token)
    df["kind"] = df["kind"].map(normalize_token)
    for c in CONFIG["ratio_columns"]:
        if c not in df.columns:
            df[c] = 0.0
        df[c] = pd.to_numeric(df[c], errors="coerce").fillna(0).astype(float)
    if "hydration" in df.columns:
        hydration = pd.to_numeric(df["hydration"], errors="coerce")
        has_hydration = hydration.notna()
        bad = has_hydration & ~((hydration >= 0) & (hydration < math.inf))
        if bad.any():
            raise ValueError(
                f"hydration must be a finite ratio >= 0 in rows: {df.loc[bad, 'name'].tolist()}")
        df.loc[has_hydration, "water"] = hydration[has_hydration].map(hydration_to_water_ratio)

    ingredients = []
    for _, row in df.iterrows():
        extra = {c: _text_or_none(row[c]) for c in OPTIONAL_TEXT_COLUMNS if c in df.columns}
        ingredient_id = _text_or_none(row["id"]) if "id" in df.columns else None
        ingredients.append(Ingredient(
            name=str(row["name"]).strip(),
            category=row["category"],
            kind=row["kind"],
            id=ingredient_id or new_ingredient_id(),
            **{c: float(row[c]) for c in CONFIG["ratio_columns"]},
            **extra,
        ))
    return ingredients

def find_ingredient(ingredients: Iterable[Ingredient], name: str) -> Ingredient:
    wanted = name.strip().lower()
    for ingredient in ingredients:
        if ingredient.name.lower() == wanted:
            return ingredient
    raise KeyError(name)
