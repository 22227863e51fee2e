import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

import pulp

from composition import Ingredient, Roles, classify
from config import CONFIG
from targets import Aggregate, Target, reference_aggregate

logger = logging.getLogger(__name__)

# ====================================================================

@dataclass
class DoughProblem:
    """
    What the caller wants from a dough.

    `hydration` is water:flour and `salt_ratio` is salt:flour, both as
    fractions (0.75, not 75). `salt_ratio=None` leaves salt unconstrained.
    """
    hydration: float
    ingredients: List[Tuple[Ingredient, Target]]
    salt_ratio: Optional[float] = None
    mass: Target = field(default_factory=Target.free)
    flour: Target = field(default_factory=Target.free)
    wheat_proteins: Target = field(default_factory=Target.free)

    def __post_init__(self):
        self.ingredients = [(ingredient, target or Target.free())
                            for ingredient, target in self.ingredients]
        if not self.ingredients:
            raise ValueError("a dough needs at least one ingredient")
        if not (self.hydration >= 0 and math.isfinite(self.hydration)):
            raise ValueError(f"hydration must be a finite ratio >= 0, got {self.hydration}")
        if self.salt_ratio is not None and not 0 <= self.salt_ratio <= 1:
            raise ValueError(f"salt ratio must be within [0, 1], got {self.salt_ratio}")
        ids = [ingredient.id for ingredient, _ in self.ingredients]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"ingredients listed more than once: {duplicates}")


@dataclass(frozen=True)
class Dough:
    """Solved recipe. Masses in grams, ingredients in problem order."""
    flour: float
    water: float
    wheat_proteins: float
    ingredients: Tuple[Tuple[str, float], ...]

    def total_mass(self) -> float:
        return sum(mass for _, mass in self.ingredients)

    def hydration(self) -> float:
        """water:flour, NaN when there is no flour."""
        if self.flour == 0:
            return math.nan
        return self.water / self.flour

    def wheat_proteins_ratio(self) -> float:
        if self.flour == 0:
            return math.nan
        return self.wheat_proteins / self.flour

    def mass_of(self, ingredient_id: str) -> float:
        for id_, mass in self.ingredients:
            if id_ == ingredient_id:
                return mass
        raise KeyError(ingredient_id)

    def is_degenerate(self) -> bool:
        """True when the recipe is valid but yields next to nothing."""
        return self.total_mass() <= CONFIG["not_zero_threshold"]


@dataclass(frozen=True)
class Found:
    dough: Dough

    def __bool__(self):
        return True


@dataclass(frozen=True)
class NotFound:
    status: str  # solver status, e.g. "Infeasible" or "Unbounded"

    def __bool__(self):
        return False


DoughSolution = Union[Found, NotFound]

# ====================================================================
# Problem builder
# ====================================================================

@dataclass
class IngredientEntry:
    ingredient: Ingredient
    target: Target
    roles: Roles
    variable: pulp.LpVariable


@dataclass
class DoughModel:
    lp: pulp.LpProblem
    entries: List[IngredientEntry]
    aggregates: Dict[Aggregate, pulp.LpVariable]


def _mass_lower_bound() -> Optional[float]:
    return 0.0 if CONFIG["non_negative_masses"] else None

def _mass_variable(name: str, target: Target) -> pulp.LpVariable:
    low, up = target.bounds(lower=_mass_lower_bound())
    return pulp.LpVariable(name, lowBound=low, upBound=up)

def build_problem(problem: DoughProblem) -> DoughModel:
    lp = pulp.LpProblem("Dough", pulp.LpMinimize)

    # ---- Ingredient vars ----
    entries = []
    for i, (ingredient, target) in enumerate(problem.ingredients):
        entries.append(IngredientEntry(
            ingredient=ingredient,
            target=target,
            roles=classify(ingredient),
            variable=_mass_variable(f"ingredient_{i}", target),
        ))

    # ---- Aggregate vars ----
    recipe_targets = {
        Aggregate.TOTAL_MASS: problem.mass,
        Aggregate.TOTAL_FLOUR: problem.flour,
        Aggregate.TOTAL_WHEAT_PROTEINS: problem.wheat_proteins,
    }
    agg = {a: _mass_variable(a.value, recipe_targets.get(a, Target.free())) for a in Aggregate}

    # ---- Objective: tie-break only, later ingredients weigh more ----
    lp += pulp.lpSum((k + 1) * e.variable for k, e in enumerate(entries))

    # ---- Mass balance ----
    lp += agg[Aggregate.TOTAL_MASS] == pulp.lpSum(e.variable for e in entries), "sum_mass"
    lp += agg[Aggregate.TOTAL_FLOUR] == pulp.lpSum(
        e.ingredient.flour_ratio * e.variable for e in entries if e.roles.flour), "sum_flour"
    lp += agg[Aggregate.TOTAL_WATER] == pulp.lpSum(
        e.ingredient.water * e.variable for e in entries if e.roles.water), "sum_water"
    lp += agg[Aggregate.TOTAL_LEAVENER] == pulp.lpSum(
        e.variable for e in entries if e.roles.leavener), "sum_leavener"
    lp += agg[Aggregate.TOTAL_SALT] == pulp.lpSum(
        e.ingredient.salt * e.variable for e in entries if e.roles.salt), "sum_salt"
    lp += agg[Aggregate.TOTAL_WHEAT_PROTEINS] == pulp.lpSum(
        e.ingredient.proteins * e.variable for e in entries if e.roles.flour), "sum_wheat_proteins"

    # ---- Recipe ratios ----
    total_flour = agg[Aggregate.TOTAL_FLOUR]
    lp += agg[Aggregate.TOTAL_WATER] == problem.hydration * total_flour, "hydration"
    if problem.salt_ratio is not None:
        lp += agg[Aggregate.TOTAL_SALT] == problem.salt_ratio * total_flour, "salt_ratio"
    if problem.wheat_proteins.ratio is not None:
        lp += (agg[Aggregate.TOTAL_WHEAT_PROTEINS]
               == problem.wheat_proteins.ratio * total_flour), "wheat_proteins_ratio"

    # ---- Per-ingredient ratios ----
    for i, e in enumerate(entries):
        if e.target.ratio is None:
            continue
        reference = agg[reference_aggregate(e.roles)]
        lp += e.variable == e.target.ratio * reference, f"ingredient_{i}_ratio"

    return DoughModel(lp=lp, entries=entries, aggregates=agg)

# ====================================================================
# Solve + extraction
# ====================================================================

def _close(a: float, b: float) -> bool:
    tol = CONFIG["tolerance"]
    return math.isclose(a, b, rel_tol=tol, abs_tol=tol * CONFIG["not_zero_threshold"])

def extract_dough(model: DoughModel, problem: DoughProblem) -> Dough:
    agg = {a: v.varValue for a, v in model.aggregates.items()}
    dough = Dough(
        flour=agg[Aggregate.TOTAL_FLOUR],
        water=agg[Aggregate.TOTAL_WATER],
        wheat_proteins=agg[Aggregate.TOTAL_WHEAT_PROTEINS],
        ingredients=tuple((e.ingredient.id, e.variable.varValue) for e in model.entries),
    )

    assert _close(dough.total_mass(), agg[Aggregate.TOTAL_MASS]), \
        f"total mass {dough.total_mass()} != solved {agg[Aggregate.TOTAL_MASS]}"
    if dough.flour > CONFIG["not_zero_threshold"]:
        assert _close(dough.hydration(), problem.hydration), \
            f"hydration {dough.hydration()} != target {problem.hydration}"
        if problem.wheat_proteins.ratio is not None:
            assert _close(dough.wheat_proteins_ratio(), problem.wheat_proteins.ratio), \
                f"wheat proteins ratio {dough.wheat_proteins_ratio()} != target {problem.wheat_proteins.ratio}"
    return dough

def solve(problem: DoughProblem) -> DoughSolution:
    model = build_problem(problem)
    logger.debug("Problem: %s", model.lp)

    status = model.lp.solve(pulp.PULP_CBC_CMD(msg=CONFIG["verbose_solver"],
                                              timeLimit=CONFIG["solver_time_limit"]))
    if pulp.LpStatus[status] != "Optimal":
        logger.warning("No dough satisfies the targets: %s", pulp.LpStatus[status])
        return NotFound(pulp.LpStatus[status])

    dough = extract_dough(model, problem)
    logger.debug("Solution: %s", dough)
    return Found(dough)

# ====================================================================

def format_dough(dough: Dough, ingredients: Iterable[Ingredient]) -> str:
    names = {i.id: i.name for i in ingredients}
    parts = [
        "Dough",
        f"{'Total':<20}: {dough.total_mass():.0f} g",
        f"{'Flour':<20}: {dough.flour:.0f} g",
        f"{'Water':<20}: {dough.water:.0f} g",
        f"{'Wheat proteins':<20}: {dough.wheat_proteins:.0f} g",
    ]
    for id_, mass in dough.ingredients:
        parts.append(f"  {names.get(id_, id_):<18}: {mass:.0f} g")
    return "\n".join(parts)
