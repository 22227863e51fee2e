from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from composition import Roles


class Aggregate(str, Enum):
    TOTAL_MASS = "total_mass"
    TOTAL_FLOUR = "total_flour"
    TOTAL_WATER = "total_water"
    TOTAL_LEAVENER = "total_leavener"
    TOTAL_SALT = "total_salt"
    TOTAL_WHEAT_PROTEINS = "total_wheat_proteins"


@dataclass(frozen=True)
class Target:
    """
    How much of a quantity to use.

    - neither set: free, the solver picks any feasible value
    - mass:  pinned to an absolute mass in grams
    - ratio: pinned to ratio x the role's reference aggregate

    Both may be set; both constraints are then emitted and a contradiction
    shows up as an infeasible problem.
    """
    mass: Optional[float] = None
    ratio: Optional[float] = None

    def __post_init__(self):
        if self.mass is not None and not self.mass >= 0:
            raise ValueError(f"target mass must be >= 0, got {self.mass}")
        if self.ratio is not None and not self.ratio >= 0:
            raise ValueError(f"target ratio must be >= 0, got {self.ratio}")

    @classmethod
    def free(cls) -> "Target":
        return cls()

    @classmethod
    def fixed_mass(cls, grams: float) -> "Target":
        return cls(mass=grams)

    @classmethod
    def fixed_ratio(cls, ratio: float) -> "Target":
        return cls(ratio=ratio)

    @property
    def is_free(self) -> bool:
        return self.mass is None and self.ratio is None

    def bounds(self, lower: Optional[float] = None) -> Tuple[Optional[float], Optional[float]]:
        """(lowBound, upBound) of the matching LP variable."""
        if self.mass is not None:
            return self.mass, self.mass
        return lower, None


def reference_aggregate(roles: Roles) -> Aggregate:
    # Starters are part water but bakers still count them as % of flour,
    # so the flour role is checked first.
    if roles.leavener or roles.flour:
        return Aggregate.TOTAL_FLOUR
    if roles.water:
        return Aggregate.TOTAL_WATER
    if roles.salt:
        return Aggregate.TOTAL_SALT
    return Aggregate.TOTAL_MASS
