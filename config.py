# ========================== CONFIGURATION ==========================

CONFIG = {
    # --- Composition ---
    "not_zero_threshold": 0.001,  # ratios at or below this count as "absent"

    # --- Solver Controls ---
    "tolerance": 0.001,            # relative tolerance of consistency checks (0.1%)
    "non_negative_masses": True,   # False = leave mass variables unbounded below
    "verbose_solver": False,       # True = show solver logs in console
    "solver_time_limit": None,     # seconds, None = no limit

    # --- Required columns in ingredients.csv ---
    "required_columns": ["name", "category", "kind"],
    "ratio_columns": ["proteins", "ash", "water", "sugar", "salt", "fat"],
}
# ===================================================================
