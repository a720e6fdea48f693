"""Daily calorie and macro targets from biometrics and goals.

BMR uses the Mifflin-St Jeor equation. The result is scaled by a fixed
activity multiplier, adjusted for the goal and split into macros by a fixed
percentage of calories.
"""

from nutrisnap.domain.errors import NutritionInputError
from nutrisnap.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    Goal,
    GoalProfile,
    NutritionTargets,
    Sex,
)
from nutrisnap.domain.rounding import round_half_up

# Constant term of the equation per sex. "other" uses the mean of the two.
_SEX_OFFSETS = {
    Sex.MALE: 5.0,
    Sex.FEMALE: -161.0,
    Sex.OTHER: -78.0,
}

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.EXTREME: 1.9,
}

GOAL_FACTORS = {
    Goal.LOSE_WEIGHT: 0.85,
    Goal.MAINTAIN: 1.0,
    Goal.GAIN_MUSCLE: 1.10,
}

PROTEIN_SHARE = 0.3
CARBS_SHARE = 0.4
FAT_SHARE = 0.3

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


def compute_bmr(biometrics: BiometricProfile) -> float:
    """Return basal metabolic rate in kcal/day."""
    bmr = (
        10 * biometrics.weight_kg
        + 6.25 * biometrics.height_cm
        - 5 * biometrics.age_years
        + _SEX_OFFSETS[biometrics.sex]
    )
    if bmr <= 0:
        raise NutritionInputError("biometrics", f"BMR must be positive, got {bmr}")
    return bmr


def compute_tdee(bmr: float, activity_level: ActivityLevel) -> int:
    """Scale BMR by the activity multiplier."""
    return round_half_up(bmr * ACTIVITY_MULTIPLIERS[activity_level])


def adjust_for_goal(tdee: int, goal: Goal) -> int:
    """Apply the goal deficit or surplus."""
    if goal is Goal.MAINTAIN:
        return tdee
    return round_half_up(tdee * GOAL_FACTORS[goal])


def split_macros(calories: int) -> NutritionTargets:
    """Split calories into macro grams.

    Each gram figure is rounded on its own, so the macros may drift a few
    kcal from the calorie total.
    """
    return NutritionTargets(
        calories=calories,
        protein_g=round_half_up(calories * PROTEIN_SHARE / KCAL_PER_G_PROTEIN),
        carbs_g=round_half_up(calories * CARBS_SHARE / KCAL_PER_G_CARBS),
        fat_g=round_half_up(calories * FAT_SHARE / KCAL_PER_G_FAT),
    )


def compute_targets(
    biometrics: BiometricProfile, goals: GoalProfile
) -> NutritionTargets:
    """Compute daily nutrition targets for a profile."""
    bmr = compute_bmr(biometrics)
    tdee = compute_tdee(bmr, goals.activity_level)
    return split_macros(adjust_for_goal(tdee, goals.goal))
