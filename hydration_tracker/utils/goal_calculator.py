"""
Daily water goal calculation

Goal = body weight (kg) x per-kg rate, reported in ml, L and oz.
Rates: 35 ml/kg for men, 31 ml/kg for women.

Rounding follows the mobile app exactly (half rounds up), including the
liters value which is rounded to the nearest 100 ml before scaling:
2450 ml -> 2.5 L, not 2.45 L. Stored goals depend on this, so keep it.
"""
import logging
import math
from typing import Optional

from hydration_tracker.models.profile import Gender, WaterGoal, WeightUnit

logger = logging.getLogger(__name__)

LBS_PER_KG = 2.20462
ML_PER_OZ = 29.5735

ML_PER_KG_BY_GENDER = {
    Gender.MALE: 35,
    Gender.FEMALE: 31,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)"""
    return math.floor(value + 0.5)


def weight_to_kg(weight: float, weight_unit: WeightUnit) -> float:
    if weight_unit == WeightUnit.LBS:
        return weight / LBS_PER_KG
    return weight


def ml_per_kg(gender: Gender, unspecified_rate: Optional[Gender] = None) -> int:
    """
    Per-kilogram rate for a gender.

    Args:
        gender: Profile gender
        unspecified_rate: Which rate (MALE or FEMALE) applies when gender is
            UNSPECIFIED. Required in that case.

    Raises:
        ValueError: gender is UNSPECIFIED and no rate policy was given
    """
    if gender == Gender.UNSPECIFIED:
        if unspecified_rate not in ML_PER_KG_BY_GENDER:
            raise ValueError(
                "Gender is unspecified: pass unspecified_rate=Gender.MALE or Gender.FEMALE"
            )
        logger.debug(f"Unspecified gender using {unspecified_rate.value} rate")
        return ML_PER_KG_BY_GENDER[unspecified_rate]
    return ML_PER_KG_BY_GENDER[gender]


def compute_goal(
    weight: float,
    weight_unit: WeightUnit,
    gender: Gender,
    unspecified_rate: Optional[Gender] = None,
) -> WaterGoal:
    """
    Compute the daily water goal.

    Example:
        >>> compute_goal(70, WeightUnit.KG, Gender.MALE)
        WaterGoal(milliliters=2450.0, liters=2.5, ounces=82.8)
    """
    kg = weight_to_kg(weight, weight_unit)
    rate = ml_per_kg(gender, unspecified_rate)

    milliliters = round_half_up(kg * rate * 10) / 10
    liters = round_half_up(milliliters / 100) / 10
    ounces = round_half_up(milliliters / ML_PER_OZ * 10) / 10

    return WaterGoal(milliliters=milliliters, liters=liters, ounces=ounces)
