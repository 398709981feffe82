"""Body-mass-index derivation."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

__all__ = ["BMI_CATEGORIES", "bmi_category", "compute_bmi"]

#: Upper bounds (exclusive) paired with their category; anything above is Obese.
BMI_CATEGORIES: tuple[tuple[float, str], ...] = (
    (18.5, "Underweight"),
    (25.0, "Normal"),
    (30.0, "Overweight"),
)

_ONE_DECIMAL = Decimal("0.1")


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def compute_bmi(weight: Any, height_cm: Any) -> str:
    """Return BMI for ``weight`` (kg) and ``height_cm`` to one decimal place.

    The result is a string so trailing zeros survive (``"22.0"``). Missing,
    zero, non-numeric or non-finite inputs yield ``""``, as does a quotient
    that cannot be represented. Ties round half up on the exact binary value
    of the quotient.
    """

    if not weight or not height_cm:
        return ""
    kilograms = _as_number(weight)
    centimeters = _as_number(height_cm)
    if not kilograms or not centimeters:
        return ""
    if not (math.isfinite(kilograms) and math.isfinite(centimeters)):
        return ""

    meters = centimeters / 100
    if not meters * meters:
        return ""
    bmi = kilograms / (meters * meters)
    if not math.isfinite(bmi):
        return ""
    try:
        return str(Decimal(bmi).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return ""


def bmi_category(bmi: Any) -> str:
    """Classify a BMI value; empty or non-numeric input yields ``""``."""

    if bmi is None or bmi == "":
        return ""
    value = _as_number(bmi)
    if value is None:
        return ""
    for upper_bound, label in BMI_CATEGORIES:
        if value < upper_bound:
            return label
    return "Obese"
