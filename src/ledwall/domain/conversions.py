"""Unit conversions used in reporting."""

from __future__ import annotations

FEET_PER_METER = 3.28084
INCHES_PER_METER = 39.3701
LBS_PER_KG = 2.20462


def meters_to_feet(meters: float) -> float:
    return meters * FEET_PER_METER


def feet_to_meters(feet: float) -> float:
    return feet / FEET_PER_METER


def meters_to_inches(meters: float) -> float:
    return meters * INCHES_PER_METER


def kg_to_lbs(kg: float) -> float:
    return kg * LBS_PER_KG


def round_to(value: float, decimals: int = 2) -> float:
    return round(value, decimals)


def feet_inches_label(meters: float) -> str:
    """Format a length as feet and whole inches, e.g. ``16' 5"``."""
    total_inches = round(meters_to_inches(meters))
    feet, inches = divmod(total_inches, 12)
    return f"{feet}' {inches}\""


def meters_to_display(meters: float) -> str:
    return f"{round_to(meters)} m / {round_to(meters_to_feet(meters))} ft"
