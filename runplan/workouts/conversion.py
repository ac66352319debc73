"""Unit conversion for device workouts - single source of truth.

Pace is minutes per kilometer throughout the compiler. Device goals are
either imperial (miles, mph) or metric (kilometers, km/h).

MPH_PACE_CONSTANT (37.28) approximates 60 / 1.609, i.e. minutes per hour
divided by kilometers per mile. It is kept as-is; the exact value
60 / 1.609344 = 37.282... differs in the third decimal.
"""

KM_TO_MILES = 0.621371
MPH_PACE_CONSTANT = 37.28
KMH_PACE_CONSTANT = 60.0

# Flat band around the target speed, in device speed units
SPEED_TOLERANCE = 1.0


def km_to_miles(distance_km: float) -> float:
    return distance_km * KM_TO_MILES


def miles_to_km(distance_miles: float) -> float:
    return distance_miles / KM_TO_MILES


def average_pace(pace_range: tuple[float, float]) -> float:
    """Midpoint of a (low, high) pace range in min/km.

    Raises:
        ValueError: If a bound is not positive or low > high
    """
    low, high = pace_range
    if low <= 0 or high <= 0:
        raise ValueError(f"Pace bounds must be positive, got {pace_range}")
    if low > high:
        raise ValueError(f"Pace range lower bound exceeds upper bound: {pace_range}")
    return (low + high) / 2


def pace_to_mph(pace_min_per_km: float) -> float:
    if pace_min_per_km <= 0:
        raise ValueError(f"Pace must be positive, got {pace_min_per_km}")
    return MPH_PACE_CONSTANT / pace_min_per_km


def pace_to_kmh(pace_min_per_km: float) -> float:
    if pace_min_per_km <= 0:
        raise ValueError(f"Pace must be positive, got {pace_min_per_km}")
    return KMH_PACE_CONSTANT / pace_min_per_km


def speed_band(speed: float, tolerance: float = SPEED_TOLERANCE) -> tuple[float, float]:
    """Flat +/- tolerance band around a speed (not proportional)."""
    return (speed - tolerance, speed + tolerance)
