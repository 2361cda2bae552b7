"""Displacement-based fare rule used for quotes and completed rides."""

import math

BASE_FARE = 20.0
BASE_DISTANCE_KM = 10.0
OVERAGE_RATE = 2.5
OVERAGE_BLOCK_KM = 5.0


def calculate_fare(displacement_km: float) -> float:
    """
    Fare in rand for a passenger travelling ``displacement_km`` from origin.

    Flat R20 up to 10 km, then R2.50 for every started 5 km block beyond it,
    rounded up to a whole rand.
    """
    if displacement_km <= BASE_DISTANCE_KM:
        return BASE_FARE

    overage_blocks = math.ceil((displacement_km - BASE_DISTANCE_KM) / OVERAGE_BLOCK_KM)
    return float(math.ceil(BASE_FARE + overage_blocks * OVERAGE_RATE))
