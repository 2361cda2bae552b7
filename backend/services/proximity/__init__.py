"""
Proximity service.

This module handles:
    - Driver/passenger distance banding per ride
    - The periodic sweep over monitored rides
"""

from .evaluator import ProximityReport, classify_band, evaluate_proximity, evaluate_ride_proximity
from .sweep import IntervalTicker, ManualTicker, ProximitySweep, SweepSummary, Ticker

__all__ = [
    "ProximityReport",
    "classify_band",
    "evaluate_proximity",
    "evaluate_ride_proximity",
    "IntervalTicker",
    "ManualTicker",
    "ProximitySweep",
    "SweepSummary",
    "Ticker",
]
