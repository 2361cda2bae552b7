"""Periodic proximity sweep over every monitored ride."""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional

from django.conf import settings

from rides.models import Ride
from services.notifications import NotificationDebouncer

from .evaluator import evaluate_proximity

logger = logging.getLogger(__name__)


class Ticker:
    """Yields once per sweep. Iteration ending stops ``run_forever``."""

    def ticks(self) -> Iterator[int]:
        raise NotImplementedError

    def stop(self):
        pass


class IntervalTicker(Ticker):
    def __init__(self, seconds: Optional[float] = None):
        if seconds is None:
            seconds = settings.PROXIMITY_SWEEP_INTERVAL_SECONDS
        self.seconds = seconds
        self._stop_event = threading.Event()

    def ticks(self) -> Iterator[int]:
        count = 0
        while not self._stop_event.is_set():
            yield count
            count += 1
            if self._stop_event.wait(self.seconds):
                break

    def stop(self):
        self._stop_event.set()


class ManualTicker(Ticker):
    """Fixed number of immediate ticks."""

    def __init__(self, ticks: int = 1):
        self.count = ticks
        self.stopped = False

    def ticks(self) -> Iterator[int]:
        for tick in range(self.count):
            if self.stopped:
                return
            yield tick

    def stop(self):
        self.stopped = True


@dataclass
class SweepSummary:
    rides_checked: int = 0
    notifications_sent: int = 0
    rides_skipped: int = 0
    rides_failed: int = 0


class ProximitySweep:
    def __init__(self, ticker: Optional[Ticker] = None, debouncer: Optional[NotificationDebouncer] = None):
        self.ticker = ticker or IntervalTicker()
        self.debouncer = debouncer or NotificationDebouncer()

    def run_once(self, now: Optional[datetime] = None) -> SweepSummary:
        summary = SweepSummary()

        for ride in Ride.objects.active().order_by("requested_at"):
            summary.rides_checked += 1
            try:
                report = evaluate_proximity(ride, debouncer=self.debouncer, now=now)
            except Exception:
                logger.exception("Proximity check failed for ride %s", ride.ride_id)
                summary.rides_failed += 1
                continue

            if not report.evaluated:
                summary.rides_skipped += 1
            summary.notifications_sent += len(report.notifications_sent)

        if summary.rides_checked:
            logger.info(
                "Proximity sweep checked %s rides, sent %s, skipped %s, failed %s",
                summary.rides_checked,
                summary.notifications_sent,
                summary.rides_skipped,
                summary.rides_failed,
            )
        return summary

    def run_forever(self) -> int:
        """Sweep on every tick until the ticker runs out. Returns the sweep count."""
        sweeps = 0
        for _ in self.ticker.ticks():
            try:
                self.run_once()
            except Exception:
                # A failed tick is retried on the next one
                logger.exception("Proximity sweep encountered an error")
            sweeps += 1
        return sweeps

    def stop(self):
        self.ticker.stop()
