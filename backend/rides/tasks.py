"""Celery tasks for ride-related background processing."""

from celery import shared_task
import logging

logger = logging.getLogger(__name__)


@shared_task
def proximity_sweep_task():
    """
    Celery beat task: one proximity sweep over every monitored ride.

    Scheduled every PROXIMITY_SWEEP_INTERVAL_SECONDS. A failed sweep is
    logged and simply retried by the next beat.
    """
    from services.proximity import ProximitySweep

    try:
        summary = ProximitySweep().run_once()
    except Exception:
        logger.exception("Proximity sweep task failed")
        return None

    return {
        "rides_checked": summary.rides_checked,
        "notifications_sent": summary.notifications_sent,
        "rides_skipped": summary.rides_skipped,
        "rides_failed": summary.rides_failed,
    }
