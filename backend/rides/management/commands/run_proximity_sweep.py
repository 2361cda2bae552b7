from django.conf import settings
from django.core.management.base import BaseCommand

from services.proximity import IntervalTicker, ProximitySweep


class Command(BaseCommand):
    help = "Check driver/passenger proximity for every accepted or in-progress ride."

    def add_arguments(self, parser):
        parser.add_argument(
            "--loop",
            action="store_true",
            help="Keep sweeping until interrupted instead of running once.",
        )
        parser.add_argument(
            "--interval",
            type=int,
            default=settings.PROXIMITY_SWEEP_INTERVAL_SECONDS,
            help="Seconds between sweeps with --loop (default: PROXIMITY_SWEEP_INTERVAL_SECONDS).",
        )

    def handle(self, *args, **options):
        if options["loop"]:
            sweep = ProximitySweep(ticker=IntervalTicker(options["interval"]))
            self.stdout.write(f"Sweeping every {options['interval']}s. Press Ctrl+C to stop.")
            try:
                sweep.run_forever()
            except KeyboardInterrupt:
                sweep.stop()
            return

        summary = ProximitySweep().run_once()
        self.stdout.write(
            self.style.SUCCESS(
                f"Checked {summary.rides_checked} ride(s); sent {summary.notifications_sent} "
                f"notification(s); skipped {summary.rides_skipped}; failed {summary.rides_failed}."
            )
        )
