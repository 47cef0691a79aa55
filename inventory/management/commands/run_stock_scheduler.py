from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger
from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import close_old_connections
from inventory.engine import reconciliation_sweep


def reconcile_job():
    close_old_connections()
    try:
        reconciliation_sweep()
    finally:
        close_old_connections()


class Command(BaseCommand):
    help = "Run the stock status reconciliation sweep on a fixed interval until interrupted."

    def add_arguments(self, parser):
        parser.add_argument(
            "--minutes",
            type=int,
            default=None,
            help="Interval between sweeps (defaults to STOCK_RECONCILE_INTERVAL_MINUTES).",
        )

    def handle(self, *args, **options):
        minutes = options["minutes"] or settings.STOCK_RECONCILE_INTERVAL_MINUTES
        scheduler = BlockingScheduler(timezone=settings.TIME_ZONE)
        scheduler.add_job(
            reconcile_job,
            IntervalTrigger(minutes=minutes),
            id="stock_reconciliation",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.stdout.write(self.style.SUCCESS(f"Stock reconciliation scheduled every {minutes} minutes"))
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            if scheduler.running:
                scheduler.shutdown(wait=False)
            self.stdout.write("Scheduler stopped")
