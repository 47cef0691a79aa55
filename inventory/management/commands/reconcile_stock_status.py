from django.core.management.base import BaseCommand
from inventory.engine import reconciliation_sweep


class Command(BaseCommand):
    help = "Re-derive every item's stock status from its stock levels and fix any drift."

    def handle(self, *args, **options):
        updated = reconciliation_sweep()
        self.stdout.write(self.style.SUCCESS(f"Items with corrected stock status: {updated}"))
