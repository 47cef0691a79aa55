from io import StringIO

import pytest
from common.choices import StockStatus
from django.core.management import call_command
from inventory.engine import reconciliation_sweep
from inventory.models import Item, StockLevel
from inventory.tests.factories import create_stocked_item
from locations.tests.factories import StockLocationFactory


@pytest.mark.django_db
def test_sweep_corrects_drifted_status_and_is_idempotent():
    wh = StockLocationFactory()
    drifted = create_stocked_item((wh, 0, 0, 0))
    manual = create_stocked_item((wh, 40, 0, 5))
    healthy = create_stocked_item((wh, 3, 0, 5))
    Item.objects.filter(pk=drifted.pk).update(stock_status=StockStatus.IN_STOCK)
    Item.objects.filter(pk=manual.pk).update(stock_status=StockStatus.DISCONTINUED)

    assert reconciliation_sweep() == 2
    statuses = dict(Item.objects.values_list("id", "stock_status"))
    assert statuses[drifted.id] == StockStatus.OUT_OF_STOCK
    assert statuses[manual.id] == StockStatus.IN_STOCK
    assert statuses[healthy.id] == StockStatus.LOW_STOCK

    assert reconciliation_sweep() == 0


@pytest.mark.django_db
def test_sweep_picks_up_levels_changed_outside_the_ledger():
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 10, 0, 2))
    StockLevel.objects.filter(item=item).update(current_stock=1)

    reconciliation_sweep()
    item.refresh_from_db()
    assert item.stock_status == StockStatus.LOW_STOCK


@pytest.mark.django_db
def test_reconcile_command_reports_count():
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 0, 0, 0))
    Item.objects.filter(pk=item.pk).update(stock_status=StockStatus.IN_STOCK)

    out = StringIO()
    call_command("reconcile_stock_status", stdout=out)
    assert "Items with corrected stock status: 1" in out.getvalue()


@pytest.mark.django_db
def test_scheduler_command_registers_single_interval_job(monkeypatch):
    from apscheduler.schedulers.blocking import BlockingScheduler

    captured = {}

    def fake_start(self, *args, **kwargs):
        captured["jobs"] = self.get_jobs()
        raise KeyboardInterrupt

    monkeypatch.setattr(BlockingScheduler, "start", fake_start)
    out = StringIO()
    call_command("run_stock_scheduler", "--minutes", "5", stdout=out)

    (job,) = captured["jobs"]
    assert job.id == "stock_reconciliation"
    assert job.max_instances == 1
    assert job.trigger.interval.total_seconds() == 300
    assert "every 5 minutes" in out.getvalue()
    assert "Scheduler stopped" in out.getvalue()


@pytest.mark.django_db(transaction=True)
def test_reconcile_job_runs_sweep():
    from inventory.management.commands.run_stock_scheduler import reconcile_job

    wh = StockLocationFactory()
    item = create_stocked_item((wh, 0, 0, 0))
    Item.objects.filter(pk=item.pk).update(stock_status=StockStatus.LOW_STOCK)

    reconcile_job()
    item.refresh_from_db()
    assert item.stock_status == StockStatus.OUT_OF_STOCK
