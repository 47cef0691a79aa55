import pytest
from rest_framework.test import APIClient


@pytest.mark.django_db
def test_inventory_and_service_health():
    client = APIClient()
    resp_inventory = client.get("/api/v1/inventory/health/")
    assert resp_inventory.status_code == 200
    assert resp_inventory.json() == {"status": "ok", "app": "inventory"}

    resp_service = client.get("/health/")
    assert resp_service.status_code == 200
    assert resp_service.json()["status"] == "ok"
    assert resp_service.json()["database"] == "sqlite"


# EOF
