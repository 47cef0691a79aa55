import pytest
from inventory.tests.factories import StockLevelFactory, UserFactory
from locations.models import StockLocation
from locations.tests.factories import StockLocationFactory
from rest_framework.test import APIClient


def _auth_client():
    client = APIClient()
    client.force_authenticate(user=UserFactory())
    return client


@pytest.mark.django_db
def test_list_locations_is_public(client):
    StockLocationFactory(name="Nairobi Main")
    StockLocationFactory(name="Athi River")

    resp = client.get("/api/v1/locations/")
    assert resp.status_code == 200
    names = [row["name"] for row in resp.json()["results"]]
    assert names == ["Athi River", "Nairobi Main"]


@pytest.mark.django_db
def test_create_location_requires_authentication():
    resp = APIClient().post("/api/v1/locations/", {"name": "WH1"}, format="json")
    assert resp.status_code in (401, 403)
    assert not StockLocation.objects.exists()


@pytest.mark.django_db
def test_create_location_and_duplicate_conflict():
    client = _auth_client()
    resp = client.post("/api/v1/locations/", {"name": "WH1", "city": "Nairobi"}, format="json")
    assert resp.status_code == 201
    assert resp.json()["name"] == "WH1"

    dup = client.post("/api/v1/locations/", {"name": "WH1"}, format="json")
    assert dup.status_code == 409
    assert "already exists" in dup.json()["detail"]


@pytest.mark.django_db
def test_location_detail_update_and_delete():
    client = _auth_client()
    loc = StockLocationFactory(name="WH1")

    resp = client.get(f"/api/v1/locations/{loc.id}/")
    assert resp.status_code == 200

    resp = client.patch(f"/api/v1/locations/{loc.id}/", {"county": "Machakos"}, format="json")
    assert resp.status_code == 200
    assert resp.json()["county"] == "Machakos"

    resp = client.delete(f"/api/v1/locations/{loc.id}/")
    assert resp.status_code == 204
    assert client.get(f"/api/v1/locations/{loc.id}/").status_code == 404


@pytest.mark.django_db
def test_delete_location_in_use_is_rejected():
    client = _auth_client()
    level = StockLevelFactory()

    resp = client.delete(f"/api/v1/locations/{level.location_id}/")
    assert resp.status_code == 400
    assert StockLocation.objects.filter(pk=level.location_id).exists()
